from ..errors import ValidationError


def _blank(value):
    if isinstance(value, str):
        return not value.strip()
    return value in (None, [])


def missing_fields(data: dict, fields: list):
    return [f for f in fields if f not in data or _blank(data.get(f))]


def require_fields(data: dict, fields: list):
    missing = missing_fields(data, fields)
    if missing:
        raise ValidationError(
            f"Missing required fields: {' and '.join(missing)} "
            f"{'is' if len(missing) == 1 else 'are'} required"
        )
