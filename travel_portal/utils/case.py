import re

_SNAKE_SEGMENT = re.compile(r"_([a-z0-9])")
_CAMEL_HUMP = re.compile(r"(?<!^)(?=[A-Z])")


def to_camel(name: str) -> str:
    return _SNAKE_SEGMENT.sub(lambda m: m.group(1).upper(), name)


def to_snake(name: str) -> str:
    return _CAMEL_HUMP.sub("_", name).lower()


def camelize_keys(row: dict) -> dict:
    """Row (snake_case) -> API payload (camelCase). Values are untouched."""
    return {to_camel(k): v for k, v in row.items()}

