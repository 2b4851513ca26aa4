import logging

from flask import current_app

from .errors import ValidationError
from .quote_storage import PDF_MIMETYPE
from .utils.case import to_snake
from .utils.notification_utils import notify_new_request
from .utils.validators import require_fields
from .workflow import TRIP_TYPES, TripType

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ["employeeName", "startDate"]

TEXT_FIELDS = [
    "employeeName", "startDate", "endDate",
    "fromAirportCode", "fromAirportName", "toAirportCode", "toAirportName",
    "pickupLocation", "dropoffLocation", "pickupTime", "returnPickupTime",
    "notes",
]
FLAG_FIELDS = ["needsFlights", "needsAccommodation", "needsTransport"]

MAX_PASSENGER_COUNT = 500

INVALID_FILE_MESSAGE = "Invalid file. Please upload a PDF file."


def _text(value):
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _flag(value):
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _passenger_count(value):
    try:
        count = int(value)
    except (TypeError, ValueError, OverflowError):
        return 1
    if count > MAX_PASSENGER_COUNT:
        raise ValidationError(f"passengerCount must be between 1 and {MAX_PASSENGER_COUNT}")
    return max(1, count)


def normalize_submission(data: dict) -> dict:
    """camelCase submission -> snake_case row fields, with defaults applied."""
    require_fields(data, REQUIRED_FIELDS)

    trip_type = _text(data.get("tripType")) or TripType.ONE_WAY.value
    if trip_type not in TRIP_TYPES:
        raise ValidationError(f"Invalid tripType. Allowed: {', '.join(TRIP_TYPES)}")

    fields = {to_snake(name): _text(data.get(name)) for name in TEXT_FIELDS}
    fields.update({to_snake(name): _flag(data.get(name)) for name in FLAG_FIELDS})
    fields["trip_type"] = trip_type
    fields["passenger_count"] = _passenger_count(data.get("passengerCount", 1))

    if trip_type == TripType.ONE_WAY.value or not fields["end_date"]:
        fields["end_date"] = fields["start_date"]
    return fields


def submit_request(store, data: dict, config=None) -> dict:
    """Create a request in WAITING_FOR_QUOTE and fire the new-request email."""
    record = store.create(normalize_submission(data))

    config = config if config is not None else current_app.config
    notify_new_request(config, record, data.get("travelMode") or "FLIGHT")
    return record


def attach_quote(store, storage, request_id, data, mimetype, max_bytes=None) -> dict:
    """Store a PDF quote and link it to the request. Status is left alone."""
    if data is None or mimetype != PDF_MIMETYPE:
        raise ValidationError(INVALID_FILE_MESSAGE)
    if max_bytes is not None and len(data) > max_bytes:
        raise ValidationError(f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB.")

    # Raises NotFound before any bytes are written
    store.get(request_id)

    reference = storage.save(request_id, data)
    logger.info("Attached quote to travel request #%s (%s, %d bytes)", request_id, storage.name, len(data))
    return store.update(request_id, {"quote_pdf_url": reference})
