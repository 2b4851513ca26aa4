"""
Travel request status workflow.

WAITING_FOR_QUOTE -> PENDING -> APPROVED | REJECTED

Transitions are a plain field write: the target must be a known status, but
it is not checked against the current one. Any status can be set from any
other, including moving an approved request back to WAITING_FOR_QUOTE.
"""

from enum import Enum

from .errors import ValidationError


class TravelRequestStatus(str, Enum):
    WAITING_FOR_QUOTE = "WAITING_FOR_QUOTE"
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class TripType(str, Enum):
    ONE_WAY = "ONE_WAY"
    RETURN = "RETURN"
    MULTI_LEG = "MULTI_LEG"


INITIAL_STATUS = TravelRequestStatus.WAITING_FOR_QUOTE.value
STATUSES = [s.value for s in TravelRequestStatus]
TRIP_TYPES = [t.value for t in TripType]


def parse_status(value):
    if value not in STATUSES:
        raise ValidationError(f"Invalid status. Allowed: {', '.join(STATUSES)}")
    return value


def set_status(store, request_id, status):
    """Write ``status`` onto the request, whatever its current status is."""
    return store.update(request_id, {"status": parse_status(status)})


def partition_by_status(records):
    """Split one fetched collection into per-status lists, keeping order."""
    groups = {status: [] for status in STATUSES}
    for record in records:
        groups.setdefault(record.get("status"), []).append(record)
    return groups
