"""
Request store: persistence for travel request records.

Records cross this boundary as plain snake_case dicts so handlers never see
ORM objects and the backend can be swapped through configuration.
"""

import copy
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from .errors import NotFound, StorageError
from .models import db, TravelRequest
from .workflow import INITIAL_STATUS

logger = logging.getLogger(__name__)

PROTECTED_FIELDS = ("id", "created_at")

SAVE_FAILED = "Database error: could not save travel request"
LOAD_FAILED = "Database error: could not load travel requests"


class RequestStore(ABC):

    @abstractmethod
    def create(self, fields):
        """Assign an id, set the initial status and return the full record."""

    @abstractmethod
    def list(self):
        """Return every record."""

    @abstractmethod
    def get(self, request_id):
        """Return one record or raise NotFound."""

    @abstractmethod
    def update(self, request_id, partial):
        """Merge ``partial`` into the record and return it, or raise NotFound."""


class SqlAlchemyRequestStore(RequestStore):
    """Store backed by the ``travel_requests`` table."""

    def __init__(self, database=db):
        self.db = database

    def create(self, fields):
        values = {k: v for k, v in fields.items() if k not in PROTECTED_FIELDS}
        values["status"] = INITIAL_STATUS
        values["quote_pdf_url"] = None
        row = TravelRequest(**values)
        try:
            self.db.session.add(row)
            self.db.session.commit()
        except SQLAlchemyError as e:
            self.db.session.rollback()
            raise StorageError(SAVE_FAILED) from e
        logger.info("Created travel request #%s for %s", row.id, row.employee_name)
        return row.to_dict()

    def list(self):
        try:
            rows = TravelRequest.query.order_by(
                TravelRequest.created_at.desc(), TravelRequest.id.desc()
            ).all()
        except SQLAlchemyError as e:
            raise StorageError(LOAD_FAILED) from e
        return [r.to_dict() for r in rows]

    def _get_row(self, request_id):
        try:
            row = self.db.session.get(TravelRequest, request_id)
        except SQLAlchemyError as e:
            raise StorageError(LOAD_FAILED) from e
        if row is None:
            raise NotFound()
        return row

    def get(self, request_id):
        return self._get_row(request_id).to_dict()

    def update(self, request_id, partial):
        row = self._get_row(request_id)
        for key, value in partial.items():
            if key in PROTECTED_FIELDS:
                continue
            setattr(row, key, value)
        try:
            self.db.session.commit()
        except SQLAlchemyError as e:
            self.db.session.rollback()
            raise StorageError(SAVE_FAILED) from e
        return row.to_dict()


class InMemoryRequestStore(RequestStore):
    """Process-local store. No locking: concurrent updates race, last write wins."""

    def __init__(self):
        self._records = []
        self._next_id = 1

    def create(self, fields):
        record = {k: v for k, v in fields.items() if k not in PROTECTED_FIELDS}
        record.update(
            id=self._next_id,
            status=INITIAL_STATUS,
            quote_pdf_url=None,
            created_at=datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        )
        self._next_id += 1
        self._records.append(record)
        logger.info("Created travel request #%s for %s", record["id"], record.get("employee_name"))
        return copy.deepcopy(record)

    def list(self):
        return [copy.deepcopy(r) for r in self._records]

    def _find(self, request_id):
        for record in self._records:
            if record["id"] == request_id:
                return record
        raise NotFound()

    def get(self, request_id):
        return copy.deepcopy(self._find(request_id))

    def update(self, request_id, partial):
        record = self._find(request_id)
        record.update({k: v for k, v in partial.items() if k not in PROTECTED_FIELDS})
        return copy.deepcopy(record)


STORES = {
    "sqlalchemy": SqlAlchemyRequestStore,
    "memory": InMemoryRequestStore,
}


def build_store(name):
    try:
        return STORES[name]()
    except KeyError:
        raise ValueError(f"Unknown REQUEST_STORE '{name}'. Allowed: {', '.join(STORES)}") from None


def get_store():
    return current_app.extensions["request_store"]
