"""
Airport reference data for the origin/destination pickers.

The list comes from the public mwgg/Airports dataset, a JSON object keyed by
ICAO code. Only entries with an IATA code and a name are kept.
"""

import logging
import threading
import time
from dataclasses import dataclass, asdict

import requests

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 10


@dataclass(frozen=True)
class Airport:
    code: str
    name: str
    city: str = ""
    country: str = ""

    def to_dict(self):
        return asdict(self)


def parse_airports(data: dict):
    airports = []
    for entry in (data or {}).values():
        if not isinstance(entry, dict):
            continue
        code = entry.get("iata")
        name = entry.get("name")
        if not code or not name:
            continue
        airports.append(Airport(
            code=code,
            name=name,
            city=entry.get("city") or "",
            country=entry.get("country") or "",
        ))
    airports.sort(key=lambda a: a.code)
    return airports


def search_airports(airports, query, limit=SEARCH_LIMIT):
    if not query:
        return list(airports[:limit])
    q = query.strip().lower()
    matches = [
        a for a in airports
        if q in a.code.lower() or q in a.name.lower() or q in a.city.lower()
    ]
    return matches[:limit]


class AirportDirectory:
    """Downloads the airport list once and serves lookups from memory.

    After a failed download, lookups return nothing for ``retry_after``
    seconds before the next attempt.
    """

    def __init__(self, url, enabled=True, timeout=20, retry_after=300, session=None):
        self.url = url
        self.enabled = enabled
        self.timeout = timeout
        self.retry_after = retry_after
        self.session = session or requests.Session()
        self._airports = None
        self._failed_at = None
        self._lock = threading.Lock()

    def _backing_off(self):
        return self._failed_at is not None and time.monotonic() - self._failed_at < self.retry_after

    def all(self):
        if self._airports is None and self.enabled and not self._backing_off():
            with self._lock:
                if self._airports is None and not self._backing_off():
                    self._airports = self._load()
                    self._failed_at = time.monotonic() if self._airports is None else None
        return self._airports or []

    def _load(self):
        try:
            response = self.session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            airports = parse_airports(response.json())
        except (requests.RequestException, ValueError) as e:
            logger.error("Failed to load airports from %s: %s (retrying in %ss)", self.url, e, self.retry_after)
            return None
        logger.info("Loaded %d airports", len(airports))
        return airports

    def search(self, query, limit=SEARCH_LIMIT):
        return search_airports(self.all(), query, limit)

    def find(self, code):
        if not code:
            return None
        code = code.strip().upper()
        for airport in self.all():
            if airport.code == code:
                return airport
        return None
