"""
Logging setup shared by the app factory and the maintenance scripts.

Format: 2026-01-06T14:05:52Z [travel-portal] LEVEL message
"""

import logging
import sys
from datetime import datetime, timezone


class ISO8601Formatter(logging.Formatter):
    """Formatter producing ISO8601 timestamps in UTC."""

    def __init__(self, source="travel-portal"):
        self.source = source
        super().__init__()

    def format(self, record):
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return f"{timestamp} [{self.source}] {record.levelname} {message}"


def configure_logging(level="INFO", source="travel-portal"):
    """Install a single stdout handler on the root logger.

    Calling it again replaces the handler instead of stacking a new one.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_travel_portal", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ISO8601Formatter(source))
    handler._travel_portal = True
    root.addHandler(handler)
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))

