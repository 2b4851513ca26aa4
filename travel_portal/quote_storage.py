"""
Where quote PDFs live once accepted.

Each strategy takes the raw bytes and returns the reference written onto
the request's ``quote_pdf_url``: a data URL for inline storage, or an
absolute download URL for the directory blob store.
"""

import base64
import logging
import os
import time
from abc import ABC, abstractmethod

from flask import url_for
from werkzeug.utils import secure_filename

from .errors import StorageError, ValidationError

logger = logging.getLogger(__name__)

PDF_MIMETYPE = "application/pdf"


class QuoteStorage(ABC):
    name = None
    # Directory the quotes endpoint serves from, None when quotes live on the row
    directory = None

    @abstractmethod
    def save(self, request_id, data: bytes) -> str:
        """Persist the bytes and return the reference for quote_pdf_url."""


class InlineQuoteStorage(QuoteStorage):
    name = "inline"

    def __init__(self, max_bytes):
        self.max_bytes = max_bytes

    def save(self, request_id, data):
        if len(data) > self.max_bytes:
            raise ValidationError(
                f"File too large for current storage ({self.max_bytes // (1024 * 1024)}MB limit). "
                "Configure QUOTE_STORAGE_DIR to store larger quotes."
            )
        encoded = base64.b64encode(data).decode("ascii")
        return f"data:{PDF_MIMETYPE};base64,{encoded}"


def _quote_url(filename):
    return url_for("quotes.get_quote", filename=filename, _external=True)


class DirectoryQuoteStorage(QuoteStorage):
    name = "directory"

    def __init__(self, directory, url_builder=_quote_url):
        self.directory = os.path.abspath(directory)
        self.url_builder = url_builder

    def filename_for(self, request_id):
        return secure_filename(f"quote-{request_id}-{int(time.time() * 1000)}.pdf")

    def save(self, request_id, data):
        filename = self.filename_for(request_id)
        try:
            os.makedirs(self.directory, exist_ok=True)
            with open(os.path.join(self.directory, filename), "wb") as fh:
                fh.write(data)
        except OSError as e:
            raise StorageError("Storage error: could not store quote file") from e
        logger.info("Stored quote for travel request #%s as %s", request_id, filename)
        return self.url_builder(filename)


def build_quote_storage(config):
    """Pick the strategy from QUOTE_STORAGE (auto / inline / directory)."""
    mode = (config.get("QUOTE_STORAGE") or "auto").lower()
    directory = config.get("QUOTE_STORAGE_DIR")

    if mode == "auto":
        mode = "directory" if directory else "inline"

    if mode == "inline":
        return InlineQuoteStorage(config.get("QUOTE_INLINE_MAX_BYTES"))
    if mode == "directory":
        if not directory:
            raise ValueError("QUOTE_STORAGE=directory requires QUOTE_STORAGE_DIR")
        return DirectoryQuoteStorage(directory)
    raise ValueError(f"Unknown QUOTE_STORAGE '{mode}'. Allowed: auto, inline, directory")
