import logging

from werkzeug.exceptions import HTTPException

from .utils.responses import fail

logger = logging.getLogger(__name__)


class TravelPortalError(Exception):
    status_code = 500
    default_message = "Unexpected error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(TravelPortalError):
    """Missing required field, wrong file type, oversized upload."""
    status_code = 400
    default_message = "Validation failed"


class NotFound(TravelPortalError):
    status_code = 404
    default_message = "Not found"


class StorageError(TravelPortalError):
    """Persistence failure in the request store or the quote blob store."""
    status_code = 500
    default_message = "Storage error"


def register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def handle_validation(exc):
        return fail(exc.message, 400)

    @app.errorhandler(NotFound)
    def handle_not_found(exc):
        return fail(exc.message, 404)

    @app.errorhandler(StorageError)
    def handle_storage(exc):
        # Driver and filesystem detail stays in the log
        logger.error("%s (%s)", exc.message, exc.__cause__ or "no cause")
        return fail(exc.message, 500)

    @app.errorhandler(HTTPException)
    def handle_http(exc):
        return fail(exc.description or exc.name, exc.code)

    @app.errorhandler(Exception)
    def handle_unexpected(exc):
        if isinstance(exc, HTTPException):
            return handle_http(exc)
        logger.exception("Unhandled error")
        return fail(f"Internal server error: {str(exc) or 'Unknown error'}", 500)
