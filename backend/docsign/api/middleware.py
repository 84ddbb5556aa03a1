from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge
from docsign.schemas.error import ErrorResponse
from docsign.utils.exceptions import DocSignError
import logging
import uuid

logger = logging.getLogger(__name__)


def _error_response(status_code: int, **error):
    body = ErrorResponse(request_id=str(uuid.uuid4()), **error)
    return jsonify(body.model_dump()), status_code


def register_error_handlers(app: Flask) -> None:
    """Convert exceptions raised by views into structured error responses."""

    @app.errorhandler(DocSignError)
    def handle_docsign_error(e: DocSignError):
        logger.warning(f"DocSign Error: {e.code} - {e.message}")
        return _error_response(
            e.status_code,
            error=e.message,
            code=e.code,
            field=e.field,
            details=e.details
        )

    @app.errorhandler(RequestEntityTooLarge)
    def handle_body_too_large(e: RequestEntityTooLarge):
        limit = app.config.get("MAX_CONTENT_LENGTH")
        logger.warning(f"Request body over limit ({limit} bytes)")
        return _error_response(
            413,
            error="Request body is too large",
            code="PAYLOAD_TOO_LARGE",
            details={"limit": limit}
        )

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        # Remaining Werkzeug errors (404, 405, ...) in the same shape
        logger.warning(f"HTTP Exception: {e.code} - {e.description}")
        return _error_response(
            e.code or 500,
            error=e.description or e.name,
            code="HTTP_EXCEPTION",
            details={"status_code": e.code}
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(e: Exception):
        # Catch-all for unexpected errors
        logger.error(f"Unexpected error: {str(e)}", exc_info=True)
        return _error_response(
            500,
            error="An unexpected error occurred",
            code="INTERNAL_SERVER_ERROR",
            details={"error_type": type(e).__name__}
        )
