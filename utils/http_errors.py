"""Translate studio failures into `{error, details?}` JSON responses."""

import logging

from fastapi.responses import JSONResponse

from services.errors import StudioError, error_message

LOGGER = logging.getLogger(__name__)


def error_response(exc: StudioError) -> JSONResponse:
    """Return the JSON response for a typed studio failure."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


def unexpected_error_response(exc: Exception, message: str) -> JSONResponse:
    """Return a 500 response for an exception that escaped the service layer."""
    LOGGER.exception("Unhandled error: %s", message)
    return JSONResponse(status_code=500, content={"error": message, "details": error_message(exc)})
