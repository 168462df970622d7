"""
API error handling.

Maps domain exceptions to HTTP responses with the error page catalogue
body: {title, message, errorId}. Validation failures carry the field
errors so the form can show them inline.

Dependencies: fastapi, voicecraft.core
System role: Consistent error responses across routers
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from voicecraft.core.error_catalog import generate_error_id, get_error_type
from voicecraft.core.exceptions import (
    AuthenticationError,
    DeleteError,
    DownloadLinkError,
    JobNotFoundError,
    JobsApiError,
    TransientNetworkError,
    UploadError,
    ValidationError,
    VoiceCraftException,
)

logger = logging.getLogger(__name__)


def error_response(
    status_code: int,
    category: str,
    message: str | None = None,
    extra: dict | None = None,
) -> JSONResponse:
    """Build a catalogue error body for a status and category."""
    error_type = get_error_type(category)
    body = {
        "title": error_type.title,
        "message": message or error_type.message,
        "errorId": generate_error_id(),
    }
    if extra:
        body.update(extra)
    return JSONResponse(status_code=status_code, content=body)


# Most specific first; the first match wins
_STATUS_MAP: list[tuple[type[VoiceCraftException], int, str]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST, "generic"),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED, "401"),
    (JobNotFoundError, status.HTTP_404_NOT_FOUND, "404"),
    (UploadError, status.HTTP_502_BAD_GATEWAY, "file"),
    (DeleteError, status.HTTP_502_BAD_GATEWAY, "generic"),
    (DownloadLinkError, status.HTTP_502_BAD_GATEWAY, "generic"),
    (TransientNetworkError, status.HTTP_504_GATEWAY_TIMEOUT, "timeout"),
    (JobsApiError, status.HTTP_502_BAD_GATEWAY, "500"),
]


async def handle_voicecraft_exception(request: Request, exc: VoiceCraftException) -> JSONResponse:
    """Translate a domain exception into its HTTP response."""
    for exc_type, status_code, category in _STATUS_MAP:
        if isinstance(exc, exc_type):
            break
    else:
        status_code, category = status.HTTP_500_INTERNAL_SERVER_ERROR, "500"

    extra = None
    if isinstance(exc, ValidationError):
        extra = {"field": exc.field, "errors": exc.details.get("errors")}

    log = logger.warning if status_code < 500 else logger.error
    log(
        "Request failed",
        extra={
            "path": request.url.path,
            "status_code": status_code,
            "error_type": type(exc).__name__,
            "error": str(exc),
        },
    )
    return error_response(status_code, category, exc.message, extra)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(VoiceCraftException, handle_voicecraft_exception)
