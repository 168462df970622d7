"""
FastAPI middleware for observability.

Request logging with a per-request ID. The hosted UI callback carries a
one-time authorization code in its query string, so sensitive query
parameters are masked before they are logged.

Dependencies: fastapi, starlette
System role: Request/response observability injection
"""

import logging
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from voicecraft.observability.log_utils import log_exception_with_context, mask_secret

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
SENSITIVE_PARAMS = frozenset({"code", "token", "id_token", "access_token"})
QUIET_PATHS = frozenset({"/api/v1/health"})


def masked_query(request: Request) -> str | None:
    """Query string with sensitive values masked, or None when empty."""
    if not request.query_params:
        return None
    return "&".join(
        f"{key}={mask_secret(value) if key in SENSITIVE_PARAMS else value}"
        for key, value in request.query_params.multi_items()
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request and its outcome, and echoes a request ID header."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        path = request.url.path
        level = logging.DEBUG if path in QUIET_PATHS else logging.INFO
        started = time.perf_counter()

        logger.log(
            level,
            f"{request.method} {path}",
            extra={"request_id": request_id, "query": masked_query(request)},
        )

        try:
            response: Response = await call_next(request)
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{request.method} {path} - unhandled",
                e,
                request_id=request_id,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            raise

        logger.log(
            level,
            f"{request.method} {path} - {response.status_code}",
            extra={
                "request_id": request_id,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
