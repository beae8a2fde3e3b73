"""API middleware - CORS, request logging, and error handling.

# ─── MIDDLEWARE EXECUTION ORDER ──────────────────────────────────────
#
# Starlette middleware is a stack (last added, first executed):
#
#   In main.py:
#     app.add_middleware(ErrorHandlingMiddleware)    # inner
#     app.add_middleware(RequestLoggingMiddleware)   # wraps it
#     configure_cors(app, ...)                       # outermost
#
#   Request flow:
#     Client → CORS → RequestLogging → ErrorHandling → route handler
#
# So RequestLoggingMiddleware sees the final status code, including
# errors ErrorHandlingMiddleware converted to JSON.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import time
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from newsfeed.api.schemas import ErrorResponse
from newsfeed.utils.errors import NewsFeedError
from newsfeed.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

_ALLOWED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
_ALLOWED_HEADERS = ["Content-Type", "Authorization"]
_REQUEST_ID_HEADER = "X-Request-ID"


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------


def configure_cors(
    app: FastAPI,
    *,
    allowed_origins: list[str] | None = None,
    allow_any_origin: bool = False,
) -> None:
    """Add CORS middleware to the FastAPI application.

    Parameters
    ----------
    app:
        The FastAPI application instance.
    allowed_origins:
        Origins allowed to make credentialed requests.
    allow_any_origin:
        Echo back any request origin (development).  A literal ``*`` is
        not usable here because the session cookie needs credentialed
        CORS, so a match-all regex is used instead.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins or [],
        allow_origin_regex=".*" if allow_any_origin else None,
        allow_credentials=True,
        allow_methods=_ALLOWED_METHODS,
        allow_headers=_ALLOWED_HEADERS,
    )


# ---------------------------------------------------------------------------
# Request Logging
# ---------------------------------------------------------------------------


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status code, and duration.

    A short request id (taken from ``X-Request-ID`` when the client sends
    one) is bound to structlog's context for the duration of the request
    and echoed back in the response header.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get(_REQUEST_ID_HEADER) or uuid4().hex[:12]
        structlog.contextvars.bind_contextvars(request_id=request_id)
        start = time.perf_counter()
        response: Response | None = None

        try:
            response = await call_next(request)
            response.headers[_REQUEST_ID_HEADER] = request_id
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            status_code = response.status_code if response else 500
            _logger.info(
                "http_request",
                method=request.method,
                path=str(request.url.path),
                status=status_code,
                duration_ms=duration_ms,
            )
            structlog.contextvars.unbind_contextvars("request_id")


# ---------------------------------------------------------------------------
# Error Handling
# ---------------------------------------------------------------------------


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Turn exceptions into ``{"error": ...}`` JSON responses.

    ``NewsFeedError`` subclasses keep their message and map to their
    ``status_code``.  Anything else becomes a 500 with a generic message;
    the traceback is logged server-side only.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except NewsFeedError as exc:
            log = _logger.error if exc.status_code >= 500 else _logger.info
            log(
                "application_error",
                error_type=type(exc).__name__,
                message=exc.message,
                provider=exc.provider_name,
                path=str(request.url.path),
                status=exc.status_code,
            )
            return _error_response(exc.status_code, exc.message)
        except Exception:
            _logger.exception("unhandled_error", path=str(request.url.path))
            return _error_response(500, "Internal server error")


def _error_response(status_code: int, message: str) -> JSONResponse:
    body = ErrorResponse(error=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())
