"""newsfeed API layer - routes, schemas, and middleware."""

from newsfeed.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from newsfeed.api.routes import require_session, router

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "configure_cors",
    "require_session",
    "router",
]
