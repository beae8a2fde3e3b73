"""Utility modules for newsfeed.

- **errors** -- exception hierarchy rooted at NewsFeedError; each class
  carries the HTTP status the API layer responds with.
- **logging** -- structlog setup: coloured console output in development,
  structured JSON in production.
- **session_cookie** -- HMAC signing of the session id stored in the
  browser cookie.
- **text** -- HTML stripping and summary truncation for feed content.
- **url_safety** -- source URL validation against loopback, link-local,
  private and ``.local`` hosts.
"""

from newsfeed.utils.errors import (
    AuthenticationError,
    ConfigurationError,
    DuplicateEmailError,
    FeedFetchError,
    InvalidRequestError,
    InvalidSourceURLError,
    NewsFeedError,
    NotFoundError,
    QuoteUnavailableError,
)
from newsfeed.utils.logging import configure_logging, get_logger
from newsfeed.utils.url_safety import is_private_hostname, validate_source_url

__all__ = [
    "AuthenticationError",
    "ConfigurationError",
    "DuplicateEmailError",
    "FeedFetchError",
    "InvalidRequestError",
    "InvalidSourceURLError",
    "NewsFeedError",
    "NotFoundError",
    "QuoteUnavailableError",
    "configure_logging",
    "get_logger",
    "is_private_hostname",
    "validate_source_url",
]
