"""Exception hierarchy for newsfeed.

Every application error derives from :class:`NewsFeedError`.  Each class
fixes the HTTP status the error middleware answers with and the message
used when none is given; ``provider_name`` names the upstream ("rss",
"yahoo_finance") a failure came from.

    NewsFeedError                 500
    ├── InvalidRequestError       400
    │   ├── DuplicateEmailError   400
    │   └── InvalidSourceURLError 400
    ├── AuthenticationError       401
    ├── NotFoundError             404
    ├── FeedFetchError            502
    ├── QuoteUnavailableError     502
    └── ConfigurationError        500
"""

from __future__ import annotations


class NewsFeedError(Exception):
    """Base class.  ``str(exc)`` reads ``[provider] message`` when a provider is set."""

    status_code: int = 500
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: str | None = None, provider_name: str | None = None) -> None:
        self.message = message or self.default_message
        self.provider_name = provider_name
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.provider_name:
            return f"[{self.provider_name}] {self.message}"
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, provider_name={self.provider_name!r})"


# -- 4xx: the client sent something we reject -------------------------------


class InvalidRequestError(NewsFeedError):
    """Missing fields or bad values in a request body."""

    status_code = 400
    default_message = "Invalid request"


class DuplicateEmailError(InvalidRequestError):
    default_message = "Email already exists"


class InvalidSourceURLError(InvalidRequestError):
    """Source URL that is malformed, not HTTP(S), or aimed at a private host."""

    default_message = "Invalid URL format"


class AuthenticationError(NewsFeedError):
    status_code = 401
    default_message = "Not authenticated"


class NotFoundError(NewsFeedError):
    """Row is missing, or belongs to another user."""

    status_code = 404
    default_message = "Not found"


# -- upstream and startup failures --------------------------------------------


class FeedFetchError(NewsFeedError):
    """An RSS source could not be downloaded or parsed.

    The fetch pipeline catches this per source, so one broken feed never
    stops the rest of a run.
    """

    status_code = 502
    default_message = "Feed fetch failed"


class QuoteUnavailableError(NewsFeedError):
    status_code = 502
    default_message = "Quote unavailable"


class ConfigurationError(NewsFeedError):
    """Startup configuration is missing or unusable."""

    default_message = "Invalid or missing configuration"
