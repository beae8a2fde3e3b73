"""Business logic for newsfeed.

- **AuthService** -- registration, login, bcrypt hashing, session lookup.
- **SourceService** -- per-user source CRUD with SSRF-safe URL checks.
- **FeedService** -- feed listing and the fetch/dedupe/prune pipeline.
- **FetchScheduler** -- background job running the pipeline on a timer.
- **QuoteService** -- stock ticker side panel with placeholder fallback.
"""

from newsfeed.services.auth_service import AuthService
from newsfeed.services.feed_service import FeedService
from newsfeed.services.fetch_scheduler import FetchScheduler
from newsfeed.services.quote_service import QuoteService
from newsfeed.services.source_service import SourceService

__all__ = [
    "AuthService",
    "FeedService",
    "FetchScheduler",
    "QuoteService",
    "SourceService",
]
