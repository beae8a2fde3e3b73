"""Public interface definitions for storage and external services.

Business logic in ``newsfeed.services`` talks only to these abstract base
classes; concrete adapters live in ``newsfeed.providers`` and are wired
together in ``newsfeed.main``.  Tests inject fakes through the same seams.

    Interface       →  Concrete implementation
    ───────────────────────────────────────────────────────
    IUserStore      →  SQLiteUserStore
    ISourceStore    →  SQLiteSourceStore
    IArticleStore   →  SQLiteArticleStore
    ISessionStore   →  SQLiteSessionStore
    IFeedProvider   →  RSSFeedProvider
    IQuoteProvider  →  YahooFinanceQuoteProvider
"""

from newsfeed.interfaces.article_store import IArticleStore
from newsfeed.interfaces.feed_provider import IFeedProvider
from newsfeed.interfaces.quote_provider import IQuoteProvider
from newsfeed.interfaces.session_store import ISessionStore
from newsfeed.interfaces.source_store import ISourceStore
from newsfeed.interfaces.user_store import IUserStore

__all__ = [
    "IArticleStore",
    "IFeedProvider",
    "IQuoteProvider",
    "ISessionStore",
    "ISourceStore",
    "IUserStore",
]
