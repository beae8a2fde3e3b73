"""SQLite persistence providers.

All stores share one database file (``data/newsfeed.db`` by default).
``SQLiteDatabase.initialize()`` creates the schema once at startup; each
store opens a short-lived ``aiosqlite`` connection per operation.
"""

from newsfeed.providers.storage.database import SQLiteDatabase
from newsfeed.providers.storage.sqlite_article_store import SQLiteArticleStore
from newsfeed.providers.storage.sqlite_session_store import SQLiteSessionStore
from newsfeed.providers.storage.sqlite_source_store import SQLiteSourceStore
from newsfeed.providers.storage.sqlite_user_store import SQLiteUserStore

__all__ = [
    "SQLiteArticleStore",
    "SQLiteDatabase",
    "SQLiteSessionStore",
    "SQLiteSourceStore",
    "SQLiteUserStore",
]
