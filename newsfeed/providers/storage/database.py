"""SQLite schema and connection handling shared by every store.

# ─── SCHEMA ──────────────────────────────────────────────────────────
#
#   users     - one row per account (bcrypt hash in ``password``)
#   sources   - RSS URLs, owned by a user (CASCADE on user delete)
#   articles  - stored feed items, unique per (user_id, link);
#               ``source_id`` is nulled when the source is deleted so
#               the article keeps its ``source_name``
#   sessions  - server-side login sessions with an absolute expiry
#
# Timestamps are UTC ISO-8601 strings with millisecond precision so that
# lexical order equals chronological order.  Foreign keys are enforced
# per connection (SQLite leaves them off by default).
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path

import aiosqlite
import structlog

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_DB_PATH = Path("data/newsfeed.db")

# SQL expression for "now" in the same format as ``utc_timestamp()``.
SQL_NOW = "strftime('%Y-%m-%dT%H:%M:%fZ', 'now')"

_CREATE_USERS_TABLE = f"""\
CREATE TABLE IF NOT EXISTS users (
    id          TEXT PRIMARY KEY,
    email       TEXT NOT NULL UNIQUE,
    password    TEXT NOT NULL,
    created_at  TEXT NOT NULL DEFAULT ({SQL_NOW})
);
"""

_CREATE_SOURCES_TABLE = f"""\
CREATE TABLE IF NOT EXISTS sources (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id     TEXT    NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    name        TEXT    NOT NULL,
    url         TEXT    NOT NULL,
    type        TEXT    NOT NULL DEFAULT 'rss',
    enabled     INTEGER NOT NULL DEFAULT 1,
    created_at  TEXT    NOT NULL DEFAULT ({SQL_NOW})
);
"""

_CREATE_ARTICLES_TABLE = f"""\
CREATE TABLE IF NOT EXISTS articles (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id       TEXT    NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    source_id     INTEGER REFERENCES sources(id) ON DELETE SET NULL,
    source_name   TEXT,
    title         TEXT    NOT NULL,
    link          TEXT    NOT NULL,
    summary       TEXT,
    published_at  TEXT,
    fetched_at    TEXT    NOT NULL DEFAULT ({SQL_NOW}),
    UNIQUE(user_id, link)
);
"""

_CREATE_SESSIONS_TABLE = f"""\
CREATE TABLE IF NOT EXISTS sessions (
    session_id  TEXT PRIMARY KEY,
    user_id     TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    email       TEXT NOT NULL,
    created_at  TEXT NOT NULL DEFAULT ({SQL_NOW}),
    expires_at  TEXT NOT NULL
);
"""

_CREATE_INDICES = [
    "CREATE INDEX IF NOT EXISTS idx_sources_user ON sources(user_id);",
    "CREATE INDEX IF NOT EXISTS idx_articles_user ON articles(user_id);",
    "CREATE INDEX IF NOT EXISTS idx_articles_date ON articles(published_at);",
    "CREATE INDEX IF NOT EXISTS idx_articles_user_fetched ON articles(user_id, fetched_at);",
    "CREATE INDEX IF NOT EXISTS idx_sessions_expires ON sessions(expires_at);",
]


def utc_timestamp(moment: datetime | None = None) -> str:
    """Format *moment* (default: now) like ``SQL_NOW``."""
    moment = (moment or datetime.now(tz=timezone.utc)).astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


class SQLiteDatabase:
    """Owns the database path and the schema."""

    def __init__(self, db_path: str | Path = _DEFAULT_DB_PATH) -> None:
        self._db_path = Path(db_path)

    @property
    def path(self) -> Path:
        return self._db_path

    async def initialize(self) -> None:
        """Create all tables and indices if they don't exist."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        async with aiosqlite.connect(str(self._db_path)) as db:
            await db.execute("PRAGMA journal_mode=WAL;")
            await db.execute(_CREATE_USERS_TABLE)
            await db.execute(_CREATE_SOURCES_TABLE)
            await db.execute(_CREATE_ARTICLES_TABLE)
            await db.execute(_CREATE_SESSIONS_TABLE)
            for idx_sql in _CREATE_INDICES:
                await db.execute(idx_sql)
            await db.commit()
        logger.info("database_initialized", path=str(self._db_path))

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[aiosqlite.Connection]:
        """Open a connection with foreign keys on and ``Row`` results."""
        async with aiosqlite.connect(str(self._db_path)) as db:
            db.row_factory = aiosqlite.Row
            await db.execute("PRAGMA foreign_keys=ON;")
            yield db

    def get_provider_name(self) -> str:
        return "sqlite"
