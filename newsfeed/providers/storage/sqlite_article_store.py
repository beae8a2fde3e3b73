"""SQLite-backed article store.

Dedupe is enforced twice: the fetch pipeline skips links it already
knows, and ``UNIQUE(user_id, link)`` with ``INSERT OR IGNORE`` makes a
racing duplicate a silent no-op.
"""

from __future__ import annotations

import structlog

from newsfeed.interfaces.article_store import IArticleStore
from newsfeed.models.feed import Article
from newsfeed.providers.storage.database import SQLiteDatabase

logger = structlog.get_logger(logger_name=__name__)

_INSERT_ARTICLE = """\
INSERT OR IGNORE INTO articles
    (user_id, source_id, source_name, title, link, summary, published_at)
VALUES (?, ?, ?, ?, ?, ?, ?);
"""

_SELECT_BY_USER = """\
SELECT id, user_id, source_id, source_name, title, link, summary,
       published_at, fetched_at
FROM articles
WHERE user_id = ?
ORDER BY published_at DESC, id DESC
"""

_SELECT_LINKS = "SELECT link FROM articles WHERE user_id = ?;"

_COUNT_BY_USER = "SELECT COUNT(*) AS count FROM articles WHERE user_id = ?;"

# Oldest by fetch time, not publish time; id breaks ties within a batch.
_DELETE_OLDEST = """\
DELETE FROM articles WHERE id IN (
    SELECT id FROM articles
    WHERE user_id = ?
    ORDER BY fetched_at ASC, id ASC
    LIMIT ?
);
"""


class SQLiteArticleStore(IArticleStore):
    """Article persistence in the ``articles`` table."""

    def __init__(self, database: SQLiteDatabase) -> None:
        self._database = database

    async def insert_article(
        self,
        user_id: str,
        source_id: int | None,
        source_name: str | None,
        title: str,
        link: str,
        summary: str,
        published_at: str | None,
    ) -> bool:
        async with self._database.connect() as db:
            cursor = await db.execute(
                _INSERT_ARTICLE,
                (user_id, source_id, source_name, title, link, summary, published_at),
            )
            await db.commit()
            inserted = cursor.rowcount == 1

        if not inserted:
            logger.debug("article_duplicate_ignored", user_id=user_id, link=link)
        return inserted

    async def list_articles(self, user_id: str, limit: int | None = None) -> list[Article]:
        sql = _SELECT_BY_USER
        params: tuple = (user_id,)
        if limit is not None:
            sql += " LIMIT ?"
            params = (user_id, limit)

        async with self._database.connect() as db:
            cursor = await db.execute(sql, params)
            rows = await cursor.fetchall()
        return [Article(**dict(row)) for row in rows]

    async def list_links(self, user_id: str) -> set[str]:
        async with self._database.connect() as db:
            cursor = await db.execute(_SELECT_LINKS, (user_id,))
            rows = await cursor.fetchall()
        return {row["link"] for row in rows}

    async def count_articles(self, user_id: str) -> int:
        async with self._database.connect() as db:
            cursor = await db.execute(_COUNT_BY_USER, (user_id,))
            row = await cursor.fetchone()
        return row["count"] if row else 0

    async def delete_oldest(self, user_id: str, count: int) -> int:
        if count <= 0:
            return 0

        async with self._database.connect() as db:
            cursor = await db.execute(_DELETE_OLDEST, (user_id, count))
            await db.commit()
            deleted = cursor.rowcount

        logger.info("articles_pruned", user_id=user_id, deleted=deleted)
        return deleted

    def get_provider_name(self) -> str:
        return "sqlite_articles"
