"""SQLite-backed feed source store."""

from __future__ import annotations

from typing import Any

import structlog

from newsfeed.interfaces.source_store import ISourceStore
from newsfeed.models.feed import Source
from newsfeed.providers.storage.database import SQLiteDatabase

logger = structlog.get_logger(logger_name=__name__)

_INSERT_SOURCE = """\
INSERT INTO sources (user_id, name, url, type, enabled)
VALUES (?, ?, ?, ?, ?);
"""

_SELECT_COLUMNS = "id, user_id, name, url, type, enabled, created_at"

# id breaks ties between sources created within the same millisecond.
_SELECT_BY_USER = f"""\
SELECT {_SELECT_COLUMNS} FROM sources
WHERE user_id = ?
ORDER BY created_at DESC, id DESC;
"""

_SELECT_ONE = f"SELECT {_SELECT_COLUMNS} FROM sources WHERE id = ? AND user_id = ?;"

_DELETE_ONE = "DELETE FROM sources WHERE id = ? AND user_id = ?;"

_UPDATE_ENABLED = "UPDATE sources SET enabled = ? WHERE id = ? AND user_id = ?;"


class SQLiteSourceStore(ISourceStore):
    """Source persistence in the ``sources`` table."""

    def __init__(self, database: SQLiteDatabase) -> None:
        self._database = database

    async def create_source(
        self,
        user_id: str,
        name: str,
        url: str,
        source_type: str,
        enabled: bool = True,
    ) -> int:
        async with self._database.connect() as db:
            cursor = await db.execute(
                _INSERT_SOURCE,
                (user_id, name, url, source_type, 1 if enabled else 0),
            )
            await db.commit()
            source_id = cursor.lastrowid

        logger.info("source_created", user_id=user_id, source_id=source_id, url=url)
        return int(source_id)

    async def list_sources(self, user_id: str) -> list[Source]:
        async with self._database.connect() as db:
            cursor = await db.execute(_SELECT_BY_USER, (user_id,))
            rows = await cursor.fetchall()
        return [self._row_to_source(dict(row)) for row in rows]

    async def get_source(self, source_id: int, user_id: str) -> Source | None:
        async with self._database.connect() as db:
            cursor = await db.execute(_SELECT_ONE, (source_id, user_id))
            row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_source(dict(row))

    async def delete_source(self, source_id: int, user_id: str) -> int:
        async with self._database.connect() as db:
            cursor = await db.execute(_DELETE_ONE, (source_id, user_id))
            await db.commit()
            deleted = cursor.rowcount

        if deleted:
            logger.info("source_deleted", user_id=user_id, source_id=source_id)
        return deleted

    async def set_source_enabled(self, source_id: int, user_id: str, enabled: bool) -> bool:
        async with self._database.connect() as db:
            cursor = await db.execute(
                _UPDATE_ENABLED,
                (1 if enabled else 0, source_id, user_id),
            )
            await db.commit()
            updated = cursor.rowcount
        return updated > 0

    @staticmethod
    def _row_to_source(row: dict[str, Any]) -> Source:
        row["enabled"] = bool(row["enabled"])
        return Source(**row)

    def get_provider_name(self) -> str:
        return "sqlite_sources"
