"""SQLite-backed login session store.

Sessions carry an absolute ``expires_at``; expired rows are invisible to
:meth:`get_session` and removed by :meth:`prune_expired`, which the app
calls on startup.
"""

from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone

import structlog

from newsfeed.interfaces.session_store import ISessionStore
from newsfeed.models.user import SessionData
from newsfeed.providers.storage.database import SQL_NOW, SQLiteDatabase, utc_timestamp

logger = structlog.get_logger(logger_name=__name__)

_INSERT_SESSION = """\
INSERT INTO sessions (session_id, user_id, email, created_at, expires_at)
VALUES (?, ?, ?, ?, ?);
"""

_SELECT_LIVE = f"""\
SELECT session_id, user_id, email, created_at, expires_at
FROM sessions
WHERE session_id = ? AND expires_at > {SQL_NOW};
"""

_DELETE_SESSION = "DELETE FROM sessions WHERE session_id = ?;"

_PRUNE_SQL = f"DELETE FROM sessions WHERE expires_at <= {SQL_NOW};"


class SQLiteSessionStore(ISessionStore):
    """Session persistence in the ``sessions`` table."""

    def __init__(self, database: SQLiteDatabase) -> None:
        self._database = database

    async def create_session(self, user_id: str, email: str, ttl_hours: int) -> SessionData:
        now = datetime.now(tz=timezone.utc)
        session = SessionData(
            session_id=secrets.token_urlsafe(32),
            user_id=user_id,
            email=email,
            created_at=utc_timestamp(now),
            expires_at=utc_timestamp(now + timedelta(hours=ttl_hours)),
        )
        async with self._database.connect() as db:
            await db.execute(
                _INSERT_SESSION,
                (
                    session.session_id,
                    session.user_id,
                    session.email,
                    session.created_at,
                    session.expires_at,
                ),
            )
            await db.commit()
        return session

    async def get_session(self, session_id: str) -> SessionData | None:
        async with self._database.connect() as db:
            cursor = await db.execute(_SELECT_LIVE, (session_id,))
            row = await cursor.fetchone()
        if row is None:
            return None
        return SessionData(**dict(row))

    async def delete_session(self, session_id: str) -> None:
        async with self._database.connect() as db:
            await db.execute(_DELETE_SESSION, (session_id,))
            await db.commit()

    async def prune_expired(self) -> int:
        async with self._database.connect() as db:
            cursor = await db.execute(_PRUNE_SQL)
            await db.commit()
            pruned = cursor.rowcount

        if pruned:
            logger.info("sessions_pruned", pruned=pruned)
        return pruned

    def get_provider_name(self) -> str:
        return "sqlite_sessions"
