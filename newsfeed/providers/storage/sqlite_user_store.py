"""SQLite-backed user account store."""

from __future__ import annotations

import sqlite3

import structlog

from newsfeed.interfaces.user_store import IUserStore
from newsfeed.models.user import User, UserRecord
from newsfeed.providers.storage.database import SQLiteDatabase
from newsfeed.utils.errors import DuplicateEmailError

logger = structlog.get_logger(logger_name=__name__)

_INSERT_USER = "INSERT INTO users (id, email, password) VALUES (?, ?, ?);"

_SELECT_BY_EMAIL = "SELECT id, email, password, created_at FROM users WHERE email = ?;"

_SELECT_BY_ID = "SELECT id, email, created_at FROM users WHERE id = ?;"

_SELECT_ACTIVE_USER_IDS = """\
SELECT DISTINCT user_id FROM sources
WHERE enabled = 1
ORDER BY user_id;
"""


class SQLiteUserStore(IUserStore):
    """User persistence in the ``users`` table."""

    def __init__(self, database: SQLiteDatabase) -> None:
        self._database = database

    async def create_user(self, user_id: str, email: str, password_hash: str) -> User:
        try:
            async with self._database.connect() as db:
                await db.execute(_INSERT_USER, (user_id, email, password_hash))
                await db.commit()
        except sqlite3.IntegrityError as exc:
            raise DuplicateEmailError() from exc

        logger.info("user_created", user_id=user_id)
        user = await self.get_user_by_id(user_id)
        return user or User(id=user_id, email=email)

    async def get_user_by_email(self, email: str) -> UserRecord | None:
        async with self._database.connect() as db:
            cursor = await db.execute(_SELECT_BY_EMAIL, (email,))
            row = await cursor.fetchone()
        if row is None:
            return None
        return UserRecord(
            id=row["id"],
            email=row["email"],
            password_hash=row["password"],
            created_at=row["created_at"],
        )

    async def get_user_by_id(self, user_id: str) -> User | None:
        async with self._database.connect() as db:
            cursor = await db.execute(_SELECT_BY_ID, (user_id,))
            row = await cursor.fetchone()
        if row is None:
            return None
        return User(**dict(row))

    async def list_user_ids_with_enabled_sources(self) -> list[str]:
        async with self._database.connect() as db:
            cursor = await db.execute(_SELECT_ACTIVE_USER_IDS)
            rows = await cursor.fetchall()
        return [row["user_id"] for row in rows]

    def get_provider_name(self) -> str:
        return "sqlite_users"
