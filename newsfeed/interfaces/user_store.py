"""Abstract base class for user account persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod

from newsfeed.models.user import User, UserRecord


class IUserStore(ABC):
    """Contract for user account storage.  All operations are async."""

    @abstractmethod
    async def create_user(self, user_id: str, email: str, password_hash: str) -> User:
        """Insert a new user.

        Raises
        ------
        DuplicateEmailError
            When *email* is already registered.
        """

    @abstractmethod
    async def get_user_by_email(self, email: str) -> UserRecord | None:
        """Return the user with *email*, including the password hash."""

    @abstractmethod
    async def get_user_by_id(self, user_id: str) -> User | None:
        """Return the user with *user_id*, without credentials."""

    @abstractmethod
    async def list_user_ids_with_enabled_sources(self) -> list[str]:
        """Return ids of users that own at least one enabled source."""
