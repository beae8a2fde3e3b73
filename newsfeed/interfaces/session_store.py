"""Abstract base class for server-side login sessions."""

from __future__ import annotations

from abc import ABC, abstractmethod

from newsfeed.models.user import SessionData


class ISessionStore(ABC):
    """Contract for login session storage."""

    @abstractmethod
    async def create_session(self, user_id: str, email: str, ttl_hours: int) -> SessionData:
        """Create a session that expires *ttl_hours* from now."""

    @abstractmethod
    async def get_session(self, session_id: str) -> SessionData | None:
        """Return a live session, or None if it is missing or expired."""

    @abstractmethod
    async def delete_session(self, session_id: str) -> None:
        """Remove a session (no-op if absent)."""

    @abstractmethod
    async def prune_expired(self) -> int:
        """Delete expired sessions and return how many were removed."""
