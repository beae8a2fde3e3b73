"""Abstract base class for feed source persistence.

Every operation is scoped by ``user_id``: a source owned by another user
behaves exactly like a missing one.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from newsfeed.models.feed import Source


class ISourceStore(ABC):
    """Contract for per-user source storage."""

    @abstractmethod
    async def create_source(
        self,
        user_id: str,
        name: str,
        url: str,
        source_type: str,
        enabled: bool = True,
    ) -> int:
        """Insert a source and return its new id."""

    @abstractmethod
    async def list_sources(self, user_id: str) -> list[Source]:
        """Return the user's sources, newest first."""

    @abstractmethod
    async def get_source(self, source_id: int, user_id: str) -> Source | None:
        """Return one source of the user, or None."""

    @abstractmethod
    async def delete_source(self, source_id: int, user_id: str) -> int:
        """Delete one source of the user and return the number of rows removed."""

    @abstractmethod
    async def set_source_enabled(self, source_id: int, user_id: str, enabled: bool) -> bool:
        """Enable or disable a source.  Returns False when no row matched."""
