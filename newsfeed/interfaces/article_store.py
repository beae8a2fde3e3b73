"""Abstract base class for stored article persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod

from newsfeed.models.feed import Article


class IArticleStore(ABC):
    """Contract for per-user article storage.

    Links are unique per user: inserting a link the user already has is a
    no-op rather than an error.
    """

    @abstractmethod
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
        """Store an article.  Returns False if the user already had the link."""

    @abstractmethod
    async def list_articles(self, user_id: str, limit: int | None = None) -> list[Article]:
        """Return the user's articles ordered by publish date, newest first."""

    @abstractmethod
    async def list_links(self, user_id: str) -> set[str]:
        """Return every link stored for the user."""

    @abstractmethod
    async def count_articles(self, user_id: str) -> int:
        """Return how many articles the user has."""

    @abstractmethod
    async def delete_oldest(self, user_id: str, count: int) -> int:
        """Delete the user's *count* articles with the oldest fetch time.

        Returns
        -------
        int
            Number of rows actually deleted.
        """
