"""Abstract base class for remote feed providers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from newsfeed.models.feed import FeedItem


class IFeedProvider(ABC):
    """Contract for downloading and parsing a remote feed."""

    @abstractmethod
    async def fetch_items(self, url: str) -> list[FeedItem]:
        """Download the feed at *url* and return its entries.

        Raises
        ------
        FeedFetchError
            When the feed cannot be downloaded or parsed.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
