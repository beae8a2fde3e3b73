"""Abstract base class for market quote providers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from newsfeed.models.quote import PriceHistory, StockQuote


class IQuoteProvider(ABC):
    """Contract for price lookups used by the ticker side panel."""

    @abstractmethod
    async def get_quote(self, symbol: str) -> StockQuote:
        """Return the latest price and daily change for *symbol*.

        Raises
        ------
        QuoteUnavailableError
            When the upstream call fails or the payload is unusable.
        """

    @abstractmethod
    async def get_history(self, symbol: str, range_: str = "1mo") -> PriceHistory:
        """Return daily closing prices for *symbol* over *range_*."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
