"""Stock ticker side panel.

Quotes for the configured symbols are fetched concurrently.  A symbol
whose lookup fails is dropped from the panel; if every lookup fails the
panel gets a zeroed placeholder per symbol flagged ``API unavailable``
so the frontend always has something to render.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import structlog

from newsfeed.interfaces.quote_provider import IQuoteProvider
from newsfeed.models.quote import PriceHistory, StockQuote
from newsfeed.utils.errors import NotFoundError, QuoteUnavailableError

logger = structlog.get_logger(logger_name=__name__)

PLACEHOLDER_ERROR = "API unavailable"


class QuoteService:
    """Serves the ticker panel from an :class:`IQuoteProvider`."""

    def __init__(
        self,
        quote_provider: IQuoteProvider,
        symbols: list[str],
        history_range: str = "1mo",
    ) -> None:
        self._provider = quote_provider
        self._symbols = list(symbols)
        self._history_range = history_range

    @property
    def symbols(self) -> list[str]:
        return list(self._symbols)

    async def get_quotes(self) -> list[StockQuote]:
        results = await asyncio.gather(
            *(self._safe_quote(symbol) for symbol in self._symbols)
        )
        quotes = [q for q in results if q is not None]

        if not quotes:
            logger.warning("quotes_all_failed", symbols=self._symbols)
            return [self._placeholder(symbol) for symbol in self._symbols]
        return quotes

    async def get_history(self, symbol: str) -> PriceHistory:
        if symbol not in self._symbols:
            raise NotFoundError("Symbol not found")
        return await self._provider.get_history(symbol, self._history_range)

    async def _safe_quote(self, symbol: str) -> StockQuote | None:
        try:
            return await self._provider.get_quote(symbol)
        except QuoteUnavailableError as exc:
            logger.warning("quote_fetch_failed", symbol=symbol, error=str(exc))
            return None

    @staticmethod
    def _placeholder(symbol: str) -> StockQuote:
        return StockQuote(
            symbol=symbol,
            price=0,
            change=0,
            change_percent=0,
            currency="USD",
            timestamp=datetime.now(tz=timezone.utc).isoformat(),
            error=PLACEHOLDER_ERROR,
        )
