"""Yahoo Finance chart API quote provider.

Uses the public ``/v8/finance/chart`` endpoint, which returns JSON of the
form::

    {"chart": {"result": [{
        "meta": {"regularMarketPrice": 248.5, "currency": "USD", ...},
        "timestamp": [...],
        "indicators": {"quote": [{"close": [...]}]}
    }]}}

No API key is required, but requests without a browser-like User-Agent
are frequently rejected.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

import httpx
import structlog
from pydantic import ValidationError

from newsfeed.interfaces.quote_provider import IQuoteProvider
from newsfeed.models.quote import PriceHistory, StockQuote
from newsfeed.utils.errors import QuoteUnavailableError

logger = structlog.get_logger(logger_name=__name__)

_BASE_URL = "https://query1.finance.yahoo.com/v8/finance/chart/"
_DEFAULT_TIMEOUT = 10.0
_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
}


class YahooFinanceQuoteProvider(IQuoteProvider):
    """Quote lookups against the Yahoo Finance chart API."""

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        base_url: str = _BASE_URL,
        timeout: float = _DEFAULT_TIMEOUT,
    ) -> None:
        self._client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))
        self._base_url = base_url
        self._timeout = timeout

    # ------------------------------------------------------------------
    # IQuoteProvider implementation
    # ------------------------------------------------------------------

    async def get_quote(self, symbol: str) -> StockQuote:
        result = await self._fetch_chart(symbol, interval="1d", range_="2d")

        meta = self._meta(result, symbol)
        closes = self._closes(result)

        current = _price(meta.get("regularMarketPrice")) or (_price(closes[-1]) if closes else None)
        previous = (_price(closes[-2]) if len(closes) >= 2 else None) or current

        if not current or not previous:
            raise QuoteUnavailableError(
                message=f"Invalid price data for {symbol}",
                provider_name=self.get_provider_name(),
            )

        change = current - previous
        currency = meta.get("currency")
        return StockQuote(
            symbol=symbol,
            price=current,
            change=change,
            change_percent=(change / previous) * 100,
            currency=currency if isinstance(currency, str) and currency else "USD",
            timestamp=datetime.now(tz=timezone.utc).isoformat(),
        )

    async def get_history(self, symbol: str, range_: str = "1mo") -> PriceHistory:
        result = await self._fetch_chart(symbol, interval="1d", range_=range_)
        meta = self._meta(result, symbol)
        timestamps = result.get("timestamp")

        try:
            return PriceHistory(
                symbol=meta.get("symbol") or symbol,
                currency=meta.get("currency") or "USD",
                timestamps=timestamps if isinstance(timestamps, list) else [],
                closes=self._closes(result),
            )
        except ValidationError as exc:
            raise QuoteUnavailableError(
                message=f"Invalid price history for {symbol}",
                provider_name=self.get_provider_name(),
            ) from exc

    def get_provider_name(self) -> str:
        return "yahoo_finance"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _fetch_chart(self, symbol: str, *, interval: str, range_: str) -> dict[str, Any]:
        url = f"{self._base_url}{quote(symbol, safe='')}"
        try:
            response = await self._client.get(
                url,
                params={"interval": interval, "range": range_},
                headers=_HEADERS,
                timeout=self._timeout,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            raise QuoteUnavailableError(
                message=f"HTTP {exc.response.status_code} for {symbol}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPError as exc:
            raise QuoteUnavailableError(
                message=f"HTTP error fetching {symbol}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        except ValueError as exc:
            raise QuoteUnavailableError(
                message=f"Non-JSON response for {symbol}",
                provider_name=self.get_provider_name(),
            ) from exc

        chart = data.get("chart") if isinstance(data, dict) else None
        results = chart.get("result") if isinstance(chart, dict) else None
        if not isinstance(results, list) or not results or not isinstance(results[0], dict):
            raise QuoteUnavailableError(
                message=f"Invalid response format for {symbol}",
                provider_name=self.get_provider_name(),
            )
        return results[0]

    def _meta(self, result: dict[str, Any], symbol: str) -> dict[str, Any]:
        meta = result.get("meta")
        if meta is None:
            return {}
        if not isinstance(meta, dict):
            raise QuoteUnavailableError(
                message=f"Invalid response format for {symbol}",
                provider_name=self.get_provider_name(),
            )
        return meta

    @staticmethod
    def _closes(result: dict[str, Any]) -> list[Any]:
        """The first close series, or [] when any level has the wrong shape."""
        indicators = result.get("indicators")
        quotes = indicators.get("quote") if isinstance(indicators, dict) else None
        if not isinstance(quotes, list) or not quotes or not isinstance(quotes[0], dict):
            return []
        closes = quotes[0].get("close")
        return list(closes) if isinstance(closes, list) else []


def _price(value: Any) -> float | None:
    """Return *value* as a positive price, or None for anything else."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value) if value > 0 else None
