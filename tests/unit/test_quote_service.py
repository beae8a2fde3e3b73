"""Unit tests for QuoteService with a mocked quote provider."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from newsfeed.models.quote import PriceHistory, StockQuote
from newsfeed.providers.quotes.yahoo_finance_provider import YahooFinanceQuoteProvider
from newsfeed.services.quote_service import PLACEHOLDER_ERROR, QuoteService
from newsfeed.utils.errors import NotFoundError, QuoteUnavailableError

_SYMBOLS = ["TSLA", "BTC-USD", "TOY.TO", "^GSPC"]


def _quote(symbol: str, price: float = 100.0) -> StockQuote:
    return StockQuote(
        symbol=symbol,
        price=price,
        change=1.0,
        change_percent=1.0,
        timestamp="2025-06-10T00:00:00+00:00",
    )


@pytest.fixture
def mock_provider():
    provider = MagicMock()
    provider.get_quote = AsyncMock(side_effect=lambda symbol: _quote(symbol))
    provider.get_history = AsyncMock(
        return_value=PriceHistory(symbol="TSLA", timestamps=[1, 2], closes=[1.0, 2.0])
    )
    provider.get_provider_name.return_value = "mock_quotes"
    return provider


@pytest.fixture
def service(mock_provider) -> QuoteService:
    return QuoteService(quote_provider=mock_provider, symbols=_SYMBOLS, history_range="1mo")


class TestGetQuotes:
    @pytest.mark.asyncio
    async def test_all_symbols_in_order(self, service):
        quotes = await service.get_quotes()
        assert [q.symbol for q in quotes] == _SYMBOLS

    @pytest.mark.asyncio
    async def test_failed_symbol_is_dropped(self, service, mock_provider):
        async def get_quote(symbol):
            if symbol == "TOY.TO":
                raise QuoteUnavailableError("HTTP 404 for TOY.TO", provider_name="mock_quotes")
            return _quote(symbol)

        mock_provider.get_quote.side_effect = get_quote

        quotes = await service.get_quotes()

        assert [q.symbol for q in quotes] == ["TSLA", "BTC-USD", "^GSPC"]

    @pytest.mark.asyncio
    async def test_all_failed_returns_placeholders(self, service, mock_provider):
        mock_provider.get_quote.side_effect = QuoteUnavailableError("down")

        quotes = await service.get_quotes()

        assert [q.symbol for q in quotes] == _SYMBOLS
        assert all(q.price == 0 and q.change == 0 and q.change_percent == 0 for q in quotes)
        assert all(q.error == PLACEHOLDER_ERROR for q in quotes)
        assert quotes[0].model_dump(by_alias=True)["error"] == "API unavailable"

    @pytest.mark.asyncio
    async def test_malformed_upstream_payload_degrades_to_placeholders(self):
        def handler(request: httpx.Request) -> httpx.Response:
            symbol = request.url.path.rsplit("/", 1)[-1]
            if symbol == "TSLA":
                return httpx.Response(200, json={"chart": {"result": [None]}})
            return httpx.Response(200, json={"chart": {"result": [{"meta": None}]}})

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        provider = YahooFinanceQuoteProvider(http_client=client, base_url="https://quotes.test/chart/")
        service = QuoteService(quote_provider=provider, symbols=["TSLA", "BTC-USD"])

        quotes = await service.get_quotes()

        assert [q.symbol for q in quotes] == ["TSLA", "BTC-USD"]
        assert all(q.error == PLACEHOLDER_ERROR for q in quotes)


class TestGetHistory:
    @pytest.mark.asyncio
    async def test_configured_symbol(self, service, mock_provider):
        history = await service.get_history("TSLA")
        assert history.closes == [1.0, 2.0]
        mock_provider.get_history.assert_awaited_once_with("TSLA", "1mo")

    @pytest.mark.asyncio
    async def test_unknown_symbol(self, service, mock_provider):
        with pytest.raises(NotFoundError, match="Symbol not found"):
            await service.get_history("GME")
        mock_provider.get_history.assert_not_awaited()


def test_symbols_are_copied(mock_provider):
    symbols = ["TSLA"]
    service = QuoteService(mock_provider, symbols)
    symbols.append("GME")
    assert service.symbols == ["TSLA"]
