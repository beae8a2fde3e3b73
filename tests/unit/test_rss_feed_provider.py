"""Unit tests for RSSFeedProvider using httpx.MockTransport."""

from __future__ import annotations

import httpx
import pytest

from newsfeed.providers.feed.rss_feed_provider import RSSFeedProvider
from newsfeed.utils.errors import FeedFetchError


def _provider(handler) -> RSSFeedProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RSSFeedProvider(http_client=client, timeout=5.0)


def _serve(body: bytes, status: int = 200, content_type: str = "application/rss+xml"):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, content=body, headers={"Content-Type": content_type})

    return handler


class TestFetchItems:
    @pytest.mark.asyncio
    async def test_parses_rss_items(self, rss_document):
        provider = _provider(_serve(rss_document))

        items = await provider.fetch_items("https://news.example.com/rss")

        # The entry without a link is dropped.
        assert [i.link for i in items] == [
            "https://news.example.com/a/1",
            "https://news.example.com/a/2",
        ]
        first = items[0]
        assert first.title == "First & foremost"
        assert first.published == "2025-06-10T07:30:00Z"
        assert first.content.startswith("Hello world")
        assert "first story" in first.content
        assert "<" not in first.content

        assert items[1].content == "Plain text body of the second story."
        assert items[1].published == "2025-06-09T12:00:00Z"

    @pytest.mark.asyncio
    async def test_parses_atom_entries(self, atom_document):
        provider = _provider(_serve(atom_document, content_type="application/atom+xml"))

        items = await provider.fetch_items("https://atom.example.com/feed")

        assert len(items) == 1
        assert items[0].link == "https://atom.example.com/posts/1"
        assert items[0].content == "Atom content body"
        assert items[0].published == "2025-06-11T08:00:00Z"

    @pytest.mark.asyncio
    async def test_sends_reader_headers(self, rss_document):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=rss_document)

        await _provider(handler).fetch_items("https://news.example.com/rss")

        assert "newsfeed" in seen[0].headers["User-Agent"]
        assert "rss+xml" in seen[0].headers["Accept"]

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        provider = _provider(_serve(b"down", status=503, content_type="text/plain"))

        with pytest.raises(FeedFetchError, match="HTTP 503") as exc_info:
            await provider.fetch_items("https://news.example.com/rss")
        assert exc_info.value.provider_name == "rss"

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(FeedFetchError, match="Timeout"):
            await _provider(handler).fetch_items("https://slow.example.com/rss")

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(FeedFetchError, match="HTTP error"):
            await _provider(handler).fetch_items("https://gone.example.com/rss")

    @pytest.mark.asyncio
    async def test_unparseable_document(self):
        provider = _provider(_serve(b"Service temporarily unavailable", content_type="text/plain"))

        with pytest.raises(FeedFetchError, match="Unparseable feed"):
            await provider.fetch_items("https://news.example.com/rss")


def test_provider_name():
    assert RSSFeedProvider(http_client=httpx.AsyncClient()).get_provider_name() == "rss"
