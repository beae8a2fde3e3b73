"""Unit tests for SourceService with a mocked source store."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from newsfeed.services.source_service import SourceService
from newsfeed.utils.errors import InvalidRequestError, InvalidSourceURLError, NotFoundError


@pytest.fixture
def mock_store():
    store = MagicMock()
    store.list_sources = AsyncMock(return_value=[])
    store.create_source = AsyncMock(return_value=7)
    store.delete_source = AsyncMock(return_value=1)
    store.set_source_enabled = AsyncMock(return_value=True)
    return store


@pytest.fixture
def service(mock_store) -> SourceService:
    return SourceService(source_store=mock_store)


class TestAddSource:
    @pytest.mark.asyncio
    async def test_valid_source(self, service, mock_store):
        source_id = await service.add_source("u-1", "BBC", "https://feeds.bbci.co.uk/news/rss.xml", "rss")

        assert source_id == 7
        mock_store.create_source.assert_awaited_once_with(
            "u-1", "BBC", "https://feeds.bbci.co.uk/news/rss.xml", "rss", enabled=True
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "name,url,source_type",
        [
            (None, "https://x.test/rss", "rss"),
            ("X", None, "rss"),
            ("X", "https://x.test/rss", None),
            ("", "https://x.test/rss", "rss"),
        ],
    )
    async def test_missing_fields(self, service, mock_store, name, url, source_type):
        with pytest.raises(InvalidRequestError, match="Missing required fields"):
            await service.add_source("u-1", name, url, source_type)
        mock_store.create_source.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_private_url_is_not_stored(self, service, mock_store):
        with pytest.raises(InvalidSourceURLError, match="Private/local URLs are not allowed"):
            await service.add_source("u-1", "Router", "http://192.168.1.1/rss", "rss")
        mock_store.create_source.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_non_http_url(self, service):
        with pytest.raises(InvalidSourceURLError, match="URL must use HTTP or HTTPS"):
            await service.add_source("u-1", "FTP", "ftp://example.com/rss", "rss")

    @pytest.mark.asyncio
    async def test_non_rss_type_is_accepted(self, service, mock_store):
        await service.add_source("u-1", "Site", "https://example.com", "scrape")
        assert mock_store.create_source.await_args.args[3] == "scrape"


class TestDeleteAndToggle:
    @pytest.mark.asyncio
    async def test_delete(self, service, mock_store):
        await service.delete_source("u-1", 3)
        mock_store.delete_source.assert_awaited_once_with(3, "u-1")

    @pytest.mark.asyncio
    async def test_delete_missing(self, service, mock_store):
        mock_store.delete_source.return_value = 0
        with pytest.raises(NotFoundError, match="Source not found"):
            await service.delete_source("u-1", 3)

    @pytest.mark.asyncio
    async def test_toggle(self, service, mock_store):
        await service.set_enabled("u-1", 3, False)
        mock_store.set_source_enabled.assert_awaited_once_with(3, "u-1", False)

    @pytest.mark.asyncio
    async def test_toggle_missing(self, service, mock_store):
        mock_store.set_source_enabled.return_value = False
        with pytest.raises(NotFoundError):
            await service.set_enabled("u-1", 3, True)
