"""RSS/Atom feed provider using httpx and feedparser.

Downloads the feed document with the shared ``httpx.AsyncClient`` and
hands the bytes to ``feedparser`` for parsing, so network behaviour
(timeouts, redirects, headers) is controlled in one place and tests can
substitute an ``httpx.MockTransport``.
"""

from __future__ import annotations

import calendar
from datetime import datetime, timezone
from typing import Any

import feedparser
import httpx
import structlog

from newsfeed.interfaces.feed_provider import IFeedProvider
from newsfeed.models.feed import FeedItem
from newsfeed.utils.errors import FeedFetchError
from newsfeed.utils.text import strip_html

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_TIMEOUT = 15.0
_DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; newsfeed/0.1; RSS reader)",
    "Accept": (
        "application/rss+xml, application/atom+xml, application/xml;q=0.9, "
        "text/xml;q=0.8, */*;q=0.5"
    ),
}


class RSSFeedProvider(IFeedProvider):
    """Feed retrieval backed by httpx + feedparser."""

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = _DEFAULT_TIMEOUT,
    ) -> None:
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers=_DEFAULT_HEADERS,
            follow_redirects=True,
        )
        self._timeout = timeout

    # ------------------------------------------------------------------
    # IFeedProvider implementation
    # ------------------------------------------------------------------

    async def fetch_items(self, url: str) -> list[FeedItem]:
        """Download *url* and return its entries as :class:`FeedItem` objects."""
        try:
            response = await self._client.get(
                url,
                headers=_DEFAULT_HEADERS,
                timeout=self._timeout,
                follow_redirects=True,
            )
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise FeedFetchError(
                message=f"Timeout fetching {url}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise FeedFetchError(
                message=f"HTTP {exc.response.status_code} for {url}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPError as exc:
            raise FeedFetchError(
                message=f"HTTP error fetching {url}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        parsed = feedparser.parse(response.content)

        # bozo is also set for recoverable problems (wrong declared
        # encoding, etc.); only give up when nothing usable came out.
        if parsed.bozo and not parsed.entries:
            raise FeedFetchError(
                message=f"Unparseable feed at {url}: {parsed.get('bozo_exception')}",
                provider_name=self.get_provider_name(),
            )

        items: list[FeedItem] = []
        for entry in parsed.entries:
            item = self._entry_to_item(entry)
            if item is not None:
                items.append(item)

        logger.info("feed_parsed", url=url, entries=len(parsed.entries), items=len(items))
        return items

    def get_provider_name(self) -> str:
        return "rss"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @classmethod
    def _entry_to_item(cls, entry: Any) -> FeedItem | None:
        link = (entry.get("link") or "").strip()
        if not link:
            return None

        return FeedItem(
            title=strip_html(entry.get("title")) or link,
            link=link,
            published=cls._published(entry),
            content=cls._content(entry),
        )

    @staticmethod
    def _content(entry: Any) -> str:
        """Plain-text body: the summary first, then the first content block."""
        summary = strip_html(entry.get("summary"))
        if summary:
            return summary
        for block in entry.get("content") or []:
            text = strip_html(block.get("value"))
            if text:
                return text
        return ""

    @staticmethod
    def _published(entry: Any) -> str | None:
        """ISO-8601 UTC publish time, falling back to the raw feed string."""
        for key in ("published_parsed", "updated_parsed"):
            struct = entry.get(key)
            if struct:
                moment = datetime.fromtimestamp(calendar.timegm(struct), tz=timezone.utc)
                return moment.strftime("%Y-%m-%dT%H:%M:%SZ")
        return entry.get("published") or entry.get("updated") or None
