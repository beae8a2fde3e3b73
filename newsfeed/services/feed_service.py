"""Feed reading and the fetch → dedupe → summarise → prune pipeline.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Services.  Depends on ISourceStore, IArticleStore, IFeedProvider.
#
# fetch_articles(user_id):
#
#   1. GUARD     - one fetch per process; a concurrent call returns
#                  "Fetch already in progress" immediately, it never waits
#   2. SOURCES   - the user's enabled sources only
#   3. FETCH     - per source; a failing source is logged and skipped
#   4. DEDUPE    - exact link match against the user's stored links
#   5. SUMMARISE - first ``summary_length`` characters of the content
#   6. PRUNE     - above ``max_articles`` rows, delete the oldest by
#                  fetch time until the count is back at the ceiling
#
# The guard is process-wide, not per user: the manual /api/fetch route
# and the background job share it.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import asyncio

import structlog

from newsfeed.interfaces.article_store import IArticleStore
from newsfeed.interfaces.feed_provider import IFeedProvider
from newsfeed.interfaces.source_store import ISourceStore
from newsfeed.models.feed import SOURCE_TYPE_RSS, Article, FeedItem, FetchResult, Source
from newsfeed.utils.errors import NewsFeedError
from newsfeed.utils.text import truncate

logger = structlog.get_logger(logger_name=__name__)

DEFAULT_MAX_ARTICLES = 200
DEFAULT_SUMMARY_LENGTH = 150

FETCH_IN_PROGRESS_MESSAGE = "Fetch already in progress"


class FeedService:
    """Serves a user's feed and runs the fetch pipeline for it."""

    def __init__(
        self,
        source_store: ISourceStore,
        article_store: IArticleStore,
        feed_provider: IFeedProvider,
        max_articles: int = DEFAULT_MAX_ARTICLES,
        summary_length: int = DEFAULT_SUMMARY_LENGTH,
    ) -> None:
        self._sources = source_store
        self._articles = article_store
        self._feed_provider = feed_provider
        self._max_articles = max_articles
        self._summary_length = summary_length
        self._lock = asyncio.Lock()

    @property
    def is_fetching(self) -> bool:
        return self._lock.locked()

    async def list_feed(self, user_id: str) -> list[Article]:
        """Return the user's stored articles, newest publish date first."""
        return await self._articles.list_articles(user_id)

    def summarize(self, content: str | None) -> str:
        return truncate(content, self._summary_length)

    async def fetch_articles(self, user_id: str) -> FetchResult:
        """Pull new items from every enabled source of *user_id*."""
        # No await between the check and the acquire, so this is atomic
        # on the event loop.
        if self._lock.locked():
            logger.info("fetch_skipped_in_progress", user_id=user_id)
            return FetchResult(success=False, message=FETCH_IN_PROGRESS_MESSAGE)

        async with self._lock:
            logger.info("fetch_started", user_id=user_id)
            try:
                return await self._run_fetch(user_id)
            except Exception as exc:
                logger.exception("fetch_failed", user_id=user_id, error=str(exc))
                return FetchResult(success=False, message=str(exc))

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------

    async def _run_fetch(self, user_id: str) -> FetchResult:
        sources = [s for s in await self._sources.list_sources(user_id) if s.enabled]
        seen_links = await self._articles.list_links(user_id)
        new_count = 0

        for source in sources:
            try:
                items = await self._fetch_source(source)
            except NewsFeedError as exc:
                logger.warning(
                    "source_fetch_failed",
                    user_id=user_id,
                    source_id=source.id,
                    source=source.name,
                    error=str(exc),
                )
                continue

            new_count += await self._store_new_items(user_id, source, items, seen_links)

        total = await self._prune(user_id)
        logger.info("fetch_complete", user_id=user_id, new=new_count, total=total)
        return FetchResult(
            success=True,
            message=f"Fetched {new_count} new articles. Total: {total}",
            new_count=new_count,
            total=total,
        )

    async def _fetch_source(self, source: Source) -> list[FeedItem]:
        if source.type != SOURCE_TYPE_RSS:
            return []
        logger.info("source_fetching", source_id=source.id, source=source.name)
        return await self._feed_provider.fetch_items(source.url)

    async def _store_new_items(
        self,
        user_id: str,
        source: Source,
        items: list[FeedItem],
        seen_links: set[str],
    ) -> int:
        stored = 0
        for item in items:
            if item.link in seen_links:
                continue

            inserted = await self._articles.insert_article(
                user_id=user_id,
                source_id=source.id,
                source_name=source.name,
                title=item.title,
                link=item.link,
                summary=self.summarize(item.content),
                published_at=item.published,
            )
            seen_links.add(item.link)
            if inserted:
                stored += 1
        return stored

    async def _prune(self, user_id: str) -> int:
        """Trim the user's articles to the ceiling; returns the final count."""
        count = await self._articles.count_articles(user_id)
        if count > self._max_articles:
            await self._articles.delete_oldest(user_id, count - self._max_articles)
            count = await self._articles.count_articles(user_id)
        return count
