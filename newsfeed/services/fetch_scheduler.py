"""Background job that periodically fetches every active user's feed.

Runs as a single asyncio task started from the application lifespan.
Each tick walks the users that own at least one enabled source and
calls :meth:`FeedService.fetch_articles` for them one after another.
The pipeline's process-wide guard also covers this job: if a manual
fetch is running when a user's turn comes, that user is skipped until
the next tick.
"""

from __future__ import annotations

import asyncio
import contextlib

import structlog

from newsfeed.interfaces.user_store import IUserStore
from newsfeed.services.feed_service import FeedService

logger = structlog.get_logger(logger_name=__name__)


class FetchScheduler:
    """Fixed-interval fetch loop.

    Parameters
    ----------
    feed_service:
        The pipeline to run for each user.
    user_store:
        Source of user ids with enabled sources.
    interval_seconds:
        Delay between the end of one run and the start of the next.
    """

    def __init__(
        self,
        feed_service: FeedService,
        user_store: IUserStore,
        interval_seconds: float,
    ) -> None:
        self._feed_service = feed_service
        self._users = user_store
        self._interval = interval_seconds
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._loop(), name="newsfeed-fetch-scheduler")
        logger.info("fetch_scheduler_started", interval_seconds=self._interval)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("fetch_scheduler_stopped")

    async def run_once(self) -> int:
        """Fetch for every active user; returns how many fetches completed."""
        user_ids = await self._users.list_user_ids_with_enabled_sources()
        completed = 0
        for user_id in user_ids:
            result = await self._feed_service.fetch_articles(user_id)
            if result.success:
                completed += 1
            else:
                logger.info("scheduled_fetch_skipped", user_id=user_id, reason=result.message)
        logger.info("scheduled_fetch_complete", users=len(user_ids), completed=completed)
        return completed

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                await self.run_once()
            except Exception as exc:
                # Keep the loop alive; the next tick retries.
                logger.exception("scheduled_fetch_failed", error=str(exc))
