"""Per-user feed source management."""

from __future__ import annotations

import structlog

from newsfeed.interfaces.source_store import ISourceStore
from newsfeed.models.feed import Source
from newsfeed.utils.errors import InvalidRequestError, NotFoundError
from newsfeed.utils.url_safety import validate_source_url

logger = structlog.get_logger(logger_name=__name__)


class SourceService:
    """Adds, lists, toggles and removes a user's sources.

    URLs are checked by :func:`validate_source_url` before anything is
    stored, since sources are later fetched from the server.
    """

    def __init__(self, source_store: ISourceStore) -> None:
        self._sources = source_store

    async def list_sources(self, user_id: str) -> list[Source]:
        return await self._sources.list_sources(user_id)

    async def add_source(
        self,
        user_id: str,
        name: str | None,
        url: str | None,
        source_type: str | None,
    ) -> int:
        """Validate and store a new source; returns its id."""
        if not name or not url or not source_type:
            raise InvalidRequestError("Missing required fields")

        validate_source_url(url)
        return await self._sources.create_source(user_id, name, url, source_type, enabled=True)

    async def delete_source(self, user_id: str, source_id: int) -> None:
        deleted = await self._sources.delete_source(source_id, user_id)
        if deleted == 0:
            raise NotFoundError("Source not found")

    async def set_enabled(self, user_id: str, source_id: int, enabled: bool) -> None:
        updated = await self._sources.set_source_enabled(source_id, user_id, enabled)
        if not updated:
            raise NotFoundError("Source not found")
        logger.info("source_toggled", user_id=user_id, source_id=source_id, enabled=enabled)
