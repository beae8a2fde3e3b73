"""Feed domain models - sources, stored articles, parsed items, fetch results.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Models (bottom of the dependency graph - no imports from upper
# layers).  All models are frozen; updates go through
# ``model_copy(update={...})``.
#
#   Source      - an RSS URL a user registered
#   FeedItem    - one entry parsed out of a remote feed (not yet stored)
#   Article     - a FeedItem stored in a user's feed, with its summary
#   FetchResult - outcome of one run of the fetch pipeline
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

SOURCE_TYPE_RSS = "rss"


class Source(BaseModel):
    """A feed source registered by a user."""

    model_config = ConfigDict(frozen=True)

    id: int
    user_id: str
    name: str
    url: str
    type: str = Field(default=SOURCE_TYPE_RSS, description="Only 'rss' sources are fetched.")
    enabled: bool = True
    created_at: str | None = None


class FeedItem(BaseModel):
    """A single entry parsed from a remote feed."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    link: str
    published: str | None = Field(default=None, description="Publish date as given by the feed.")
    content: str = Field(default="", description="Plain-text body used for the summary.")


class Article(BaseModel):
    """A feed item stored in a user's feed."""

    model_config = ConfigDict(frozen=True)

    id: int
    user_id: str
    source_id: int | None = None
    source_name: str | None = None
    title: str
    link: str
    summary: str | None = None
    published_at: str | None = None
    fetched_at: str | None = None


class FetchResult(BaseModel):
    """Outcome of a fetch run for one user."""

    model_config = ConfigDict(frozen=True)

    success: bool
    message: str
    new_count: int = 0
    total: int | None = None
