"""Remote feed providers.

RSSFeedProvider downloads RSS/Atom documents with httpx and parses them
with feedparser.
"""

from newsfeed.providers.feed.rss_feed_provider import RSSFeedProvider

__all__ = ["RSSFeedProvider"]
