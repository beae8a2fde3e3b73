"""Domain models for newsfeed."""

from newsfeed.models.feed import SOURCE_TYPE_RSS, Article, FeedItem, FetchResult, Source
from newsfeed.models.quote import PriceHistory, StockQuote
from newsfeed.models.user import SessionData, User, UserRecord

__all__ = [
    "SOURCE_TYPE_RSS",
    "Article",
    "FeedItem",
    "FetchResult",
    "PriceHistory",
    "SessionData",
    "Source",
    "StockQuote",
    "User",
    "UserRecord",
]
