"""Shared pytest fixtures for the newsfeed test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from newsfeed.providers.storage import (
    SQLiteArticleStore,
    SQLiteDatabase,
    SQLiteSessionStore,
    SQLiteSourceStore,
    SQLiteUserStore,
)

# ---------------------------------------------------------------------------
# Feed documents
# ---------------------------------------------------------------------------

SAMPLE_RSS = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Example News</title>
    <link>https://news.example.com/</link>
    <description>Example feed</description>
    <item>
      <title>First &amp; foremost</title>
      <link>https://news.example.com/a/1</link>
      <pubDate>Tue, 10 Jun 2025 09:30:00 +0200</pubDate>
      <description>&lt;p&gt;Hello &lt;b&gt;world&lt;/b&gt;, this is the first story.&lt;/p&gt;</description>
    </item>
    <item>
      <title>Second story</title>
      <link>https://news.example.com/a/2</link>
      <pubDate>Mon, 09 Jun 2025 12:00:00 GMT</pubDate>
      <description>Plain text body of the second story.</description>
    </item>
    <item>
      <title>No link here</title>
      <description>This entry is dropped.</description>
    </item>
  </channel>
</rss>
"""

SAMPLE_ATOM = b"""<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Example Atom</title>
  <id>urn:example:feed</id>
  <updated>2025-06-11T08:00:00Z</updated>
  <entry>
    <title>Atom entry</title>
    <id>urn:example:1</id>
    <link href="https://atom.example.com/posts/1"/>
    <updated>2025-06-11T08:00:00Z</updated>
    <content type="html">&lt;div&gt;Atom &lt;em&gt;content&lt;/em&gt; body&lt;/div&gt;</content>
  </entry>
</feed>
"""


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path of a fresh SQLite file inside the test's temp directory."""
    return tmp_path / "newsfeed-test.db"


@pytest.fixture
async def database(db_path: Path) -> SQLiteDatabase:
    db = SQLiteDatabase(db_path)
    await db.initialize()
    return db


@pytest.fixture
def user_store(database: SQLiteDatabase) -> SQLiteUserStore:
    return SQLiteUserStore(database)


@pytest.fixture
def session_store(database: SQLiteDatabase) -> SQLiteSessionStore:
    return SQLiteSessionStore(database)


@pytest.fixture
def source_store(database: SQLiteDatabase) -> SQLiteSourceStore:
    return SQLiteSourceStore(database)


@pytest.fixture
def article_store(database: SQLiteDatabase) -> SQLiteArticleStore:
    return SQLiteArticleStore(database)


@pytest.fixture
async def user_id(user_store: SQLiteUserStore) -> str:
    """Id of a stored user (sources and articles need an owning row)."""
    user = await user_store.create_user("user-1", "reader@example.com", "not-a-real-hash")
    return user.id


@pytest.fixture
async def other_user_id(user_store: SQLiteUserStore) -> str:
    user = await user_store.create_user("user-2", "other@example.com", "not-a-real-hash")
    return user.id


@pytest.fixture
def rss_document() -> bytes:
    return SAMPLE_RSS


@pytest.fixture
def atom_document() -> bytes:
    return SAMPLE_ATOM
