"""Text helpers for feed content."""

from __future__ import annotations

import html
import re

_TAG_RE = re.compile(r"<[^>]+>")
_WS_RE = re.compile(r"\s+")


def strip_html(value: str | None) -> str:
    """Remove tags and entities from an HTML fragment and collapse whitespace."""
    if not value:
        return ""
    text = _TAG_RE.sub(" ", value)
    text = html.unescape(text)
    return _WS_RE.sub(" ", text).strip()


def truncate(text: str | None, length: int) -> str:
    """Return the first *length* characters of *text* ("" for empty input)."""
    if not text:
        return ""
    return text[:length]
