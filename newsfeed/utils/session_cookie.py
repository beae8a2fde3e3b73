"""HMAC-signed session cookie helpers.

# ─── HOW SESSION COOKIES WORK ────────────────────────────────────────
#
# Sessions live server-side in the ``sessions`` table.  The browser only
# holds the session id, signed so that a forged or tampered value is
# rejected before any database lookup.
#
# Cookie format:  {session_id}.{hmac_hex_digest}
#   - session_id: random URL-safe token (never contains ".")
#   - hmac:       HMAC-SHA256(secret, session_id)
#
# Expiry is enforced by the session store, not by the cookie.
# ─────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import hashlib
import hmac

COOKIE_NAME = "newsfeed_session"


def _sign(session_id: str, secret: str) -> str:
    return hmac.new(
        secret.encode("utf-8"),
        session_id.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def sign_session_id(session_id: str, secret: str) -> str:
    """Return the cookie value carrying *session_id*."""
    return f"{session_id}.{_sign(session_id, secret)}"


def unsign_session_cookie(cookie: str | None, secret: str) -> str | None:
    """Return the session id from a cookie value, or None if it is invalid."""
    if not cookie or "." not in cookie:
        return None

    session_id, provided = cookie.rsplit(".", 1)
    if not session_id:
        return None

    if not hmac.compare_digest(provided, _sign(session_id, secret)):
        return None
    return session_id
