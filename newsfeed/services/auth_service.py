"""Account registration, login, and session resolution.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Services.  Depends on IUserStore and ISessionStore.
#
#   register / login  → returns (User, SessionData); the API layer turns
#                       the session id into a signed cookie
#   resolve_session   → cookie value → SessionData (or None)
#   logout            → deletes the server-side session
#
# Passwords are hashed with bcrypt (cost 10).  bcrypt only looks at the
# first 72 bytes of a password, so longer inputs are cut to 72 bytes
# before hashing and checking.  Hashing runs in a worker thread to keep
# the event loop free.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import asyncio
from uuid import uuid4

import bcrypt
import structlog

from newsfeed.interfaces.session_store import ISessionStore
from newsfeed.interfaces.user_store import IUserStore
from newsfeed.models.user import SessionData, User
from newsfeed.utils.errors import AuthenticationError, DuplicateEmailError, InvalidRequestError
from newsfeed.utils.session_cookie import unsign_session_cookie

logger = structlog.get_logger(logger_name=__name__)

_BCRYPT_ROUNDS = 10
_BCRYPT_MAX_BYTES = 72


def hash_password(password: str, rounds: int = _BCRYPT_ROUNDS) -> str:
    """Return the bcrypt hash of *password* as text."""
    secret = password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(secret, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check *password* against a stored bcrypt hash."""
    secret = password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(secret, password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash.
        return False


class AuthService:
    """Registers users, checks credentials, and manages login sessions."""

    def __init__(
        self,
        user_store: IUserStore,
        session_store: ISessionStore,
        session_secret: str,
        session_ttl_hours: int = 720,
        bcrypt_rounds: int = _BCRYPT_ROUNDS,
    ) -> None:
        self._users = user_store
        self._sessions = session_store
        self._secret = session_secret
        self._ttl_hours = session_ttl_hours
        self._rounds = bcrypt_rounds

    @property
    def session_ttl_hours(self) -> int:
        return self._ttl_hours

    @property
    def session_secret(self) -> str:
        return self._secret

    async def register(self, email: str | None, password: str | None) -> tuple[User, SessionData]:
        """Create an account and log it in."""
        email, password = self._require_credentials(email, password)

        if await self._users.get_user_by_email(email) is not None:
            raise DuplicateEmailError()

        password_hash = await asyncio.to_thread(hash_password, password, self._rounds)
        user = await self._users.create_user(str(uuid4()), email, password_hash)
        session = await self._sessions.create_session(user.id, user.email, self._ttl_hours)

        logger.info("user_registered", user_id=user.id)
        return user, session

    async def login(self, email: str | None, password: str | None) -> tuple[User, SessionData]:
        """Check credentials and open a new session."""
        email, password = self._require_credentials(email, password)

        record = await self._users.get_user_by_email(email)
        if record is None:
            raise AuthenticationError("Invalid credentials")

        valid = await asyncio.to_thread(verify_password, password, record.password_hash)
        if not valid:
            logger.info("login_failed", user_id=record.id)
            raise AuthenticationError("Invalid credentials")

        session = await self._sessions.create_session(record.id, record.email, self._ttl_hours)
        logger.info("user_logged_in", user_id=record.id)
        return record.to_user(), session

    async def logout(self, session_id: str | None) -> None:
        if session_id:
            await self._sessions.delete_session(session_id)

    async def resolve_session(self, cookie: str | None) -> SessionData | None:
        """Return the live session behind a signed cookie value, if any."""
        session_id = unsign_session_cookie(cookie, self._secret)
        if session_id is None:
            return None
        return await self._sessions.get_session(session_id)

    @staticmethod
    def _require_credentials(email: str | None, password: str | None) -> tuple[str, str]:
        if not email or not email.strip() or not password:
            raise InvalidRequestError("Email and password required")
        return email.strip().lower(), password
