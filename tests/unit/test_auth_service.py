"""Unit tests for AuthService against real SQLite stores.

bcrypt runs at its minimum cost here to keep the suite fast.
"""

from __future__ import annotations

import pytest

from newsfeed.services.auth_service import AuthService, hash_password, verify_password
from newsfeed.utils.errors import AuthenticationError, DuplicateEmailError, InvalidRequestError
from newsfeed.utils.session_cookie import sign_session_id


@pytest.fixture
def auth(user_store, session_store) -> AuthService:
    return AuthService(
        user_store=user_store,
        session_store=session_store,
        session_secret="test-secret",
        session_ttl_hours=1,
        bcrypt_rounds=4,
    )


# ─── Password hashing ─────────────────────────────────────────────

class TestPasswordHashing:
    def test_hash_and_verify(self):
        hashed = hash_password("hunter2", rounds=4)
        assert hashed.startswith("$2")
        assert verify_password("hunter2", hashed) is True
        assert verify_password("hunter3", hashed) is False

    def test_default_cost_is_ten(self):
        assert hash_password("pw").split("$")[2] == "10"

    def test_long_passwords_use_first_72_bytes(self):
        base = "a" * 72
        hashed = hash_password(base + "tail-one", rounds=4)
        assert verify_password(base + "tail-two", hashed) is True

    def test_malformed_hash(self):
        assert verify_password("pw", "not-a-bcrypt-hash") is False


# ─── Register / login ─────────────────────────────────────────────

class TestRegister:
    @pytest.mark.asyncio
    async def test_register_creates_user_and_session(self, auth, user_store):
        user, session = await auth.register("  Reader@Example.COM ", "pw")

        assert user.email == "reader@example.com"
        assert session.user_id == user.id
        assert session.email == "reader@example.com"

        record = await user_store.get_user_by_email("reader@example.com")
        assert record is not None
        assert record.password_hash != "pw"

    @pytest.mark.asyncio
    async def test_duplicate_email_any_case(self, auth):
        await auth.register("reader@example.com", "pw")
        with pytest.raises(DuplicateEmailError, match="Email already exists"):
            await auth.register("READER@example.com", "other")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email,password", [(None, "pw"), ("a@b.c", None), ("", "pw"), ("a@b.c", "")])
    async def test_missing_credentials(self, auth, email, password):
        with pytest.raises(InvalidRequestError, match="Email and password required"):
            await auth.register(email, password)


class TestLogin:
    @pytest.mark.asyncio
    async def test_login(self, auth):
        registered, _ = await auth.register("reader@example.com", "pw")
        user, session = await auth.login("Reader@example.com", "pw")
        assert user.id == registered.id
        assert session.user_id == registered.id

    @pytest.mark.asyncio
    async def test_wrong_password(self, auth):
        await auth.register("reader@example.com", "pw")
        with pytest.raises(AuthenticationError, match="Invalid credentials"):
            await auth.login("reader@example.com", "nope")

    @pytest.mark.asyncio
    async def test_unknown_email(self, auth):
        with pytest.raises(AuthenticationError, match="Invalid credentials") as exc_info:
            await auth.login("ghost@example.com", "pw")
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_missing_credentials(self, auth):
        with pytest.raises(InvalidRequestError):
            await auth.login("reader@example.com", None)


# ─── Sessions ─────────────────────────────────────────────────────

class TestSessions:
    @pytest.mark.asyncio
    async def test_resolve_signed_cookie(self, auth):
        user, session = await auth.register("reader@example.com", "pw")
        cookie = sign_session_id(session.session_id, "test-secret")

        resolved = await auth.resolve_session(cookie)

        assert resolved is not None
        assert resolved.user_id == user.id

    @pytest.mark.asyncio
    async def test_resolve_rejects_bad_signature(self, auth):
        _, session = await auth.register("reader@example.com", "pw")
        cookie = sign_session_id(session.session_id, "another-secret")
        assert await auth.resolve_session(cookie) is None
        assert await auth.resolve_session(None) is None

    @pytest.mark.asyncio
    async def test_logout_invalidates_session(self, auth):
        _, session = await auth.register("reader@example.com", "pw")
        cookie = sign_session_id(session.session_id, "test-secret")

        await auth.logout(session.session_id)

        assert await auth.resolve_session(cookie) is None

    @pytest.mark.asyncio
    async def test_logout_without_session_is_noop(self, auth):
        await auth.logout(None)

    async def test_exposes_cookie_settings(self, auth):
        assert auth.session_secret == "test-secret"
        assert auth.session_ttl_hours == 1
