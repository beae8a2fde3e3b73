"""User and session domain models.

Frozen pydantic v2 models.  ``UserRecord`` carries the bcrypt password
hash and never leaves the service layer; ``User`` is the public view.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """A registered account, without credentials."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Random URL-safe user identifier.")
    email: str = Field(description="Lower-cased login email.")
    created_at: str | None = Field(default=None, description="UTC creation time.")


class UserRecord(User):
    """A user row including its password hash."""

    password_hash: str = Field(description="bcrypt hash of the password.")

    def to_user(self) -> User:
        return User(id=self.id, email=self.email, created_at=self.created_at)


class SessionData(BaseModel):
    """A server-side login session."""

    model_config = ConfigDict(frozen=True)

    session_id: str
    user_id: str
    email: str
    created_at: str
    expires_at: str
