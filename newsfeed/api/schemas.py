"""Request and response schemas for the newsfeed API.

Request bodies declare every field optional so that the services can
answer missing input with the same 400 messages the frontend expects
("Email and password required", "Missing required fields") instead of a
generic 422.  Response schemas mirror the JSON the frontend reads,
including its camelCase keys (``userId``, ``changePercent``).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


# ─── Request schemas ──────────────────────────────────────────────────

class CredentialsRequest(BaseModel):
    """Body for register and login."""

    email: str | None = None
    password: str | None = None


class CreateSourceRequest(BaseModel):
    """Body for adding a source."""

    name: str | None = None
    url: str | None = None
    type: str | None = Field(default=None, description="Source type; only 'rss' is fetched.")


class UpdateSourceRequest(BaseModel):
    """Body for toggling a source."""

    enabled: bool


# ─── Response schemas ─────────────────────────────────────────────────

class AuthResponse(BaseModel):
    """Returned by register and login."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    success: bool = True
    user_id: str = Field(alias="userId")
    email: str


class MeResponse(BaseModel):
    """Returned by /api/auth/me."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    user_id: str = Field(alias="userId")
    email: str


class SuccessResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool = True


class CreateSourceResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool = True
    id: int


class FetchResponse(BaseModel):
    """Outcome of POST /api/fetch."""

    model_config = ConfigDict(frozen=True)

    success: bool
    message: str


class HealthResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: str = "ok"


class ErrorResponse(BaseModel):
    """Body of every error response."""

    model_config = ConfigDict(frozen=True)

    error: str = Field(description="Human-readable error message.")
