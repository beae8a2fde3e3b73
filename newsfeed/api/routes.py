"""REST API routes for newsfeed.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: API (FastAPI route handlers).
# Services are read from ``request.app.state`` (wired by main.py).
# Authenticated routes depend on ``require_session``, which resolves
# the signed session cookie or raises AuthenticationError (401).
#
#   POST   /api/auth/register   - create account + session cookie
#   POST   /api/auth/login      - session cookie
#   POST   /api/auth/logout     - drop session + cookie
#   GET    /api/auth/me         - current user
#   GET    /api/sources         - list sources           (auth)
#   POST   /api/sources         - add source             (auth)
#   PATCH  /api/sources/{id}    - enable/disable source  (auth)
#   DELETE /api/sources/{id}    - delete source          (auth)
#   GET    /api/feed            - stored articles        (auth)
#   POST   /api/fetch           - run fetch pipeline     (auth)
#   GET    /api/stocks          - ticker panel
#   GET    /api/stock/{symbol}  - price history for one ticker
#   GET    /health              - liveness
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from newsfeed.api.schemas import (
    AuthResponse,
    CreateSourceRequest,
    CreateSourceResponse,
    CredentialsRequest,
    FetchResponse,
    HealthResponse,
    MeResponse,
    SuccessResponse,
    UpdateSourceRequest,
)
from newsfeed.models.feed import Article, Source
from newsfeed.models.quote import PriceHistory, StockQuote
from newsfeed.models.user import SessionData, User
from newsfeed.services.auth_service import AuthService
from newsfeed.services.feed_service import FeedService
from newsfeed.services.quote_service import QuoteService
from newsfeed.services.source_service import SourceService
from newsfeed.utils.errors import AuthenticationError, ConfigurationError
from newsfeed.utils.session_cookie import COOKIE_NAME, sign_session_id

logger = structlog.get_logger(logger_name=__name__)

router = APIRouter()


# ── Service accessors ─────────────────────────────────────────────────

def _state(request: Request, name: str) -> Any:
    component = getattr(request.app.state, name, None)
    if component is None:
        raise ConfigurationError(f"{name} is not configured")
    return component


def _auth_service(request: Request) -> AuthService:
    return _state(request, "auth_service")


def _source_service(request: Request) -> SourceService:
    return _state(request, "source_service")


def _feed_service(request: Request) -> FeedService:
    return _state(request, "feed_service")


def _quote_service(request: Request) -> QuoteService:
    return _state(request, "quote_service")


async def require_session(request: Request) -> SessionData:
    """Resolve the session cookie or fail with 401."""
    session = await _auth_service(request).resolve_session(request.cookies.get(COOKIE_NAME))
    if session is None:
        raise AuthenticationError("Not authenticated")
    return session


# ── Cookie helpers ────────────────────────────────────────────────────

def _cookie_flags(request: Request) -> dict[str, Any]:
    """Attributes shared by the session cookie and the cookie that clears it."""
    production = bool(getattr(request.app.state, "is_production", False))
    return {
        "path": "/",
        "httponly": True,
        "secure": production,
        "samesite": "none" if production else "lax",
    }


def _set_session_cookie(request: Request, response: JSONResponse, session: SessionData) -> None:
    auth = _auth_service(request)
    response.set_cookie(
        key=COOKIE_NAME,
        value=sign_session_id(session.session_id, auth.session_secret),
        max_age=auth.session_ttl_hours * 3600,
        **_cookie_flags(request),
    )


def _auth_response(request: Request, user: User, session: SessionData) -> JSONResponse:
    body = AuthResponse(user_id=user.id, email=user.email)
    response = JSONResponse(content=body.model_dump(by_alias=True))
    _set_session_cookie(request, response, session)
    return response


# ── Auth ──────────────────────────────────────────────────────────────

@router.post("/api/auth/register", response_model=AuthResponse)
async def register(request: Request, body: CredentialsRequest) -> JSONResponse:
    user, session = await _auth_service(request).register(body.email, body.password)
    return _auth_response(request, user, session)


@router.post("/api/auth/login", response_model=AuthResponse)
async def login(request: Request, body: CredentialsRequest) -> JSONResponse:
    user, session = await _auth_service(request).login(body.email, body.password)
    return _auth_response(request, user, session)


@router.post("/api/auth/logout", response_model=SuccessResponse)
async def logout(request: Request) -> JSONResponse:
    auth = _auth_service(request)
    session = await auth.resolve_session(request.cookies.get(COOKIE_NAME))
    await auth.logout(session.session_id if session else None)

    response = JSONResponse(content=SuccessResponse().model_dump())
    response.delete_cookie(key=COOKIE_NAME, **_cookie_flags(request))
    return response


@router.get("/api/auth/me", response_model=MeResponse)
async def me(session: SessionData = Depends(require_session)) -> MeResponse:
    return MeResponse(user_id=session.user_id, email=session.email)


# ── Sources ───────────────────────────────────────────────────────────

@router.get("/api/sources", response_model=list[Source])
async def list_sources(
    request: Request,
    session: SessionData = Depends(require_session),
) -> list[Source]:
    return await _source_service(request).list_sources(session.user_id)


@router.post("/api/sources", response_model=CreateSourceResponse)
async def add_source(
    request: Request,
    body: CreateSourceRequest,
    session: SessionData = Depends(require_session),
) -> CreateSourceResponse:
    source_id = await _source_service(request).add_source(
        session.user_id, body.name, body.url, body.type
    )
    return CreateSourceResponse(id=source_id)


@router.patch("/api/sources/{source_id}", response_model=SuccessResponse)
async def update_source(
    request: Request,
    source_id: int,
    body: UpdateSourceRequest,
    session: SessionData = Depends(require_session),
) -> SuccessResponse:
    await _source_service(request).set_enabled(session.user_id, source_id, body.enabled)
    return SuccessResponse()


@router.delete("/api/sources/{source_id}", response_model=SuccessResponse)
async def delete_source(
    request: Request,
    source_id: int,
    session: SessionData = Depends(require_session),
) -> SuccessResponse:
    await _source_service(request).delete_source(session.user_id, source_id)
    return SuccessResponse()


# ── Feed ──────────────────────────────────────────────────────────────

@router.get("/api/feed", response_model=list[Article])
async def get_feed(
    request: Request,
    session: SessionData = Depends(require_session),
) -> list[Article]:
    return await _feed_service(request).list_feed(session.user_id)


@router.post("/api/fetch", response_model=FetchResponse)
async def fetch(
    request: Request,
    session: SessionData = Depends(require_session),
) -> FetchResponse:
    result = await _feed_service(request).fetch_articles(session.user_id)
    return FetchResponse(success=result.success, message=result.message)


# ── Stocks ────────────────────────────────────────────────────────────

@router.get("/api/stocks", response_model=list[StockQuote])
async def get_stocks(request: Request) -> list[StockQuote]:
    return await _quote_service(request).get_quotes()


@router.get("/api/stock/{symbol}", response_model=PriceHistory)
async def get_stock_history(request: Request, symbol: str) -> PriceHistory:
    return await _quote_service(request).get_history(symbol)


# ── Health ────────────────────────────────────────────────────────────

@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse()
