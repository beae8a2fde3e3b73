"""newsfeed FastAPI application entry point.

Wires together all storage providers, fetch providers, services, and
routes via dependency injection.  Loads configuration from ``.env`` and
``config/config.yaml``, configures structured logging, starts the
background fetch job, and serves the single-page frontend from
``public/``.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, HTMLResponse, JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from newsfeed.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from newsfeed.api.routes import router as api_router
from newsfeed.api.schemas import ErrorResponse
from newsfeed.config.loader import load_config
from newsfeed.config.settings import DEFAULT_SESSION_SECRET, Settings
from newsfeed.providers.feed.rss_feed_provider import RSSFeedProvider
from newsfeed.providers.quotes.yahoo_finance_provider import YahooFinanceQuoteProvider
from newsfeed.providers.storage import (
    SQLiteArticleStore,
    SQLiteDatabase,
    SQLiteSessionStore,
    SQLiteSourceStore,
    SQLiteUserStore,
)
from newsfeed.services.auth_service import AuthService
from newsfeed.services.feed_service import FeedService
from newsfeed.services.fetch_scheduler import FetchScheduler
from newsfeed.services.quote_service import QuoteService
from newsfeed.services.source_service import SourceService
from newsfeed.utils.errors import ConfigurationError
from newsfeed.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_PUBLIC_DIR = Path(__file__).resolve().parent.parent / "public"
_NOT_FOUND_HTML = "<h1>404 - Not Found</h1>"

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()

configure_logging(
    log_level=settings.log_level,
    json_output=settings.is_production,
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Full DI assembly for the FastAPI application
# ---------------------------------------------------------------------------


def _check_session_secret(app_settings: Settings) -> None:
    if app_settings.session_secret != DEFAULT_SESSION_SECRET:
        return
    if app_settings.is_production:
        raise ConfigurationError("SESSION_SECRET must be set in production")
    _logger.warning("default_session_secret", message="Set SESSION_SECRET before deploying")


def _build_all(
    app_settings: Settings,
    app_config: dict[str, Any],
    http_client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    # -- Shared resources --
    http_client = http_client or httpx.AsyncClient(
        timeout=httpx.Timeout(app_settings.http_timeout_seconds),
        follow_redirects=True,
    )
    database = SQLiteDatabase(app_settings.database_path)

    # -- Storage --
    user_store = SQLiteUserStore(database)
    session_store = SQLiteSessionStore(database)
    source_store = SQLiteSourceStore(database)
    article_store = SQLiteArticleStore(database)

    # -- Upstream providers --
    feed_provider = RSSFeedProvider(
        http_client=http_client, timeout=app_settings.http_timeout_seconds
    )
    quote_provider = YahooFinanceQuoteProvider(http_client=http_client)

    # -- Services --
    feed_cfg = app_config.get("feed", {})
    stocks_cfg = app_config.get("stocks", {})

    auth_service = AuthService(
        user_store=user_store,
        session_store=session_store,
        session_secret=app_settings.session_secret,
        session_ttl_hours=app_settings.session_ttl_hours,
    )
    source_service = SourceService(source_store=source_store)
    feed_service = FeedService(
        source_store=source_store,
        article_store=article_store,
        feed_provider=feed_provider,
        max_articles=feed_cfg.get("max_articles_per_user", app_settings.max_articles_per_user),
        summary_length=feed_cfg.get("summary_length", app_settings.summary_length),
    )
    quote_service = QuoteService(
        quote_provider=quote_provider,
        symbols=stocks_cfg.get("symbols", []),
        history_range=stocks_cfg.get("history_range", "1mo"),
    )

    # -- Background job (disabled when the interval is 0) --
    interval_minutes = feed_cfg.get("fetch_interval_minutes", app_settings.fetch_interval_minutes)
    scheduler = None
    if interval_minutes > 0:
        scheduler = FetchScheduler(
            feed_service=feed_service,
            user_store=user_store,
            interval_seconds=interval_minutes * 60,
        )

    return {
        "http_client": http_client,
        "database": database,
        "user_store": user_store,
        "session_store": session_store,
        "source_store": source_store,
        "article_store": article_store,
        "feed_provider": feed_provider,
        "quote_provider": quote_provider,
        "auth_service": auth_service,
        "source_service": source_service,
        "feed_service": feed_service,
        "quote_service": quote_service,
        "fetch_scheduler": scheduler,
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Initialise storage and the fetch job on startup, clean up on shutdown."""
    app_settings: Settings = application.state.settings
    components = _build_all(
        app_settings,
        application.state.config,
        http_client=application.state.http_client_override,
    )

    for key, value in components.items():
        setattr(application.state, key, value)

    database: SQLiteDatabase = components["database"]
    await database.initialize()
    pruned = await components["session_store"].prune_expired()

    scheduler: FetchScheduler | None = components["fetch_scheduler"]
    if scheduler is not None:
        scheduler.start()

    _logger.info(
        "app_startup",
        version=application.version,
        environment=app_settings.app_env,
        database=str(database.path),
        expired_sessions_pruned=pruned,
        fetch_job=scheduler is not None,
    )

    yield

    # -- Shutdown: stop the fetch job, close shared httpx client --
    if scheduler is not None:
        await scheduler.stop()
    http_client: httpx.AsyncClient = components["http_client"]
    await http_client.aclose()
    _logger.info("app_shutdown", message="HTTP client closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


async def _not_found_handler(request: Request, exc: StarletteHTTPException) -> Response:
    if exc.status_code == 404:
        return HTMLResponse(_NOT_FOUND_HTML, status_code=404)
    return await http_exception_handler(request, exc)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
    _logger.info("request_validation_failed", path=str(request.url.path), errors=exc.errors())
    return JSONResponse(status_code=400, content=ErrorResponse(error="Invalid request").model_dump())


def create_app(
    app_settings: Settings | None = None,
    http_client: httpx.AsyncClient | None = None,
    public_dir: Path = _PUBLIC_DIR,
) -> FastAPI:
    """Build and configure the FastAPI application.

    Parameters
    ----------
    app_settings:
        Settings to use; the module-level settings when omitted.
    http_client:
        Shared client for upstream feed and quote requests.  A fresh one
        is created at startup when omitted.
    public_dir:
        Directory of frontend assets served at ``/``.
    """
    app_settings = app_settings or settings
    _check_session_secret(app_settings)
    app_config = load_config(settings=app_settings)

    application = FastAPI(
        title="newsfeed API",
        version=str(app_config.get("app", {}).get("version", "0.1.0")),
        description=(
            "Personal RSS aggregator: register, subscribe to feeds, fetch and "
            "deduplicate articles, and watch a small stock ticker panel."
        ),
        lifespan=_lifespan,
    )
    application.state.settings = app_settings
    application.state.config = app_config
    application.state.is_production = app_settings.is_production
    application.state.http_client_override = http_client

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(
        application,
        allowed_origins=app_settings.allowed_origins,
        allow_any_origin=not app_settings.is_production,
    )

    application.add_exception_handler(StarletteHTTPException, _not_found_handler)
    application.add_exception_handler(RequestValidationError, _validation_error_handler)

    # -- API routes --
    application.include_router(api_router)

    # -- Frontend static files --
    index_file = public_dir / "index.html"

    @application.get("/", include_in_schema=False)
    async def serve_index() -> Response:
        if index_file.exists():
            return FileResponse(str(index_file))
        return HTMLResponse(_NOT_FOUND_HTML, status_code=404)

    if public_dir.is_dir():
        application.mount("/", StaticFiles(directory=str(public_dir)), name="public")

    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def run() -> None:
    """Serve ``newsfeed.main:app`` with uvicorn (auto-reload in development)."""
    uvicorn.run(
        "newsfeed.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )


if __name__ == "__main__":
    run()
