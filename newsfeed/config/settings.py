"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# Values are read from two sources (in priority order):
#
#   1. **Environment variables** - e.g. SESSION_SECRET=...
#   2. **.env file** - key=value lines in the project root .env file
#
# Field ``session_secret`` maps to env var ``SESSION_SECRET``
# (pydantic-settings uppercases and matches).  Defaults apply when
# neither source provides a value.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Development-only fallback; production startup refuses to use it.
DEFAULT_SESSION_SECRET = "news-feed-secret-key-change-in-production"


class Settings(BaseSettings):
    """newsfeed application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Storage ===
    database_path: str = "data/newsfeed.db"

    # === Sessions ===
    session_secret: str = DEFAULT_SESSION_SECRET
    session_ttl_hours: int = 720  # 30 days

    # === Fetching ===
    # 0 disables the background fetch job; manual fetches still work.
    fetch_interval_minutes: int = 10
    max_articles_per_user: int = 200
    summary_length: int = 150
    http_timeout_seconds: float = 15.0

    # === CORS ===
    # Only consulted in production; development echoes any origin.
    allowed_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
    )

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 3000
    app_env: str = "development"
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"
