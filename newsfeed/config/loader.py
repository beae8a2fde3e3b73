"""Resolve the runtime configuration dictionary.

Two layers, the second winning on overlapping keys:

  config/config.yaml   static defaults (ticker symbols, feed limits)
  Settings             .env file and environment variables

Only the keys Settings actually owns are overlaid, so YAML-only sections
such as ``stocks`` pass through untouched.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from newsfeed.config.settings import Settings

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "config.yaml"
DEFAULT_STOCK_SYMBOLS = ["TSLA", "BTC-USD", "TOY.TO", "^GSPC"]


def load_config(
    path: str | Path = DEFAULT_CONFIG_PATH,
    settings: Settings | None = None,
) -> dict[str, Any]:
    """Read *path* and overlay the environment-backed values from *settings*.

    A missing file is not an error; the result then holds only the
    Settings values and the default ticker symbols.
    """
    config = merge_config(_read_yaml(Path(path)), _settings_layer(settings or Settings()))
    config.setdefault("stocks", {}).setdefault("symbols", list(DEFAULT_STOCK_SYMBOLS))
    return config


def merge_config(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Return a new dict with *overlay* merged into *base*, section by section."""
    merged = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_config(current, value)
        else:
            merged[key] = value
    return merged


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    return data if isinstance(data, dict) else {}


def _settings_layer(settings: Settings) -> dict[str, Any]:
    return {
        "app": {
            "host": settings.app_host,
            "port": settings.app_port,
            "env": settings.app_env,
        },
        "feed": {
            "max_articles_per_user": settings.max_articles_per_user,
            "summary_length": settings.summary_length,
            "fetch_interval_minutes": settings.fetch_interval_minutes,
        },
        "logging": {"level": settings.log_level},
    }
