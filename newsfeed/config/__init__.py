"""Configuration module - exports Settings and load_config."""

from newsfeed.config.loader import load_config
from newsfeed.config.settings import Settings

__all__ = ["Settings", "load_config"]
