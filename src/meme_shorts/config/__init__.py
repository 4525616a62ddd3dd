"""Settings loading."""

from .settings import (
    AppSettings,
    ConfigurationError,
    PathsConfig,
    RedditConfig,
    load_settings,
)

__all__ = [
    "AppSettings",
    "ConfigurationError",
    "PathsConfig",
    "RedditConfig",
    "load_settings",
]
