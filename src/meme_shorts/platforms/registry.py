"""Lookup table from platform name to its publisher and config classes."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, NamedTuple, Optional, Type

if TYPE_CHECKING:
    from .base import PlatformConfig, PlatformPublisher, ProgressCallback


class _Entry(NamedTuple):
    publisher_cls: Type["PlatformPublisher"]
    config_cls: Type["PlatformConfig"]


class PlatformRegistry:
    """Name-keyed factory used by the CLI to build the upload target.

    Names are case-insensitive. Adapters shipped with the package are
    added when this module is imported.

        config = PlatformRegistry.load_config("youtube", base_dir, settings.platforms)
        publisher = PlatformRegistry.get_publisher("youtube", config)
    """

    _entries: dict[str, _Entry] = {}

    @classmethod
    def register(
        cls,
        name: str,
        publisher_cls: Type["PlatformPublisher"],
        config_cls: Type["PlatformConfig"],
    ) -> None:
        """Add or replace the adapter stored under ``name``."""
        cls._entries[name.lower()] = _Entry(publisher_cls, config_cls)

    @classmethod
    def get_publisher(
        cls,
        name: str,
        config: "PlatformConfig",
        progress_callback: "ProgressCallback" = None,
    ) -> "PlatformPublisher":
        """Instantiate the publisher for ``name`` around a loaded config."""
        entry = cls._entry(name)
        return entry.publisher_cls(config, progress_callback=progress_callback)

    @classmethod
    def load_config(
        cls,
        name: str,
        base_dir: Path,
        platforms_data: Optional[dict[str, Any]] = None,
    ) -> "PlatformConfig":
        """Read the ``platforms.<name>`` settings block into a config object.

        Missing blocks are fine; the config then reads the environment.
        Unknown names raise ``ValueError``.
        """
        section = (platforms_data or {}).get(name.lower()) or {}
        return cls._entry(name).config_cls.from_settings(base_dir, section)

    @classmethod
    def available_platforms(cls) -> list[str]:
        return sorted(cls._entries)

    @classmethod
    def is_registered(cls, name: str) -> bool:
        return name.lower() in cls._entries

    @classmethod
    def _entry(cls, name: str) -> _Entry:
        try:
            return cls._entries[name.lower()]
        except KeyError:
            known = ", ".join(sorted(cls._entries)) or "none"
            raise ValueError(f"Unknown platform: {name.lower()}. Available: {known}") from None


def _install_builtin_adapters() -> None:
    from .youtube import YouTubeConfig, YouTubePublisher

    PlatformRegistry.register("youtube", YouTubePublisher, YouTubeConfig)


_install_builtin_adapters()
