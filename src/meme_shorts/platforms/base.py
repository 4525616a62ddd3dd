"""Publisher interface, receipts and errors shared by every upload target.

The upload orchestrator only talks to :class:`PlatformPublisher`; each
platform maps its own failures onto :class:`PublishError` kinds.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

from ..constants import PublishErrorKind, Visibility

ENV_PREFIX = "ENV:"


@dataclass
class PublishReceipt:
    """Confirmation of an accepted upload."""

    platform: str
    media_id: str
    permalink: Optional[str] = None
    publish_at: Optional[datetime] = None
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"[{self.platform}] {self.permalink or self.media_id}"


class PublishError(Exception):
    """Upload rejected or failed.

    Attributes:
        kind: Tagged classification of the failure.
        error_code: Platform-specific code or reason, when known.
    """

    def __init__(
        self,
        message: str,
        kind: PublishErrorKind = PublishErrorKind.UNKNOWN,
        error_code: Optional[str] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.error_code = error_code


@dataclass
class PlatformConfig(ABC):
    """Credentials and switches for one upload target.

    Settings values written as ``ENV:NAME`` are read from the environment
    at load time, so secrets can stay out of the YAML file.
    """

    platform: str
    enabled: bool = True

    @classmethod
    @abstractmethod
    def from_settings(
        cls,
        base_dir: Path,
        platform_data: dict[str, Any],
    ) -> "PlatformConfig":
        """Build the config from its ``platforms.<name>`` block.

        Relative paths in the block are taken from ``base_dir``. The block
        may be empty.
        """
        ...

    @abstractmethod
    def validate(self) -> tuple[bool, str]:
        """Return ``(ok, reason)`` for the local publish preconditions."""
        ...

    @staticmethod
    def resolve_env(value: str) -> str:
        """Swap an ``ENV:NAME`` reference for the variable's value.

        Unset variables become an empty string. Anything else is returned as is.
        """
        if isinstance(value, str) and value.startswith(ENV_PREFIX):
            return os.getenv(value[len(ENV_PREFIX):], "")
        return value

    @classmethod
    def resolve_dict(cls, data: dict[str, Any]) -> dict[str, Any]:
        """Apply :meth:`resolve_env` to every string, descending into nested blocks."""
        return {
            key: cls.resolve_dict(value) if isinstance(value, dict) else cls.resolve_env(value)
            for key, value in data.items()
        }


# (stage, percent, message)
ProgressCallback = Callable[[str, float, str], Awaitable[None]] | None


class PlatformPublisher(ABC):
    """Uploads finished videos to one platform.

    Implementations upload one video per call and either return a
    receipt or raise :class:`PublishError`. They never retry across
    calls; retries are the caller's business.
    """

    def __init__(
        self,
        config: PlatformConfig,
        progress_callback: ProgressCallback = None,
    ):
        self.config = config
        self._on_progress = progress_callback

    @property
    @abstractmethod
    def platform_name(self) -> str:
        """Registry key, e.g. ``youtube``."""
        ...

    @abstractmethod
    async def publish(
        self,
        video_path: Path,
        metadata: Any,
        visibility: Visibility | str = Visibility.PRIVATE,
        publish_at: Optional[datetime] = None,
    ) -> PublishReceipt:
        """Upload a video and schedule its publication.

        Args:
            video_path: Finished video file.
            metadata: Platform metadata (title, description, tags).
            visibility: Privacy status at upload time.
            publish_at: Aware datetime when the video becomes public.

        Raises:
            PublishError: On any failure, with its kind set.
        """
        ...

    @abstractmethod
    async def check_credentials(self) -> tuple[bool, str]:
        """Round-trip to the platform API to prove the credentials work."""
        ...

    def is_configured(self) -> tuple[bool, str]:
        """Cheap local precondition check, no network."""
        return self.config.validate()

    async def _emit_progress(self, stage: str, progress: float, message: str) -> None:
        if self._on_progress is not None:
            await self._on_progress(stage, progress, message)

    def _make_receipt(
        self,
        media_id: str,
        permalink: Optional[str] = None,
        publish_at: Optional[datetime] = None,
        **details: Any,
    ) -> PublishReceipt:
        return PublishReceipt(self.platform_name, media_id, permalink, publish_at, details)
