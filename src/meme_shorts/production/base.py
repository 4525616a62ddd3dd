"""Data models, interfaces and exceptions shared by the production steps.

A production cycle is:

    MemeSource.fetch_memes -> ImageDownloader.download -> pick background/music
        -> MediaComposer.compose -> PendingQueue.commit
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


# =============================================================================
# Data Models
# =============================================================================


class MemePost(BaseModel):
    """One image meme discovered on Reddit."""

    title: str
    image_url: str
    source: str = Field(description="r/<subreddit> or u/<user>")
    author: str = ""
    score: int = 0
    permalink: str = ""
    local_path: Optional[Path] = None


class MemeCredits(BaseModel):
    """Sidecar written next to a queued video."""

    memes: list[MemePost] = Field(default_factory=list)
    background: Optional[str] = None
    music: Optional[str] = None

    @property
    def titles(self) -> list[str]:
        return [m.title for m in self.memes if m.title]

    def save(self, path: Path) -> None:
        """Write credits as JSON."""
        data = self.model_dump(mode="json", exclude={"memes": {"__all__": {"local_path"}}})
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    @classmethod
    def load(cls, path: Path) -> Optional["MemeCredits"]:
        """Read credits, or None when missing or unreadable."""
        if not path.exists():
            return None
        try:
            with open(path, encoding="utf-8") as f:
                return cls.model_validate(json.load(f))
        except (OSError, ValueError):
            return None


# =============================================================================
# Interfaces
# =============================================================================


class MemeSource(ABC):
    """Remote content discovery."""

    @abstractmethod
    async def fetch_memes(self, count: int) -> list[MemePost]:
        """Return ``count`` distinct image memes.

        Raises:
            SourceExhaustedError: If fewer than ``count`` were found.
        """
        ...

    async def close(self) -> None:
        """Release network resources."""
        return None


# =============================================================================
# Exceptions
# =============================================================================


class ProductionError(Exception):
    """Base exception for production errors. Fatal to one cycle."""

    pass


class SourceExhaustedError(ProductionError):
    """Not enough image memes across all sources."""

    pass


class ImageDownloadError(ProductionError):
    """A meme image could not be fetched or is not an image."""

    pass


class MediaSelectionError(ProductionError):
    """No usable background clip."""

    pass


class CompositionError(ProductionError):
    """ffmpeg failed to compose the video."""

    pass
