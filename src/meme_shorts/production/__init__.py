"""Meme video production."""

from .base import (
    CompositionError,
    ImageDownloadError,
    MediaSelectionError,
    MemeCredits,
    MemePost,
    MemeSource,
    ProductionError,
    SourceExhaustedError,
)

__all__ = [
    "CompositionError",
    "ImageDownloadError",
    "MediaSelectionError",
    "MemeCredits",
    "MemePost",
    "MemeSource",
    "ProductionError",
    "SourceExhaustedError",
]
