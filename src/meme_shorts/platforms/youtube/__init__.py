"""YouTube Shorts publishing."""

from .config import YouTubeConfig
from .metadata import VideoMetadata, build_metadata, metadata_for_artifact
from .publisher import YouTubePublisher, classify_error

__all__ = [
    "YouTubeConfig",
    "YouTubePublisher",
    "VideoMetadata",
    "build_metadata",
    "classify_error",
    "metadata_for_artifact",
]
