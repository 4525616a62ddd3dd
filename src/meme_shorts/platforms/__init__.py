"""Platform publishers.

Usage:
    from meme_shorts.platforms import PlatformRegistry

    config = PlatformRegistry.load_config("youtube", base_dir, settings.platforms)
    publisher = PlatformRegistry.get_publisher("youtube", config)
"""

from .base import (
    PlatformConfig,
    PlatformPublisher,
    ProgressCallback,
    PublishError,
    PublishReceipt,
)
from .registry import PlatformRegistry

__all__ = [
    "PlatformConfig",
    "PlatformPublisher",
    "ProgressCallback",
    "PublishError",
    "PublishReceipt",
    "PlatformRegistry",
]
