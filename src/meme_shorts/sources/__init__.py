"""Remote meme discovery and download."""

from .downloader import ImageDownloader, detect_image_format
from .reddit import (
    DEFAULT_MEME_SOURCES,
    AsyncPrawRedditSource,
    PublicRedditSource,
    RedditMemeSource,
    create_meme_source,
    is_image_url,
)

__all__ = [
    "DEFAULT_MEME_SOURCES",
    "AsyncPrawRedditSource",
    "ImageDownloader",
    "PublicRedditSource",
    "RedditMemeSource",
    "create_meme_source",
    "detect_image_format",
    "is_image_url",
]
