"""Meme image download with content validation.

Image hosts sometimes answer with an HTML page (login walls, removed
posts) or serve WEBP behind a .jpg URL. Downloads are therefore checked
by magic bytes and saved with the extension matching their real format.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import httpx
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential

from ..constants import (
    DOWNLOAD_RETRY_ATTEMPTS,
    DOWNLOAD_RETRY_MAX_WAIT,
    DOWNLOAD_RETRY_MIN_WAIT,
    HTTP_DOWNLOAD_TIMEOUT_SECONDS,
    HTTP_MAX_REDIRECTS,
)
from ..production.base import ImageDownloadError, MemePost

_logger = logging.getLogger("reddit_api")

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


def detect_image_format(data: bytes) -> Optional[str]:
    """Return the extension matching the image signature, or None."""
    if data[:3] == b"\xff\xd8\xff":
        return ".jpg"
    if data[:4] == b"\x89PNG":
        return ".png"
    if data[:3] == b"GIF":
        return ".gif"
    if len(data) >= 12 and data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return ".webp"
    return None


def looks_like_html(data: bytes) -> bool:
    preview = data[:200].decode("utf-8", errors="ignore").lower()
    return "<html" in preview or "<!doctype" in preview


def _is_retryable(error: BaseException) -> bool:
    if isinstance(error, httpx.TransportError):
        return True
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code >= 500 or error.response.status_code == 429
    return False


class ImageDownloader:
    """Downloads meme images into a working directory."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=HTTP_DOWNLOAD_TIMEOUT_SECONDS,
                headers={"User-Agent": BROWSER_USER_AGENT},
                follow_redirects=True,
                max_redirects=HTTP_MAX_REDIRECTS,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @retry(
        retry=retry_if_exception(_is_retryable),
        stop=stop_after_attempt(DOWNLOAD_RETRY_ATTEMPTS),
        wait=wait_exponential(multiplier=1, min=DOWNLOAD_RETRY_MIN_WAIT, max=DOWNLOAD_RETRY_MAX_WAIT),
        reraise=True,
    )
    async def _fetch_bytes(self, url: str) -> bytes:
        client = await self._get_client()
        response = await client.get(url)
        response.raise_for_status()
        return response.content

    async def download(self, meme: MemePost, dest_dir: Path, stem: str) -> Path:
        """Download a meme image.

        Args:
            meme: Post whose image_url is fetched.
            dest_dir: Directory to write into.
            stem: File name without extension.

        Returns:
            Path of the saved image, extension matching its content.

        Raises:
            ImageDownloadError: On HTTP failure or non-image content.
        """
        try:
            data = await self._fetch_bytes(meme.image_url)
        except httpx.HTTPError as e:
            raise ImageDownloadError(f"Failed to download {meme.image_url}: {e}") from e

        extension = detect_image_format(data)
        if extension is None:
            if looks_like_html(data):
                raise ImageDownloadError(f"Got HTML instead of image from {meme.image_url}")
            raise ImageDownloadError(f"Invalid image format from {meme.image_url}")

        dest_dir.mkdir(parents=True, exist_ok=True)
        path = dest_dir / f"{stem}{extension}"
        path.write_bytes(data)
        _logger.debug(f"Downloaded {meme.image_url} -> {path.name} ({len(data)} bytes)")
        return path
