"""YouTube publisher implementation.

Uploads with the YouTube Data API v3 ``videos.insert`` using a resumable
media upload. Every failure is mapped onto a :class:`PublishErrorKind`
before it leaves this module.
"""

from __future__ import annotations

import asyncio
import json
import logging
import socket
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from google.auth.exceptions import RefreshError, TransportError
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaFileUpload

from ...constants import PublishErrorKind, Visibility, YOUTUBE_UPLOAD_CHUNK_SIZE
from ..base import PlatformPublisher, ProgressCallback, PublishError, PublishReceipt
from .auth import build_service, load_credentials
from .config import YouTubeConfig
from .metadata import VideoMetadata

_logger = logging.getLogger("youtube_api")

QUOTA_REASONS = frozenset({
    "quotaExceeded",
    "rateLimitExceeded",
    "userRateLimitExceeded",
    "uploadLimitExceeded",
})


def _http_error_reason(error: HttpError) -> str:
    """Extract the first error reason from an API error body."""
    try:
        content = error.content
        if isinstance(content, bytes):
            content = content.decode("utf-8", errors="replace")
        data = json.loads(content)
        errors = data.get("error", {}).get("errors", [])
        if errors:
            return errors[0].get("reason", "")
    except (ValueError, AttributeError, TypeError):
        pass
    return ""


def classify_error(error: BaseException) -> PublishError:
    """Map a library exception to a PublishError with its kind.

    - 401 or token refresh failure: auth_failure
    - 403 with a quota/rate reason, or 429: quota_exceeded
    - 400 or missing file: malformed_request
    - 5xx, timeouts, connection errors: transient_network
    """
    if isinstance(error, PublishError):
        return error

    if isinstance(error, HttpError):
        status = int(getattr(error.resp, "status", 0) or 0)
        reason = _http_error_reason(error)
        message = f"YouTube API error {status}: {reason or error}"

        if status == 401:
            kind = PublishErrorKind.AUTH_FAILURE
        elif status == 429 or (status == 403 and reason in QUOTA_REASONS):
            kind = PublishErrorKind.QUOTA_EXCEEDED
        elif status == 400:
            kind = PublishErrorKind.MALFORMED_REQUEST
        elif status >= 500:
            kind = PublishErrorKind.TRANSIENT_NETWORK
        else:
            kind = PublishErrorKind.UNKNOWN
        return PublishError(message, kind=kind, error_code=reason or str(status))

    if isinstance(error, RefreshError):
        return PublishError(f"Token refresh failed: {error}", kind=PublishErrorKind.AUTH_FAILURE)

    if isinstance(error, FileNotFoundError):
        return PublishError(f"Video file not found: {error}", kind=PublishErrorKind.MALFORMED_REQUEST)

    if isinstance(error, (TransportError, TimeoutError, socket.timeout, ConnectionError)):
        return PublishError(f"Network error: {error}", kind=PublishErrorKind.TRANSIENT_NETWORK)

    return PublishError(str(error) or type(error).__name__, kind=PublishErrorKind.UNKNOWN)


def to_rfc3339(moment: datetime) -> str:
    """UTC RFC 3339 timestamp, e.g. 2025-01-31T23:00:00Z."""
    if moment.tzinfo is None:
        raise ValueError("publish_at must be timezone-aware")
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class YouTubePublisher(PlatformPublisher):
    """YouTube publisher implementing the platform interface.

    Scheduled publication requires ``private`` visibility; YouTube flips
    the video public at ``publishAt``.
    """

    def __init__(
        self,
        config: YouTubeConfig,
        progress_callback: ProgressCallback = None,
    ):
        super().__init__(config, progress_callback)
        self.config: YouTubeConfig = config
        self._service: Any = None

    @property
    def platform_name(self) -> str:
        return "youtube"

    async def check_credentials(self) -> tuple[bool, str]:
        """Refresh credentials without uploading anything."""
        valid, message = self.config.validate()
        if not valid:
            return False, message
        try:
            await asyncio.to_thread(load_credentials, self.config)
        except PublishError as e:
            return False, str(e)
        return True, "OK"

    async def publish(
        self,
        video_path: Path,
        metadata: VideoMetadata,
        visibility: Visibility | str = Visibility.PRIVATE,
        publish_at: Optional[datetime] = None,
    ) -> PublishReceipt:
        video_path = Path(video_path)
        visibility = Visibility(visibility)

        if not video_path.exists():
            raise PublishError(
                f"Video file not found: {video_path}",
                kind=PublishErrorKind.MALFORMED_REQUEST,
            )

        body = self._build_body(metadata, visibility, publish_at)
        size_mb = video_path.stat().st_size / (1024 * 1024)
        _logger.info(
            f"Uploading {video_path.name} ({size_mb:.2f} MB) "
            f"visibility={visibility.value} publishAt={body['status'].get('publishAt')}"
        )
        await self._emit_progress("upload", 0.0, f"Uploading {video_path.name}")

        try:
            video_id = await asyncio.to_thread(self._upload, video_path, body)
        except Exception as e:
            error = classify_error(e)
            _logger.error(f"Upload failed for {video_path.name}: [{error.kind.value}] {error}")
            raise error from e

        permalink = f"https://www.youtube.com/watch?v={video_id}"
        _logger.info(f"Uploaded {video_path.name} as {video_id}")
        await self._emit_progress("upload", 100.0, f"Uploaded {video_id}")

        return self._make_receipt(
            media_id=video_id,
            permalink=permalink,
            publish_at=publish_at,
            studio_url=f"https://studio.youtube.com/video/{video_id}/edit",
            title=metadata.title,
        )

    def _build_body(
        self,
        metadata: VideoMetadata,
        visibility: Visibility,
        publish_at: Optional[datetime],
    ) -> dict:
        status: dict[str, Any] = {
            "privacyStatus": visibility.value,
            "selfDeclaredMadeForKids": self.config.made_for_kids,
        }
        if publish_at is not None:
            if visibility != Visibility.PRIVATE:
                raise PublishError(
                    "Scheduled publishing requires private visibility",
                    kind=PublishErrorKind.MALFORMED_REQUEST,
                )
            status["publishAt"] = to_rfc3339(publish_at)

        snippet = metadata.to_snippet()
        snippet["categoryId"] = self.config.category_id or snippet["categoryId"]
        return {"snippet": snippet, "status": status}

    def _get_service(self) -> Any:
        if self._service is None:
            self._service = build_service(load_credentials(self.config))
        return self._service

    def _upload(self, video_path: Path, body: dict) -> str:
        """Blocking resumable upload. Runs in a worker thread."""
        youtube = self._get_service()
        media = MediaFileUpload(
            str(video_path),
            mimetype="video/*",
            chunksize=YOUTUBE_UPLOAD_CHUNK_SIZE,
            resumable=True,
        )
        request = youtube.videos().insert(part="snippet,status", body=body, media_body=media)

        response = None
        while response is None:
            status, response = request.next_chunk()
            if status is not None:
                _logger.debug(f"Upload progress {video_path.name}: {status.progress() * 100:.1f}%")

        video_id = response.get("id") if isinstance(response, dict) else None
        if not video_id:
            raise PublishError(
                f"No video id in response: {response}",
                kind=PublishErrorKind.UNKNOWN,
            )
        return str(video_id)
