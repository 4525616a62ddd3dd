"""Shared test fixtures and configuration.

Provides temporary queues, fake collaborators and a fixed clock for
testing the meme shorts components.
"""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from meme_shorts.platforms.base import PlatformPublisher, PublishReceipt
from meme_shorts.production.base import MemePost
from meme_shorts.queue.pending import PendingQueue

CREDENTIAL_ENV_VARS = [
    "YOUTUBE_CLIENT_ID",
    "YOUTUBE_CLIENT_SECRET",
    "YOUTUBE_REFRESH_TOKEN",
    "REDDIT_CLIENT_ID",
    "REDDIT_CLIENT_SECRET",
    "REDDIT_USER_AGENT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep real credentials from leaking into tests."""
    for name in CREDENTIAL_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    for name in list(os.environ):
        if name.startswith("MEME_SHORTS_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fixed_now() -> datetime:
    """2025-01-15 15:00 UTC, which is 10:00 in UTC-5."""
    return datetime(2025, 1, 15, 15, 0, tzinfo=timezone.utc)


@pytest.fixture
def queue_dir(tmp_path: Path) -> Path:
    """Create a queue directory."""
    directory = tmp_path / "output"
    directory.mkdir()
    return directory


@pytest.fixture
def pending_queue(queue_dir: Path) -> PendingQueue:
    return PendingQueue(queue_dir)


@pytest.fixture
def make_video(queue_dir: Path) -> Callable[..., Path]:
    """Factory writing a fake video with a chosen mtime.

    Usage:
        a = make_video("a.mp4", mtime=1000)
    """
    def _make(name: str, mtime: float | None = None, content: bytes = b"video", directory: Path | None = None) -> Path:
        path = (directory or queue_dir) / name
        path.write_bytes(content)
        if mtime is not None:
            os.utime(path, (mtime, mtime))
        return path

    return _make


@pytest.fixture
def mock_publisher() -> MagicMock:
    """Publisher whose uploads all succeed.

    Each call returns a receipt with id ``vid-<file stem>``.
    """
    publisher = MagicMock(spec=PlatformPublisher)
    publisher.platform_name = "youtube"

    async def _publish(video_path, metadata, visibility="private", publish_at=None):
        video_id = f"vid-{Path(video_path).stem}"
        return PublishReceipt(
            platform="youtube",
            media_id=video_id,
            permalink=f"https://www.youtube.com/watch?v={video_id}",
            publish_at=publish_at,
        )

    publisher.publish = AsyncMock(side_effect=_publish)
    publisher.is_configured.return_value = (True, "OK")
    return publisher


@pytest.fixture
def sample_memes() -> list[MemePost]:
    return [
        MemePost(
            title="When the code works on the first try and you don't know why",
            image_url="https://i.redd.it/abc123.jpg",
            source="r/ProgrammerHumor",
            author="dev_person",
            score=4210,
        ),
        MemePost(
            title="Nobody:",
            image_url="https://i.imgur.com/xyz.png",
            source="r/memes",
            author="someone",
            score=980,
        ),
    ]
