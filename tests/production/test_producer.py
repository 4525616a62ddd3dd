"""Unit tests for the production cycle."""

from __future__ import annotations

import json
import random
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from meme_shorts.production.base import (
    CompositionError,
    ImageDownloadError,
    MediaSelectionError,
    SourceExhaustedError,
)
from meme_shorts.production.producer import Producer, output_filename

MOMENT = datetime(2025, 1, 15, 9, 30, 5, tzinfo=timezone.utc)


class FakeDownloader:
    """Writes a tiny PNG per meme."""

    def __init__(self, fail_on: int | None = None):
        self.fail_on = fail_on
        self.calls = 0
        self.close = AsyncMock()

    async def download(self, meme, dest_dir: Path, stem: str) -> Path:
        self.calls += 1
        if self.calls == self.fail_on:
            raise ImageDownloadError(f"Got HTML instead of image from {meme.image_url}")
        dest_dir.mkdir(parents=True, exist_ok=True)
        path = dest_dir / f"{stem}.png"
        path.write_bytes(b"\x89PNG")
        return path


class FakeComposer:
    """Writes the output file, or fails."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls = []

    async def compose(self, background, memes, output, music=None):
        self.calls.append((background, list(memes), output, music))
        output.write_bytes(b"partial")
        if self.error:
            raise self.error
        return output


@pytest.fixture
def media_dirs(tmp_path):
    backgrounds = tmp_path / "backgrounds"
    music = tmp_path / "music"
    backgrounds.mkdir()
    music.mkdir()
    (backgrounds / "parkour.mp4").write_bytes(b"bg")
    (music / "beat.mp3").write_bytes(b"mp3")
    return backgrounds, music


@pytest.fixture
def source(sample_memes):
    fake = MagicMock()
    fake.fetch_memes = AsyncMock(return_value=sample_memes)
    fake.close = AsyncMock()
    return fake


def make_producer(pending_queue, source, media_dirs, tmp_path, downloader=None, composer=None):
    backgrounds, music = media_dirs
    return Producer(
        queue=pending_queue,
        source=source,
        downloader=downloader or FakeDownloader(),
        composer=composer or FakeComposer(),
        backgrounds_dir=backgrounds,
        music_dir=music,
        temp_dir=tmp_path / "temp",
        rng=random.Random(0),
        clock=lambda: MOMENT,
    )


class TestOutputFilename:
    """Tests for output_filename."""

    def test_format(self):
        """Test the timestamped name."""
        assert output_filename(MOMENT) == "meme_video_2025-01-15_09-30-05.mp4"


class TestProducer:
    """Tests for Producer.produce."""

    @pytest.mark.asyncio
    async def test_success_commits_video_and_credits(self, pending_queue, source, media_dirs, tmp_path):
        """Test a successful cycle adds exactly one artifact with its sidecar."""
        composer = FakeComposer()
        producer = make_producer(pending_queue, source, media_dirs, tmp_path, composer=composer)

        path = await producer.produce()

        assert path.name == "meme_video_2025-01-15_09-30-05.mp4"
        assert [a.name for a in pending_queue.list_pending()] == [path.name]

        credits = json.loads(path.with_suffix(".json").read_text(encoding="utf-8"))
        assert credits["background"] == "parkour.mp4"
        assert credits["music"] == "beat.mp3"
        assert [m["source"] for m in credits["memes"]] == ["r/ProgrammerHumor", "r/memes"]
        assert "local_path" not in credits["memes"][0]

        source.fetch_memes.assert_awaited_once_with(2)
        background, memes, _, music = composer.calls[0]
        assert background.name == "parkour.mp4"
        assert len(memes) == 2
        assert music.name == "beat.mp3"

    @pytest.mark.asyncio
    async def test_success_cleans_up(self, pending_queue, source, media_dirs, tmp_path):
        """Test downloaded images and staging leftovers are removed."""
        producer = make_producer(pending_queue, source, media_dirs, tmp_path)

        await producer.produce()

        assert list((tmp_path / "temp").iterdir()) == []
        assert list(pending_queue.staging_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_without_music(self, pending_queue, source, media_dirs, tmp_path):
        """Test an empty music folder produces a video without a soundtrack."""
        (media_dirs[1] / "beat.mp3").unlink()
        composer = FakeComposer()
        producer = make_producer(pending_queue, source, media_dirs, tmp_path, composer=composer)

        path = await producer.produce()

        assert composer.calls[0][3] is None
        assert json.loads(path.with_suffix(".json").read_text())["music"] is None

    @pytest.mark.asyncio
    async def test_composition_failure_leaves_queue_untouched(self, pending_queue, source, media_dirs, tmp_path):
        """Test a failed render adds nothing to the queue."""
        composer = FakeComposer(error=CompositionError("FFmpeg failed (returncode=1): boom"))
        producer = make_producer(pending_queue, source, media_dirs, tmp_path, composer=composer)

        with pytest.raises(CompositionError):
            await producer.produce()

        assert pending_queue.count() == 0
        assert list(pending_queue.staging_dir.iterdir()) == []
        assert list((tmp_path / "temp").iterdir()) == []

    @pytest.mark.asyncio
    async def test_download_failure(self, pending_queue, source, media_dirs, tmp_path):
        """Test a bad second image aborts and removes the first one."""
        downloader = FakeDownloader(fail_on=2)
        composer = FakeComposer()
        producer = make_producer(pending_queue, source, media_dirs, tmp_path, downloader=downloader, composer=composer)

        with pytest.raises(ImageDownloadError):
            await producer.produce()

        assert composer.calls == []
        assert pending_queue.count() == 0
        assert list((tmp_path / "temp").iterdir()) == []

    @pytest.mark.asyncio
    async def test_no_backgrounds_fails_before_fetch(self, pending_queue, source, media_dirs, tmp_path):
        """Test a missing background is detected before any network call."""
        (media_dirs[0] / "parkour.mp4").unlink()
        producer = make_producer(pending_queue, source, media_dirs, tmp_path)

        with pytest.raises(MediaSelectionError):
            await producer.produce()

        source.fetch_memes.assert_not_called()

    @pytest.mark.asyncio
    async def test_source_exhausted(self, pending_queue, source, media_dirs, tmp_path):
        """Test too few memes aborts the cycle."""
        source.fetch_memes.side_effect = SourceExhaustedError("Could only find 1 memes, needed 2")
        producer = make_producer(pending_queue, source, media_dirs, tmp_path)

        with pytest.raises(SourceExhaustedError):
            await producer.produce()

        assert pending_queue.count() == 0

    @pytest.mark.asyncio
    async def test_same_second_gets_unique_name(self, pending_queue, source, media_dirs, tmp_path):
        """Test two videos produced in the same second do not collide."""
        producer = make_producer(pending_queue, source, media_dirs, tmp_path)

        first = await producer.produce()
        second = await producer.produce()

        assert first != second
        assert second.name == "meme_video_2025-01-15_09-30-05_1.mp4"
        assert pending_queue.count() == 2

    @pytest.mark.asyncio
    async def test_close(self, pending_queue, source, media_dirs, tmp_path):
        """Test close releases source and downloader."""
        downloader = FakeDownloader()
        producer = make_producer(pending_queue, source, media_dirs, tmp_path, downloader=downloader)

        await producer.close()

        source.close.assert_awaited_once()
        downloader.close.assert_awaited_once()
