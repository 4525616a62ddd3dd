"""One production cycle: memes in, queued video out.

Nothing reaches the queue unless every step succeeded. The video is
rendered into the queue's staging area and committed atomically; on any
failure staged files are discarded. Downloaded images are always
cleaned up.
"""

from __future__ import annotations

import logging
import random
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from ..constants import (
    MEMES_PER_VIDEO,
    OUTPUT_FILENAME_PREFIX,
    OUTPUT_TIMESTAMP_FORMAT,
    SIDECAR_EXTENSION,
    VIDEO_FORMAT,
)
from ..media.composer import MediaComposer
from ..media.selection import pick_background, pick_music
from ..queue.pending import PendingQueue
from ..sources.downloader import ImageDownloader
from .base import MemeCredits, MemeSource

_logger = logging.getLogger("meme_shorts.production")


def output_filename(moment: datetime) -> str:
    """meme_video_YYYY-MM-DD_HH-MM-SS.mp4"""
    return f"{OUTPUT_FILENAME_PREFIX}{moment.strftime(OUTPUT_TIMESTAMP_FORMAT)}{VIDEO_FORMAT}"


class Producer:
    """Produces one meme short per call to :meth:`produce`.

    Args:
        queue: Destination queue.
        source: Meme discovery.
        downloader: Image fetcher.
        composer: ffmpeg renderer.
        backgrounds_dir: Folder of background clips.
        music_dir: Folder of optional soundtracks.
        temp_dir: Working folder for downloaded images.
        rng: Random source for media picks.
        clock: Returns the current aware datetime (names the output).
    """

    def __init__(
        self,
        queue: PendingQueue,
        source: MemeSource,
        downloader: ImageDownloader,
        composer: MediaComposer,
        backgrounds_dir: Path,
        music_dir: Path,
        temp_dir: Path,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.queue = queue
        self.source = source
        self.downloader = downloader
        self.composer = composer
        self.backgrounds_dir = backgrounds_dir
        self.music_dir = music_dir
        self.temp_dir = temp_dir
        self._rng = rng or random.Random()
        self._clock = clock

    async def produce(self) -> Path:
        """Run one cycle.

        Returns:
            Path of the new artifact in the queue.

        Raises:
            ProductionError: Any step failed; the queue is unchanged.
        """
        background = pick_background(self.backgrounds_dir, self._rng)
        music = pick_music(self.music_dir, self._rng)

        memes = await self.source.fetch_memes(MEMES_PER_VIDEO)
        for i, meme in enumerate(memes, start=1):
            _logger.info(f"Meme {i}: {meme.title[:50]} ({meme.source})")

        name = self._unique_name()
        staged_video = self.queue.staging_path(name)
        staged_sidecar = staged_video.with_suffix(SIDECAR_EXTENSION)
        image_paths: list[Path] = []

        try:
            run_id = Path(name).stem
            for i, meme in enumerate(memes, start=1):
                path = await self.downloader.download(meme, self.temp_dir, f"{run_id}_meme{i}")
                meme.local_path = path
                image_paths.append(path)

            await self.composer.compose(background, image_paths, staged_video, music)

            MemeCredits(
                memes=memes,
                background=background.name,
                music=music.name if music else None,
            ).save(staged_sidecar)

            artifact = self.queue.commit(staged_video, sidecar=staged_sidecar)
        except Exception:
            self.queue.discard_staged(staged_video, staged_sidecar)
            raise
        finally:
            for path in image_paths:
                path.unlink(missing_ok=True)

        _logger.info(f"Video created: {artifact.name}")
        return artifact.path

    async def close(self) -> None:
        """Release network clients."""
        await self.source.close()
        await self.downloader.close()

    def _unique_name(self) -> str:
        base = output_filename(self._clock())
        candidate = base
        counter = 1
        while (self.queue.directory / candidate).exists() or (self.queue.staging_dir / candidate).exists():
            candidate = f"{Path(base).stem}_{counter}{VIDEO_FORMAT}"
            counter += 1
        return candidate
