"""Random pick of local background clips and soundtracks."""

from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Iterable, Optional

from ..constants import BACKGROUND_EXTENSIONS, MUSIC_EXTENSIONS
from ..production.base import MediaSelectionError

_logger = logging.getLogger("meme_shorts.production")


def list_media_files(directory: Path, extensions: Iterable[str]) -> list[Path]:
    """Visible files in ``directory`` with one of ``extensions``, sorted by name."""
    if not directory.is_dir():
        return []

    suffixes = tuple(ext.lower() for ext in extensions)
    files = [
        entry
        for entry in directory.iterdir()
        if entry.is_file()
        and not entry.name.startswith(".")
        and entry.name.lower().endswith(suffixes)
    ]
    return sorted(files, key=lambda p: p.name)


def pick_random_file(
    directory: Path,
    extensions: Iterable[str],
    rng: Optional[random.Random] = None,
) -> Optional[Path]:
    """Uniform random pick, or None when nothing matches."""
    files = list_media_files(directory, extensions)
    if not files:
        return None
    return (rng or random).choice(files)


def pick_background(directory: Path, rng: Optional[random.Random] = None) -> Path:
    """Pick a background clip.

    Raises:
        MediaSelectionError: If the directory holds no video.
    """
    background = pick_random_file(directory, BACKGROUND_EXTENSIONS, rng)
    if background is None:
        raise MediaSelectionError(
            f"No background videos found in {directory} "
            f"(expected {', '.join(BACKGROUND_EXTENSIONS)})"
        )
    _logger.info(f"Background: {background.name}")
    return background


def pick_music(directory: Path, rng: Optional[random.Random] = None) -> Optional[Path]:
    """Pick a soundtrack. Music is optional."""
    music = pick_random_file(directory, MUSIC_EXTENSIONS, rng)
    if music is not None:
        _logger.info(f"Music: {music.name}")
    return music
