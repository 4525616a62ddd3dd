"""Path-related constants for meme shorts.

Directory layout (relative to the project root):

  assets/backgrounds/   16:9 gameplay clips, one picked per video
  assets/music/         optional soundtracks
  output/               pending queue: finished .mp4 files awaiting upload
  output/.staging/      in-progress renders, never visible to the queue
  .temp/                downloaded meme images for the current cycle
  logs/                 log files
  config/               optional settings.yaml
"""

from pathlib import Path
from typing import Final


def get_project_root() -> Path:
    """Get the project root directory.

    Walks up from this file looking for 'pyproject.toml' or an 'assets'
    folder. Falls back to the current working directory.
    """
    current = Path(__file__).resolve().parent

    for _ in range(10):
        if (current / "assets").exists() or (current / "pyproject.toml").exists():
            return current
        parent = current.parent
        if parent == current:
            break
        current = parent

    return Path.cwd()


# =============================================================================
# DIRECTORY NAMES
# =============================================================================

ASSETS_DIR_NAME: Final[str] = "assets"
BACKGROUNDS_DIR_NAME: Final[str] = "backgrounds"
MUSIC_DIR_NAME: Final[str] = "music"
OUTPUT_DIR_NAME: Final[str] = "output"
STAGING_DIR_NAME: Final[str] = ".staging"
TEMP_DIR_NAME: Final[str] = ".temp"
LOGS_DIR_NAME: Final[str] = "logs"
CONFIG_DIR_NAME: Final[str] = "config"

DEFAULT_CONFIG_FILE: Final[str] = "settings.yaml"


# =============================================================================
# FILE PATTERNS
# =============================================================================

BACKGROUND_EXTENSIONS: Final[tuple[str, ...]] = (".mp4", ".mov", ".avi", ".mkv", ".webm")
MUSIC_EXTENSIONS: Final[tuple[str, ...]] = (".mp3", ".wav", ".aac", ".m4a")
IMAGE_EXTENSIONS: Final[tuple[str, ...]] = (".jpg", ".jpeg", ".png", ".gif", ".webp")

SIDECAR_EXTENSION: Final[str] = ".json"
"""Meme credits stored next to a queued video, same stem."""

OUTPUT_FILENAME_PREFIX: Final[str] = "meme_video_"
OUTPUT_TIMESTAMP_FORMAT: Final[str] = "%Y-%m-%d_%H-%M-%S"
"""Produces names like meme_video_2025-01-31_14-05-09.mp4"""

LOG_FILE_NAME: Final[str] = "meme_shorts.log"

YOUTUBE_CLIENT_SECRETS_FILE: Final[str] = "client_secrets.json"
YOUTUBE_TOKEN_FILE: Final[str] = "token.json"
