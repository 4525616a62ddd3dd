"""Video-related constants for meme shorts.

This module contains everything the ffmpeg composition step needs:
- Output resolution (vertical 9:16)
- Frame rate and clip length
- Encoder settings
- Meme overlay geometry

MODIFICATION GUIDE:
------------------
- VIDEO_WIDTH/HEIGHT: Change for different resolutions (keep 9:16 ratio)
- MEME_MAX_*: Bounding box each meme is scaled into before stacking
- VIDEO_CRF: Lower is higher quality (18-28 is the useful range)
"""

from typing import Final

# =============================================================================
# VIDEO RESOLUTION
# =============================================================================

VIDEO_WIDTH: Final[int] = 1080
"""Output video width in pixels."""

VIDEO_HEIGHT: Final[int] = 1920
"""Output video height in pixels. 9:16 with 1080 width."""


# =============================================================================
# FRAME RATE AND TIMING
# =============================================================================

VIDEO_FPS: Final[int] = 30
"""Frames per second."""

VIDEO_DURATION_SECONDS: Final[int] = 15
"""Length of every produced short."""


# =============================================================================
# CODEC AND FORMAT
# =============================================================================

VIDEO_CODEC: Final[str] = "libx264"
VIDEO_PRESET: Final[str] = "medium"
VIDEO_CRF: Final[int] = 23
VIDEO_PIXEL_FORMAT: Final[str] = "yuv420p"

AUDIO_CODEC: Final[str] = "aac"
AUDIO_BITRATE: Final[str] = "192k"

VIDEO_FORMAT: Final[str] = ".mp4"
"""Container extension. Also the marker the pending queue recognizes."""


# =============================================================================
# MEME OVERLAY
# =============================================================================

MEME_MAX_WIDTH: Final[int] = 1000
"""Maximum width of a single meme on screen."""

MEME_MAX_HEIGHT: Final[int] = 700
"""Maximum height of a single meme (two are stacked)."""

MEME_GAP_PIXELS: Final[int] = 40
"""Transparent padding between the two stacked memes."""

MEMES_PER_VIDEO: Final[int] = 2
"""Number of memes composed into one short."""
