"""Limit constants for meme shorts.

- Publish schedule defaults
- YouTube metadata limits
- Reddit fetch limits
- HTTP timeouts and retry settings
"""

from typing import Final

# =============================================================================
# PUBLISH SCHEDULE DEFAULTS
# =============================================================================

PEAK_START_HOUR: Final[int] = 18
"""Hour of day (reference offset) when the peak window opens. 6 PM EST."""

GAP_MINUTES: Final[int] = 30
"""Spacing between consecutive publish slots."""

MIN_LEAD_MINUTES: Final[int] = 15
"""A slot is never scheduled sooner than this from the moment of computing."""

REFERENCE_UTC_OFFSET_HOURS: Final[int] = -5
"""Fixed reference offset (EST). Daylight saving is deliberately ignored."""

DEFAULT_BATCH_COUNT: Final[int] = 6
"""Videos produced by the batch command when --count is omitted."""


# =============================================================================
# YOUTUBE LIMITS
# =============================================================================

YOUTUBE_TITLE_MAX_LENGTH: Final[int] = 100
YOUTUBE_TITLE_MEME_CHARS: Final[int] = 70
"""Meme title characters kept before the ' #Shorts' suffix."""

YOUTUBE_TITLE_MIN_MEME_CHARS: Final[int] = 10
"""Shorter meme titles are replaced with a stock title."""

YOUTUBE_DESCRIPTION_MEME_CHARS: Final[int] = 80
YOUTUBE_CATEGORY_ENTERTAINMENT: Final[str] = "24"
YOUTUBE_UPLOAD_CHUNK_SIZE: Final[int] = 8 * 1024 * 1024


# =============================================================================
# REDDIT LIMITS
# =============================================================================

REDDIT_LISTING_LIMIT: Final[int] = 25
"""Posts requested per listing."""

REDDIT_PICK_FROM_TOP: Final[int] = 5
"""A meme is picked at random from the first N image posts."""

REDDIT_TIME_FILTER: Final[str] = "day"


# =============================================================================
# TIMEOUTS AND RETRIES
# =============================================================================

HTTP_LISTING_TIMEOUT_SECONDS: Final[float] = 10.0
HTTP_DOWNLOAD_TIMEOUT_SECONDS: Final[float] = 30.0
HTTP_MAX_REDIRECTS: Final[int] = 5

DOWNLOAD_RETRY_ATTEMPTS: Final[int] = 3
DOWNLOAD_RETRY_MIN_WAIT: Final[float] = 1.0
DOWNLOAD_RETRY_MAX_WAIT: Final[float] = 8.0

FFMPEG_TIMEOUT_SECONDS: Final[int] = 600
"""Hard cap for a single ffmpeg composition."""
