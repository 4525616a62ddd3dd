"""Global constants package for meme shorts.

PACKAGE STRUCTURE:
-----------------
- video.py    : Output resolution, encoder settings, meme overlay geometry
- paths.py    : Directory names, file patterns, naming conventions
- limits.py   : Schedule defaults, platform limits, timeouts
- status.py   : Publish status and error kind enums

USAGE EXAMPLES:
--------------
    from meme_shorts.constants import VIDEO_WIDTH, VIDEO_HEIGHT
    from meme_shorts.constants import PublishStatus, PublishErrorKind
"""

# =============================================================================
# VIDEO CONSTANTS
# =============================================================================
from .video import (
    VIDEO_WIDTH,
    VIDEO_HEIGHT,
    VIDEO_FPS,
    VIDEO_DURATION_SECONDS,
    VIDEO_CODEC,
    VIDEO_PRESET,
    VIDEO_CRF,
    VIDEO_PIXEL_FORMAT,
    AUDIO_CODEC,
    AUDIO_BITRATE,
    VIDEO_FORMAT,
    MEME_MAX_WIDTH,
    MEME_MAX_HEIGHT,
    MEME_GAP_PIXELS,
    MEMES_PER_VIDEO,
)

# =============================================================================
# PATH CONSTANTS
# =============================================================================
from .paths import (
    ASSETS_DIR_NAME,
    BACKGROUNDS_DIR_NAME,
    MUSIC_DIR_NAME,
    OUTPUT_DIR_NAME,
    STAGING_DIR_NAME,
    TEMP_DIR_NAME,
    LOGS_DIR_NAME,
    CONFIG_DIR_NAME,
    DEFAULT_CONFIG_FILE,
    BACKGROUND_EXTENSIONS,
    MUSIC_EXTENSIONS,
    IMAGE_EXTENSIONS,
    SIDECAR_EXTENSION,
    OUTPUT_FILENAME_PREFIX,
    OUTPUT_TIMESTAMP_FORMAT,
    LOG_FILE_NAME,
    YOUTUBE_CLIENT_SECRETS_FILE,
    YOUTUBE_TOKEN_FILE,
    get_project_root,
)

# =============================================================================
# LIMIT CONSTANTS
# =============================================================================
from .limits import (
    PEAK_START_HOUR,
    GAP_MINUTES,
    MIN_LEAD_MINUTES,
    REFERENCE_UTC_OFFSET_HOURS,
    DEFAULT_BATCH_COUNT,
    YOUTUBE_TITLE_MAX_LENGTH,
    YOUTUBE_TITLE_MEME_CHARS,
    YOUTUBE_TITLE_MIN_MEME_CHARS,
    YOUTUBE_DESCRIPTION_MEME_CHARS,
    YOUTUBE_CATEGORY_ENTERTAINMENT,
    YOUTUBE_UPLOAD_CHUNK_SIZE,
    REDDIT_LISTING_LIMIT,
    REDDIT_PICK_FROM_TOP,
    REDDIT_TIME_FILTER,
    HTTP_LISTING_TIMEOUT_SECONDS,
    HTTP_DOWNLOAD_TIMEOUT_SECONDS,
    HTTP_MAX_REDIRECTS,
    DOWNLOAD_RETRY_ATTEMPTS,
    DOWNLOAD_RETRY_MIN_WAIT,
    DOWNLOAD_RETRY_MAX_WAIT,
    FFMPEG_TIMEOUT_SECONDS,
)

# =============================================================================
# STATUS ENUMS
# =============================================================================
from .status import (
    PublishStatus,
    PublishErrorKind,
    Visibility,
)


__all__ = [
    # Video
    "VIDEO_WIDTH",
    "VIDEO_HEIGHT",
    "VIDEO_FPS",
    "VIDEO_DURATION_SECONDS",
    "VIDEO_CODEC",
    "VIDEO_PRESET",
    "VIDEO_CRF",
    "VIDEO_PIXEL_FORMAT",
    "AUDIO_CODEC",
    "AUDIO_BITRATE",
    "VIDEO_FORMAT",
    "MEME_MAX_WIDTH",
    "MEME_MAX_HEIGHT",
    "MEME_GAP_PIXELS",
    "MEMES_PER_VIDEO",
    # Paths
    "ASSETS_DIR_NAME",
    "BACKGROUNDS_DIR_NAME",
    "MUSIC_DIR_NAME",
    "OUTPUT_DIR_NAME",
    "STAGING_DIR_NAME",
    "TEMP_DIR_NAME",
    "LOGS_DIR_NAME",
    "CONFIG_DIR_NAME",
    "DEFAULT_CONFIG_FILE",
    "BACKGROUND_EXTENSIONS",
    "MUSIC_EXTENSIONS",
    "IMAGE_EXTENSIONS",
    "SIDECAR_EXTENSION",
    "OUTPUT_FILENAME_PREFIX",
    "OUTPUT_TIMESTAMP_FORMAT",
    "LOG_FILE_NAME",
    "YOUTUBE_CLIENT_SECRETS_FILE",
    "YOUTUBE_TOKEN_FILE",
    "get_project_root",
    # Limits
    "PEAK_START_HOUR",
    "GAP_MINUTES",
    "MIN_LEAD_MINUTES",
    "REFERENCE_UTC_OFFSET_HOURS",
    "DEFAULT_BATCH_COUNT",
    "YOUTUBE_TITLE_MAX_LENGTH",
    "YOUTUBE_TITLE_MEME_CHARS",
    "YOUTUBE_TITLE_MIN_MEME_CHARS",
    "YOUTUBE_DESCRIPTION_MEME_CHARS",
    "YOUTUBE_CATEGORY_ENTERTAINMENT",
    "YOUTUBE_UPLOAD_CHUNK_SIZE",
    "REDDIT_LISTING_LIMIT",
    "REDDIT_PICK_FROM_TOP",
    "REDDIT_TIME_FILTER",
    "HTTP_LISTING_TIMEOUT_SECONDS",
    "HTTP_DOWNLOAD_TIMEOUT_SECONDS",
    "HTTP_MAX_REDIRECTS",
    "DOWNLOAD_RETRY_ATTEMPTS",
    "DOWNLOAD_RETRY_MIN_WAIT",
    "DOWNLOAD_RETRY_MAX_WAIT",
    "FFMPEG_TIMEOUT_SECONDS",
    # Status
    "PublishStatus",
    "PublishErrorKind",
    "Visibility",
]
