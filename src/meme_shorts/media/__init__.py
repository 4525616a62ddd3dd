"""Local media selection and ffmpeg composition."""

from .composer import MediaComposer, VideoOutputConfig, build_ffmpeg_command, build_filter_graph
from .selection import pick_background, pick_music, pick_random_file

__all__ = [
    "MediaComposer",
    "VideoOutputConfig",
    "build_ffmpeg_command",
    "build_filter_graph",
    "pick_background",
    "pick_music",
    "pick_random_file",
]
