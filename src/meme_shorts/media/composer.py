"""ffmpeg composition of a meme short.

Layout: the background clip is scaled to cover the 9:16 frame and
cropped. Each meme is fitted into a 1000x700 box, padded to full box
width with transparent pixels, and the two are stacked vertically with a
40px gap. The stack is centered on the background.

Filter graph (1080x1920):

    [0:v]scale=1080:1920:force_original_aspect_ratio=increase,crop=1080:1920[bg]
    [1:v]scale=1000:700:...,pad=max(iw\\,1000):ih+40:(ow-iw)/2:0:black@0[meme1]
    [2:v]scale=1000:700:...,pad=max(iw\\,1000):ih:(ow-iw)/2:0:black@0[meme2]
    [meme1][meme2]vstack=inputs=2[stacked]
    [bg][stacked]overlay=(W-w)/2:(H-h)/2[outv]
"""

from __future__ import annotations

import asyncio
import logging
import shutil
from pathlib import Path
from typing import Optional, Sequence

from pydantic import BaseModel, Field

from ..constants import (
    AUDIO_BITRATE,
    AUDIO_CODEC,
    FFMPEG_TIMEOUT_SECONDS,
    MEME_GAP_PIXELS,
    MEME_MAX_HEIGHT,
    MEME_MAX_WIDTH,
    MEMES_PER_VIDEO,
    VIDEO_CODEC,
    VIDEO_CRF,
    VIDEO_DURATION_SECONDS,
    VIDEO_FPS,
    VIDEO_HEIGHT,
    VIDEO_PIXEL_FORMAT,
    VIDEO_PRESET,
    VIDEO_WIDTH,
)
from ..production.base import CompositionError

_logger = logging.getLogger("meme_shorts.production")


class VideoOutputConfig(BaseModel):
    """Encoder and frame settings."""

    width: int = Field(default=VIDEO_WIDTH, gt=0)
    height: int = Field(default=VIDEO_HEIGHT, gt=0)
    fps: int = Field(default=VIDEO_FPS, gt=0, le=120)
    duration_seconds: int = Field(default=VIDEO_DURATION_SECONDS, gt=0, le=60)
    crf: int = Field(default=VIDEO_CRF, ge=0, le=51)
    preset: str = VIDEO_PRESET
    ffmpeg_binary: str = "ffmpeg"


def build_filter_graph(width: int = VIDEO_WIDTH, height: int = VIDEO_HEIGHT) -> str:
    """filter_complex string for one background and two memes."""
    box = f"{MEME_MAX_WIDTH}:{MEME_MAX_HEIGHT}:force_original_aspect_ratio=decrease"
    pad_width = f"max(iw\\,{MEME_MAX_WIDTH})"
    parts = [
        f"[0:v]scale={width}:{height}:force_original_aspect_ratio=increase,crop={width}:{height}[bg]",
        f"[1:v]scale={box},pad={pad_width}:ih+{MEME_GAP_PIXELS}:(ow-iw)/2:0:black@0[meme1]",
        f"[2:v]scale={box},pad={pad_width}:ih:(ow-iw)/2:0:black@0[meme2]",
        "[meme1][meme2]vstack=inputs=2[stacked]",
        "[bg][stacked]overlay=(W-w)/2:(H-h)/2[outv]",
    ]
    return ";".join(parts)


def build_ffmpeg_command(
    background: Path,
    memes: Sequence[Path],
    output: Path,
    music: Optional[Path] = None,
    config: Optional[VideoOutputConfig] = None,
) -> list[str]:
    """Full ffmpeg argument list.

    With music, the soundtrack (input 3) is the audio track. Without,
    the background's audio is kept if it has any.
    """
    config = config or VideoOutputConfig()
    if len(memes) != MEMES_PER_VIDEO:
        raise ValueError(f"Expected {MEMES_PER_VIDEO} memes, got {len(memes)}")

    cmd = [config.ffmpeg_binary, "-y", "-i", str(background)]
    for meme in memes:
        cmd.extend(["-i", str(meme)])
    if music is not None:
        cmd.extend(["-i", str(music)])

    cmd.extend(["-filter_complex", build_filter_graph(config.width, config.height)])
    cmd.extend(["-map", "[outv]"])
    cmd.extend(["-map", "3:a" if music is not None else "0:a?"])

    cmd.extend([
        "-c:v", VIDEO_CODEC,
        "-preset", config.preset,
        "-crf", str(config.crf),
        "-pix_fmt", VIDEO_PIXEL_FORMAT,
        "-t", str(config.duration_seconds),
        "-r", str(config.fps),
        "-c:a", AUDIO_CODEC,
        "-b:a", AUDIO_BITRATE,
        "-shortest",
    ])
    cmd.append(str(output))
    return cmd


class MediaComposer:
    """Runs ffmpeg to render a short."""

    def __init__(
        self,
        config: Optional[VideoOutputConfig] = None,
        timeout: float = FFMPEG_TIMEOUT_SECONDS,
    ):
        self.config = config or VideoOutputConfig()
        self.timeout = timeout

    def is_available(self) -> bool:
        """True if the ffmpeg binary is on PATH."""
        return shutil.which(self.config.ffmpeg_binary) is not None

    async def compose(
        self,
        background: Path,
        memes: Sequence[Path],
        output: Path,
        music: Optional[Path] = None,
    ) -> Path:
        """Render the video to ``output``.

        Raises:
            CompositionError: If ffmpeg is missing, fails or times out.
        """
        cmd = build_ffmpeg_command(background, memes, output, music, self.config)
        _logger.info(f"FFMPEG_CMD | {' '.join(cmd[:12])}...")

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise CompositionError(
                f"ffmpeg not found ('{self.config.ffmpeg_binary}'). Install it and make sure it is on PATH."
            ) from e

        try:
            _, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            process.kill()
            await process.wait()
            raise CompositionError(f"ffmpeg timed out after {self.timeout:.0f}s") from e

        if process.returncode != 0:
            error_msg = stderr.decode("utf-8", errors="replace") if stderr else ""
            error_tail = error_msg[-1000:] if len(error_msg) > 1000 else error_msg
            if not error_tail.strip():
                error_tail = "(stderr was empty)"
            _logger.error(f"FFmpeg composition failed: {error_tail}")
            raise CompositionError(f"FFmpeg failed (returncode={process.returncode}): {error_tail}")

        if not output.exists():
            raise CompositionError(f"ffmpeg reported success but {output} was not written")

        return output
