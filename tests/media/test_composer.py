"""Unit tests for ffmpeg composition."""

from __future__ import annotations

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pydantic import ValidationError

from meme_shorts.media.composer import (
    MediaComposer,
    VideoOutputConfig,
    build_ffmpeg_command,
    build_filter_graph,
)
from meme_shorts.production.base import CompositionError

EXPECTED_FILTER = (
    "[0:v]scale=1080:1920:force_original_aspect_ratio=increase,crop=1080:1920[bg];"
    "[1:v]scale=1000:700:force_original_aspect_ratio=decrease,"
    "pad=max(iw\\,1000):ih+40:(ow-iw)/2:0:black@0[meme1];"
    "[2:v]scale=1000:700:force_original_aspect_ratio=decrease,"
    "pad=max(iw\\,1000):ih:(ow-iw)/2:0:black@0[meme2];"
    "[meme1][meme2]vstack=inputs=2[stacked];"
    "[bg][stacked]overlay=(W-w)/2:(H-h)/2[outv]"
)

BG = Path("bg.mp4")
MEMES = [Path("m1.jpg"), Path("m2.png")]
OUT = Path("out.mp4")


def fake_process(returncode: int = 0, stderr: bytes = b"", on_run=None) -> MagicMock:
    """Subprocess stand-in for asyncio.create_subprocess_exec."""
    process = MagicMock()
    process.returncode = returncode

    async def communicate():
        if on_run:
            on_run()
        return b"", stderr

    process.communicate = communicate
    process.wait = AsyncMock(return_value=returncode)
    return process


class TestFilterGraph:
    """Tests for the filter graph."""

    def test_default_graph(self):
        """Test the full 1080x1920 graph."""
        assert build_filter_graph() == EXPECTED_FILTER

    def test_custom_frame(self):
        """Test frame size flows into scale and crop."""
        graph = build_filter_graph(720, 1280)
        assert graph.startswith("[0:v]scale=720:1280:force_original_aspect_ratio=increase,crop=720:1280[bg]")


class TestBuildCommand:
    """Tests for build_ffmpeg_command."""

    def test_with_music(self):
        """Test music is input 3 and its audio is mapped."""
        cmd = build_ffmpeg_command(BG, MEMES, OUT, music=Path("song.mp3"))

        assert cmd[:10] == ["ffmpeg", "-y", "-i", "bg.mp4", "-i", "m1.jpg", "-i", "m2.png", "-i", "song.mp3"]
        assert cmd[cmd.index("-filter_complex") + 1] == EXPECTED_FILTER
        maps = [cmd[i + 1] for i, arg in enumerate(cmd) if arg == "-map"]
        assert maps == ["[outv]", "3:a"]
        assert cmd[-1] == "out.mp4"
        assert "-shortest" in cmd

    def test_without_music(self):
        """Test background audio is kept when present."""
        cmd = build_ffmpeg_command(BG, MEMES, OUT)

        assert "song.mp3" not in cmd
        maps = [cmd[i + 1] for i, arg in enumerate(cmd) if arg == "-map"]
        assert maps == ["[outv]", "0:a?"]

    def test_encoder_settings(self):
        """Test codec, quality, duration and frame rate."""
        cmd = build_ffmpeg_command(BG, MEMES, OUT)

        def value(flag):
            return cmd[cmd.index(flag) + 1]

        assert value("-c:v") == "libx264"
        assert value("-preset") == "medium"
        assert value("-crf") == "23"
        assert value("-pix_fmt") == "yuv420p"
        assert value("-t") == "15"
        assert value("-r") == "30"
        assert value("-c:a") == "aac"
        assert value("-b:a") == "192k"

    def test_config_overrides(self):
        """Test output config values are used."""
        config = VideoOutputConfig(duration_seconds=10, crf=18, ffmpeg_binary="/opt/ffmpeg")
        cmd = build_ffmpeg_command(BG, MEMES, OUT, config=config)

        assert cmd[0] == "/opt/ffmpeg"
        assert cmd[cmd.index("-t") + 1] == "10"
        assert cmd[cmd.index("-crf") + 1] == "18"

    @pytest.mark.parametrize("memes", [[], [Path("one.jpg")], [Path("a"), Path("b"), Path("c")]])
    def test_requires_two_memes(self, memes):
        """Test any meme count other than two is rejected."""
        with pytest.raises(ValueError):
            build_ffmpeg_command(BG, memes, OUT)

    def test_config_validation(self):
        """Test out-of-range encoder settings are rejected."""
        with pytest.raises(ValidationError):
            VideoOutputConfig(crf=60)


class TestMediaComposer:
    """Tests for MediaComposer.compose."""

    @pytest.mark.asyncio
    async def test_success(self, tmp_path):
        """Test a zero exit with an output file returns the path."""
        output = tmp_path / "out.mp4"
        process = fake_process(on_run=lambda: output.write_bytes(b"video"))

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)) as exec_mock:
            result = await MediaComposer().compose(BG, MEMES, output)

        assert result == output
        args = exec_mock.call_args.args
        assert args[0] == "ffmpeg"
        assert args[-1] == str(output)

    @pytest.mark.asyncio
    async def test_nonzero_exit(self, tmp_path):
        """Test ffmpeg failure carries the return code and stderr tail."""
        process = fake_process(returncode=1, stderr=b"Invalid data found when processing input")

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(CompositionError, match="returncode=1.*Invalid data"):
                await MediaComposer().compose(BG, MEMES, tmp_path / "out.mp4")

    @pytest.mark.asyncio
    async def test_empty_stderr(self, tmp_path):
        """Test a silent failure is still reported."""
        process = fake_process(returncode=234)

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(CompositionError, match="stderr was empty"):
                await MediaComposer().compose(BG, MEMES, tmp_path / "out.mp4")

    @pytest.mark.asyncio
    async def test_missing_output(self, tmp_path):
        """Test success without an output file is an error."""
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=fake_process())):
            with pytest.raises(CompositionError, match="was not written"):
                await MediaComposer().compose(BG, MEMES, tmp_path / "out.mp4")

    @pytest.mark.asyncio
    async def test_ffmpeg_missing(self, tmp_path):
        """Test a missing binary is a composition error."""
        with patch("asyncio.create_subprocess_exec", AsyncMock(side_effect=FileNotFoundError("ffmpeg"))):
            with pytest.raises(CompositionError, match="ffmpeg not found"):
                await MediaComposer().compose(BG, MEMES, tmp_path / "out.mp4")

    @pytest.mark.asyncio
    async def test_timeout_kills_process(self, tmp_path):
        """Test a hung ffmpeg is killed."""
        process = fake_process()

        async def hang():
            await asyncio.sleep(10)

        process.communicate = hang

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(CompositionError, match="timed out"):
                await MediaComposer(timeout=0.05).compose(BG, MEMES, tmp_path / "out.mp4")

        process.kill.assert_called_once()

    def test_is_available(self):
        """Test availability follows PATH lookup."""
        with patch("shutil.which", return_value=None):
            assert MediaComposer().is_available() is False
        with patch("shutil.which", return_value="/usr/bin/ffmpeg"):
            assert MediaComposer().is_available() is True
