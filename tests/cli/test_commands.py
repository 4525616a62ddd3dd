"""Tests for the CLI commands and their exit codes."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import yaml
from typer.testing import CliRunner

from meme_shorts.cli import app
from meme_shorts.constants import PublishErrorKind
from meme_shorts.platforms.base import PublishError, PublishReceipt
from meme_shorts.production.base import SourceExhaustedError

runner = CliRunner()


@pytest.fixture
def project(tmp_path):
    """Project root with an output queue and a settings file pointing at it."""
    (tmp_path / "output").mkdir()
    config = tmp_path / "settings.yaml"
    config.write_text(yaml.safe_dump({"paths": {"base_dir": str(tmp_path)}}))
    return tmp_path, config


@pytest.fixture
def queued(project):
    """Three videos waiting in the queue, a oldest."""
    root, _ = project
    paths = []
    for i, name in enumerate(["a.mp4", "b.mp4", "c.mp4"]):
        path = root / "output" / name
        path.write_bytes(b"video")
        os.utime(path, (1000 + i, 1000 + i))
        paths.append(path)
    return paths


def invoke(config: Path, *args: str):
    return runner.invoke(app, ["--config", str(config), *args])


def failing_publisher(failing_stem: str) -> MagicMock:
    publisher = MagicMock()
    publisher.is_configured.return_value = (True, "OK")

    async def _publish(video_path, metadata, visibility="private", publish_at=None):
        stem = Path(video_path).stem
        if stem == failing_stem:
            raise PublishError("quota", kind=PublishErrorKind.QUOTA_EXCEEDED)
        return PublishReceipt(platform="youtube", media_id=stem, permalink=f"https://youtu.be/{stem}")

    publisher.publish = AsyncMock(side_effect=_publish)
    return publisher


def fake_producer(*results) -> MagicMock:
    producer = MagicMock()
    producer.produce = AsyncMock(side_effect=list(results))
    producer.close = AsyncMock()
    producer.queue.count.return_value = 1
    return producer


class TestStatus:
    """Tests for the status command."""

    def test_empty_queue(self, project):
        """Test status reports zero pending videos."""
        _, config = project
        result = invoke(config, "status")

        assert result.exit_code == 0
        assert "Pending videos: 0" in result.output

    def test_lists_pending(self, project, queued):
        """Test status lists queued videos."""
        _, config = project
        result = invoke(config, "status")

        assert result.exit_code == 0
        assert "Pending videos: 3" in result.output
        assert "a.mp4" in result.output

    def test_bad_config_still_exits_zero(self, tmp_path):
        """Test an invalid settings file only produces a warning."""
        config = tmp_path / "bad.yaml"
        config.write_text(yaml.safe_dump({"schedule": {"gap_minutes": 0}}))

        result = invoke(config, "status")

        assert result.exit_code == 0
        assert "Warning" in result.output

    def test_bad_env_value_still_exits_zero(self, project, monkeypatch):
        """Test an invalid environment override only produces a warning."""
        _, config = project
        monkeypatch.setenv("MEME_SHORTS_SCHEDULE__GAP_MINUTES", "abc")

        result = invoke(config, "status")

        assert result.exit_code == 0
        assert "Warning" in result.output
        assert result.exception is None

    def test_missing_config_still_exits_zero(self, tmp_path):
        """Test a missing settings file only produces a warning."""
        result = invoke(tmp_path / "nope.yaml", "status")
        assert result.exit_code == 0


class TestUpload:
    """Tests for the upload command."""

    def test_unconfigured_exits_one(self, project, queued):
        """Test missing YouTube credentials fail before anything happens."""
        _, config = project
        result = invoke(config, "upload")

        assert result.exit_code == 1
        assert "Missing YouTube credentials" in result.output
        assert all(p.exists() for p in queued)

    def test_dry_run_keeps_files(self, project, queued):
        """Test a dry run plans every video and deletes nothing."""
        _, config = project
        result = invoke(config, "upload", "--dry-run")

        assert result.exit_code == 0
        assert result.output.count("PLAN") == 3
        assert "[3/3]" in result.output
        assert "[4/" not in result.output
        assert "Dry run - 3 video(s) planned" in result.output
        assert all(p.exists() for p in queued)

    def test_empty_queue(self, project):
        """Test an empty queue is reported and exits zero."""
        _, config = project
        publisher = failing_publisher("none")

        with patch("meme_shorts.cli.publish.commands.build_publisher", return_value=publisher):
            result = invoke(config, "upload")

        assert result.exit_code == 0
        assert "No pending videos" in result.output
        publisher.publish.assert_not_called()

    def test_item_failure_exits_zero_by_default(self, project, queued):
        """Test a failed item keeps its file and the run still exits zero."""
        _, config = project
        publisher = failing_publisher("b")

        with patch("meme_shorts.cli.publish.commands.build_publisher", return_value=publisher):
            result = invoke(config, "upload")

        assert result.exit_code == 0
        assert "Scheduled: 2 | Failed: 1" in result.output
        assert "Keeping for retry" in result.output
        assert [p.exists() for p in queued] == [False, True, False]

    def test_fail_on_error_exits_two(self, project, queued):
        """Test --fail-on-error turns item failures into exit code 2."""
        _, config = project
        publisher = failing_publisher("b")

        with patch("meme_shorts.cli.publish.commands.build_publisher", return_value=publisher):
            result = invoke(config, "upload", "--fail-on-error")

        assert result.exit_code == 2
        assert queued[1].exists()

    def test_all_succeed_with_fail_on_error(self, project, queued):
        """Test a clean run exits zero even with --fail-on-error."""
        _, config = project
        publisher = failing_publisher("none")

        with patch("meme_shorts.cli.publish.commands.build_publisher", return_value=publisher):
            result = invoke(config, "upload", "--fail-on-error")

        assert result.exit_code == 0
        assert not any(p.exists() for p in queued)

    def test_unknown_platform(self, tmp_path):
        """Test an unknown platform in settings is a configuration error."""
        config = tmp_path / "settings.yaml"
        config.write_text(yaml.safe_dump({"paths": {"base_dir": str(tmp_path)}, "platform": "myspace"}))

        result = invoke(config, "upload", "--dry-run")

        assert result.exit_code == 1
        assert "Unknown platform" in result.output


class TestGenerate:
    """Tests for the generate command."""

    def test_failure_exits_one(self, project):
        """Test a production failure exits 1."""
        _, config = project
        producer = fake_producer(SourceExhaustedError("Could only find 1 memes, needed 2"))

        with patch("meme_shorts.cli.produce.commands.build_producer", return_value=producer):
            result = invoke(config, "generate")

        assert result.exit_code == 1
        assert "Could only find 1 memes" in result.output
        producer.close.assert_awaited_once()

    def test_success(self, project):
        """Test a produced video is reported."""
        root, config = project
        producer = fake_producer(root / "output" / "meme_video_x.mp4")

        with patch("meme_shorts.cli.produce.commands.build_producer", return_value=producer):
            result = invoke(config, "generate")

        assert result.exit_code == 0
        assert "meme_video_x.mp4" in result.output

    def test_invalid_config_exits_one(self, tmp_path):
        """Test invalid settings stop the command."""
        config = tmp_path / "bad.yaml"
        config.write_text("- just\n- a list\n")

        result = invoke(config, "generate")

        assert result.exit_code == 1


class TestBatch:
    """Tests for the batch command."""

    def test_invalid_count(self, project):
        """Test a count below one is rejected."""
        _, config = project
        result = invoke(config, "batch", "--count", "0")
        assert result.exit_code == 1

    def test_unconfigured_publisher_exits_before_production(self, project):
        """Test missing credentials are caught before any video is produced."""
        _, config = project
        producer = fake_producer()

        with patch("meme_shorts.cli.produce.commands.build_producer", return_value=producer):
            result = invoke(config, "batch", "-n", "2")

        assert result.exit_code == 1
        producer.produce.assert_not_called()

    def test_abort_skips_publishing(self, project):
        """Test a production failure stops the batch and nothing is uploaded."""
        root, config = project
        producer = fake_producer(root / "output" / "one.mp4", SourceExhaustedError("dry"))
        publisher = failing_publisher("none")

        with patch("meme_shorts.cli.produce.commands.build_producer", return_value=producer), \
                patch("meme_shorts.cli.produce.commands.build_publisher", return_value=publisher):
            result = invoke(config, "batch", "--count", "3")

        assert result.exit_code == 1
        assert producer.produce.await_count == 2
        assert "Batch aborted at video 2/3" in result.output
        publisher.publish.assert_not_called()

    def test_dry_run_produces_then_plans(self, project, queued):
        """Test a dry-run batch produces and then only previews the schedule."""
        root, config = project
        producer = fake_producer(root / "output" / "a.mp4", root / "output" / "b.mp4")

        with patch("meme_shorts.cli.produce.commands.build_producer", return_value=producer):
            result = invoke(config, "batch", "-n", "2", "--dry-run")

        assert result.exit_code == 0
        assert producer.produce.await_count == 2
        assert "Dry run - 3 video(s) planned" in result.output
        assert all(p.exists() for p in queued)

    def test_publishes_after_production(self, project, queued):
        """Test a full batch publishes the whole queue."""
        root, config = project
        producer = fake_producer(root / "output" / "a.mp4")
        publisher = failing_publisher("none")

        with patch("meme_shorts.cli.produce.commands.build_producer", return_value=producer), \
                patch("meme_shorts.cli.produce.commands.build_publisher", return_value=publisher):
            result = invoke(config, "batch", "-n", "1")

        assert result.exit_code == 0
        assert publisher.publish.await_count == 3
        assert "Scheduled: 3 | Failed: 0" in result.output


class TestSchedulePreview:
    """Tests for the schedule-preview command."""

    def test_explicit_count(self, project):
        """Test a fixed number of slots is shown."""
        _, config = project
        result = invoke(config, "schedule-preview", "--count", "3")

        assert result.exit_code == 0
        assert "Publish Schedule" in result.output
        assert "UTC-5" in result.output
        assert result.output.count("Z") >= 3

    def test_defaults_to_pending_count(self, project, queued):
        """Test the pending count is used when no count is given."""
        _, config = project
        result = invoke(config, "schedule-preview")

        assert result.exit_code == 0
        assert "Publish Schedule" in result.output

    def test_empty_queue(self, project):
        """Test an empty queue has nothing to preview."""
        _, config = project
        result = invoke(config, "schedule-preview")

        assert result.exit_code == 0
        assert "No pending videos" in result.output


class TestAuthorize:
    """Tests for the authorize command."""

    def test_missing_client_secrets(self, project):
        """Test consent needs client_secrets.json."""
        _, config = project
        result = invoke(config, "authorize", "--no-browser")

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_verifies_stored_token(self, project):
        """Test a successful consent is followed by a credential check."""
        _, config = project
        check = AsyncMock(return_value=(True, "OK"))

        with patch("meme_shorts.cli.publish.commands.run_consent_flow") as consent, \
                patch("meme_shorts.platforms.youtube.YouTubePublisher.check_credentials", check):
            result = invoke(config, "authorize", "--no-browser")

        assert result.exit_code == 0
        assert "Token stored at" in result.output
        consent.assert_called_once()
        assert consent.call_args.kwargs["open_browser"] is False
        check.assert_awaited_once()

    def test_unusable_token_exits_one(self, project):
        """Test a token that cannot be reloaded fails the command."""
        _, config = project
        check = AsyncMock(return_value=(False, "Token refresh failed: invalid_grant"))

        with patch("meme_shorts.cli.publish.commands.run_consent_flow"), \
                patch("meme_shorts.platforms.youtube.YouTubePublisher.check_credentials", check):
            result = invoke(config, "authorize", "--no-browser")

        assert result.exit_code == 1
        assert "invalid_grant" in result.output
        assert "Token stored at" not in result.output
