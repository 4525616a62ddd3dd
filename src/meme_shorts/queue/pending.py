"""Pending-work queue backed by a single directory.

Every regular file in the queue directory whose name ends with the
video extension is one pending artifact. There is no manifest: the
directory listing is the queue. Oldest modification time is published
first.

Producers never write into the directory directly. They render into
the hidden ``.staging/`` subdirectory and call :meth:`PendingQueue.commit`,
which moves the finished file in with an atomic ``os.replace``. A
half-written video is therefore never listed.

Each artifact may carry a JSON sidecar with the same stem holding meme
credits. The sidecar is not an artifact and is deleted with its video.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from ..constants import SIDECAR_EXTENSION, STAGING_DIR_NAME, VIDEO_FORMAT

_logger = logging.getLogger("meme_shorts.queue")


@dataclass(frozen=True)
class Artifact:
    """A finished video waiting in the queue."""

    path: Path
    created_at: datetime  # UTC, from mtime

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def size_bytes(self) -> int:
        try:
            return self.path.stat().st_size
        except OSError:
            return 0

    @property
    def sidecar_path(self) -> Path:
        return self.path.with_suffix(SIDECAR_EXTENSION)

    @classmethod
    def from_path(cls, path: Path) -> "Artifact":
        """Build an artifact from a file on disk."""
        mtime = path.stat().st_mtime
        return cls(
            path=path.resolve(),
            created_at=datetime.fromtimestamp(mtime, tz=timezone.utc),
        )


class PendingQueue:
    """Queue of artifacts living in one directory.

    Args:
        directory: Queue directory. Need not exist yet.
        extension: Format marker of a finished artifact.
    """

    def __init__(self, directory: Path, extension: str = VIDEO_FORMAT):
        self.directory = Path(directory)
        self.extension = extension.lower()

    @property
    def staging_dir(self) -> Path:
        return self.directory / STAGING_DIR_NAME

    def list_pending(self) -> List[Artifact]:
        """List pending artifacts, oldest first.

        Entries are listed by name before the mtime sort, so artifacts
        with identical mtimes keep a deterministic order.

        A missing or unreadable directory is an empty queue.
        """
        if not self.directory.exists():
            _logger.debug(f"Queue directory does not exist: {self.directory}")
            return []

        try:
            entries = sorted(self.directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            _logger.warning(f"Could not read queue directory {self.directory}: {e}")
            return []

        artifacts = []
        for entry in entries:
            if not self._is_artifact(entry):
                continue
            try:
                artifacts.append(Artifact.from_path(entry))
            except OSError as e:
                # Removed between listing and stat
                _logger.debug(f"Skipping {entry.name}: {e}")

        artifacts.sort(key=lambda a: a.created_at)
        return artifacts

    def count(self) -> int:
        """Number of pending artifacts."""
        return len(self.list_pending())

    def remove_artifact(self, artifact: Artifact) -> None:
        """Delete an artifact and its sidecar.

        Removing an artifact that is already gone is not an error.

        Raises:
            OSError: If the file exists but cannot be deleted.
        """
        artifact.path.unlink(missing_ok=True)
        artifact.sidecar_path.unlink(missing_ok=True)
        _logger.info(f"Removed artifact {artifact.name}")

    def staging_path(self, name: str) -> Path:
        """Path inside the staging area for a file being produced."""
        self.staging_dir.mkdir(parents=True, exist_ok=True)
        return self.staging_dir / name

    def commit(self, staged_path: Path, sidecar: Optional[Path] = None) -> Artifact:
        """Move a finished file from staging into the queue.

        The sidecar, if any, is moved first so the video never appears
        without its credits.

        Args:
            staged_path: Completed video inside the staging area.
            sidecar: Optional JSON credits file to publish alongside.

        Returns:
            The new artifact.
        """
        target = self.directory / staged_path.name
        self.directory.mkdir(parents=True, exist_ok=True)

        if sidecar is not None and sidecar.exists():
            os.replace(sidecar, target.with_suffix(SIDECAR_EXTENSION))

        os.replace(staged_path, target)
        _logger.info(f"Committed artifact {target.name}")
        return Artifact.from_path(target)

    def discard_staged(self, *paths: Optional[Path]) -> None:
        """Delete leftovers of a failed production."""
        for path in paths:
            if path is None:
                continue
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                _logger.warning(f"Could not discard staged file {path}: {e}")

    def _is_artifact(self, entry: Path) -> bool:
        if entry.name.startswith("."):
            return False
        if not entry.name.lower().endswith(self.extension):
            return False
        try:
            return entry.is_file()
        except OSError:
            return False
