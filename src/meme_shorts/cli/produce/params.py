"""Immutable parameter dataclasses for produce commands."""

from __future__ import annotations

from dataclasses import dataclass

from ...constants import DEFAULT_BATCH_COUNT


@dataclass(frozen=True)
class BatchParams:
    """Parameters for produce-N-and-publish."""

    count: int = DEFAULT_BATCH_COUNT
    dry_run: bool = False
    fail_on_error: bool = False

    @classmethod
    def from_cli(cls, count: int, dry_run: bool, fail_on_error: bool) -> "BatchParams":
        if count < 1:
            raise ValueError(f"--count must be at least 1, got {count}")
        return cls(count=count, dry_run=dry_run, fail_on_error=fail_on_error)
