"""Stateless service for publishing and schedule previews."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from ...config import AppSettings
from ...platforms.base import PlatformPublisher
from ...publishing.orchestrator import OutcomeCallback, PublishOutcome, UploadOrchestrator
from ...queue.pending import PendingQueue
from ...scheduling.schedule import PublishSlot, compute_schedule


class PublishService:
    """Thin layer between the commands and the orchestrator."""

    def orchestrator(
        self,
        settings: AppSettings,
        queue: PendingQueue,
        publisher: PlatformPublisher,
        on_progress: OutcomeCallback = None,
    ) -> UploadOrchestrator:
        return UploadOrchestrator(
            queue=queue,
            publisher=publisher,
            schedule_config=settings.schedule,
            on_progress=on_progress,
        )

    def preview(
        self,
        settings: AppSettings,
        count: int,
        now: Optional[datetime] = None,
    ) -> list[PublishSlot]:
        """Slots that ``count`` pending videos would get right now."""
        return compute_schedule(count, now or datetime.now(timezone.utc), settings.schedule)


def summarize(outcomes: list[PublishOutcome]) -> dict[str, int]:
    """Aggregate counts for the summary line."""
    return {
        "planned": sum(1 for o in outcomes if o.success is None),
        "scheduled": sum(1 for o in outcomes if o.success is True),
        "failed": sum(1 for o in outcomes if o.success is False),
    }
