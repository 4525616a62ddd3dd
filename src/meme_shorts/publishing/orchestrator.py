"""Upload/publish orchestrator.

Drains the pending queue into scheduled, private uploads:

    1. Snapshot the queue (oldest first)
    2. Compute one publish slot per artifact
    3. Pair artifact i with slot i
    4. Dry run: report the plan and stop
    5. Otherwise upload one artifact at a time; delete it only after the
       platform confirmed the upload

A failed upload never stops the batch and never deletes the artifact.
It stays in the queue for the next run, which recomputes its slot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from ..constants import PublishErrorKind, PublishStatus, Visibility
from ..platforms.base import PlatformPublisher, PublishError
from ..platforms.youtube.metadata import metadata_for_artifact
from ..queue.pending import Artifact, PendingQueue
from ..scheduling.schedule import PublishSlot, ScheduleConfig, compute_schedule

_logger = logging.getLogger("meme_shorts.publish")

MetadataBuilder = Callable[[Artifact], Any]
Clock = Callable[[], datetime]
OutcomeCallback = Optional[Callable[["PublishOutcome"], None]]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class PublishOutcome:
    """Result of handling one artifact in a publish run."""

    artifact: Artifact
    slot: PublishSlot
    status: PublishStatus
    video_id: Optional[str] = None
    video_url: Optional[str] = None
    error: Optional[str] = None
    error_kind: Optional[PublishErrorKind] = None
    removal_error: Optional[str] = None

    @property
    def success(self) -> Optional[bool]:
        """True if scheduled, False if failed, None for a dry-run plan."""
        if self.status == PublishStatus.PLANNED:
            return None
        return self.status == PublishStatus.SCHEDULED

    @property
    def publish_at(self) -> datetime:
        return self.slot.publish_at


class UploadOrchestrator:
    """Publishes every pending artifact at a computed slot.

    Args:
        queue: Source of pending artifacts.
        publisher: Platform the artifacts are uploaded to.
        schedule_config: Peak window settings.
        metadata_builder: Builds upload metadata for an artifact.
        clock: Returns the current aware datetime.
        on_progress: Called with each outcome as soon as it is known.
    """

    def __init__(
        self,
        queue: PendingQueue,
        publisher: PlatformPublisher,
        schedule_config: Optional[ScheduleConfig] = None,
        metadata_builder: MetadataBuilder = metadata_for_artifact,
        clock: Clock = utc_now,
        on_progress: OutcomeCallback = None,
    ):
        self.queue = queue
        self.publisher = publisher
        self.schedule_config = schedule_config or ScheduleConfig()
        self.metadata_builder = metadata_builder
        self.clock = clock
        self.on_progress = on_progress

    def plan(self) -> list[tuple[Artifact, PublishSlot]]:
        """Pair every pending artifact with its slot, oldest with earliest."""
        artifacts = self.queue.list_pending()
        if not artifacts:
            return []
        slots = compute_schedule(len(artifacts), self.clock(), self.schedule_config)
        return list(zip(artifacts, slots))

    async def publish_all(
        self,
        dry_run: bool = False,
        pairs: Optional[list[tuple[Artifact, PublishSlot]]] = None,
    ) -> list[PublishOutcome]:
        """Publish the whole queue.

        Args:
            dry_run: Report the plan without uploading.
            pairs: A plan already returned by :meth:`plan`. Taken fresh
                from the queue when omitted.

        Returns:
            One outcome per artifact that was pending at the start, in
            queue order.
        """
        if pairs is None:
            pairs = self.plan()
        if not pairs:
            _logger.info("No pending artifacts to publish")
            return []

        _logger.info(f"Publishing {len(pairs)} artifact(s), dry_run={dry_run}")
        outcomes = []

        for artifact, slot in pairs:
            if dry_run:
                outcome = PublishOutcome(artifact=artifact, slot=slot, status=PublishStatus.PLANNED)
            else:
                outcome = await self._publish_one(artifact, slot)
            outcomes.append(outcome)
            if self.on_progress:
                self.on_progress(outcome)

        scheduled = sum(1 for o in outcomes if o.success)
        failed = sum(1 for o in outcomes if o.success is False)
        _logger.info(f"Publish run finished: scheduled={scheduled} failed={failed}")
        return outcomes

    async def _publish_one(self, artifact: Artifact, slot: PublishSlot) -> PublishOutcome:
        try:
            metadata = self.metadata_builder(artifact)
            receipt = await self.publisher.publish(
                artifact.path,
                metadata,
                visibility=Visibility.PRIVATE,
                publish_at=slot.publish_at,
            )
        except PublishError as e:
            _logger.warning(f"Keeping {artifact.name} for retry: [{e.kind.value}] {e}")
            return PublishOutcome(
                artifact=artifact,
                slot=slot,
                status=PublishStatus.FAILED,
                error=str(e),
                error_kind=e.kind,
            )
        except Exception as e:
            _logger.exception(f"Unexpected error publishing {artifact.name}")
            return PublishOutcome(
                artifact=artifact,
                slot=slot,
                status=PublishStatus.FAILED,
                error=str(e) or type(e).__name__,
                error_kind=PublishErrorKind.UNKNOWN,
            )

        _logger.info(f"Scheduled {artifact.name} as {receipt.media_id} for {slot.to_rfc3339()}")

        removal_error = None
        try:
            self.queue.remove_artifact(artifact)
        except OSError as e:
            removal_error = str(e)
            _logger.error(f"Published {artifact.name} but could not delete it: {e}")

        return PublishOutcome(
            artifact=artifact,
            slot=slot,
            status=PublishStatus.SCHEDULED,
            video_id=receipt.media_id,
            video_url=receipt.permalink,
            removal_error=removal_error,
        )
