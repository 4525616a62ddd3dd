"""Publish schedule calculator.

Spreads N publish slots across a daily peak window:

    slot i = anchor date at peak_start_hour:00 + i * gap_minutes

in a fixed reference offset (EST, UTC-5, no daylight saving). The anchor
is today in the reference offset, or tomorrow once the peak hour has
started. Any slot that falls earlier than ``now + min_lead_minutes`` is
pushed forward by whole days until it is not. The result is then sorted and spaced so it is
always strictly increasing.

The function is pure: it reads no clock and performs no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone

from pydantic import BaseModel, Field

from ..constants import (
    GAP_MINUTES,
    MIN_LEAD_MINUTES,
    PEAK_START_HOUR,
    REFERENCE_UTC_OFFSET_HOURS,
)


class ScheduleConfig(BaseModel):
    """Schedule window settings."""

    peak_start_hour: int = Field(
        default=PEAK_START_HOUR, ge=0, le=23,
        description="Hour (reference offset) of the first slot",
    )
    gap_minutes: int = Field(
        default=GAP_MINUTES, gt=0,
        description="Minutes between consecutive slots",
    )
    min_lead_minutes: int = Field(
        default=MIN_LEAD_MINUTES, ge=0,
        description="No slot sooner than this from now",
    )
    utc_offset_hours: int = Field(
        default=REFERENCE_UTC_OFFSET_HOURS, ge=-12, le=14,
        description="Fixed reference offset; DST is ignored",
    )


def reference_timezone(config: ScheduleConfig) -> timezone:
    """Fixed-offset timezone the peak window is expressed in."""
    return timezone(timedelta(hours=config.utc_offset_hours))


@dataclass(frozen=True)
class PublishSlot:
    """A computed publish time for the i-th pending item."""

    index: int
    publish_at: datetime  # aware, UTC

    def local_time(self, offset_hours: int = REFERENCE_UTC_OFFSET_HOURS) -> datetime:
        """Slot time converted to a fixed UTC offset."""
        return self.publish_at.astimezone(timezone(timedelta(hours=offset_hours)))

    def to_rfc3339(self) -> str:
        """UTC timestamp in the form YouTube expects, e.g. 2025-01-31T23:00:00Z."""
        return self.publish_at.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def compute_schedule(
    count: int,
    now: datetime,
    config: ScheduleConfig | None = None,
) -> list[PublishSlot]:
    """Compute ``count`` strictly increasing publish slots.

    Args:
        count: Number of slots wanted. 0 returns an empty list.
        now: Current moment. Must be timezone-aware.
        config: Window settings. Defaults apply when omitted.

    Returns:
        Slots ordered earliest first, indexed 0..count-1, in UTC.

    Raises:
        ValueError: If count is negative or now is naive.
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    if now.tzinfo is None or now.utcoffset() is None:
        raise ValueError("now must be a timezone-aware datetime")

    config = config or ScheduleConfig()
    if count == 0:
        return []

    tz = reference_timezone(config)
    local_now = now.astimezone(tz)

    anchor_date = local_now.date()
    if local_now.hour >= config.peak_start_hour:
        anchor_date += timedelta(days=1)

    base = datetime.combine(anchor_date, time(hour=config.peak_start_hour), tzinfo=tz)
    earliest = now + timedelta(minutes=config.min_lead_minutes)
    gap = timedelta(minutes=config.gap_minutes)

    times: list[datetime] = []
    for i in range(count):
        slot_time = base + i * gap
        while slot_time < earliest:
            slot_time += timedelta(days=1)
        times.append(slot_time)

    # Advancing single slots can break ordering; restore it.
    times.sort()
    for i in range(1, len(times)):
        if times[i] <= times[i - 1]:
            times[i] = times[i - 1] + gap

    return [
        PublishSlot(index=i, publish_at=t.astimezone(timezone.utc))
        for i, t in enumerate(times)
    ]
