"""Publish slot computation."""

from .schedule import PublishSlot, ScheduleConfig, compute_schedule, reference_timezone

__all__ = [
    "PublishSlot",
    "ScheduleConfig",
    "compute_schedule",
    "reference_timezone",
]
