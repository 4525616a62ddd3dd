"""Publish commands: upload, schedule-preview, authorize."""
