"""Publishing the pending queue."""

from .orchestrator import PublishOutcome, UploadOrchestrator

__all__ = ["PublishOutcome", "UploadOrchestrator"]
