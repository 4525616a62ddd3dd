"""Directory-backed queue of finished videos awaiting upload."""

from .pending import Artifact, PendingQueue

__all__ = ["Artifact", "PendingQueue"]
