"""Status enums for meme shorts.

Lifecycle of one artifact:

    (producer) -> PENDING in output/ -> PLANNED (dry run only)
                                     -> SCHEDULED (uploaded, deleted locally)
                                     -> FAILED (kept for the next run)
"""

from enum import Enum


class PublishStatus(str, Enum):
    """Outcome of one artifact in a publish run."""

    PLANNED = "planned"
    """Dry run: slot computed, nothing uploaded."""

    SCHEDULED = "scheduled"
    """Uploaded as private with a publishAt timestamp."""

    FAILED = "failed"
    """Upload failed; artifact stays in the queue."""


class PublishErrorKind(str, Enum):
    """Tagged failure kinds produced at the publisher boundary.

    The orchestrator does not branch on these; they travel to the caller
    so reports can say *why* an item failed.
    """

    AUTH_FAILURE = "auth_failure"
    """Credentials missing, revoked or not refreshable."""

    QUOTA_EXCEEDED = "quota_exceeded"
    """Daily quota or rate limit hit."""

    MALFORMED_REQUEST = "malformed_request"
    """Request rejected as invalid (bad metadata, missing file)."""

    TRANSIENT_NETWORK = "transient_network"
    """Timeouts, connection resets, 5xx responses."""

    UNKNOWN = "unknown"
    """Anything else."""


class Visibility(str, Enum):
    """Privacy status sent with an upload."""

    PRIVATE = "private"
    UNLISTED = "unlisted"
    PUBLIC = "public"
