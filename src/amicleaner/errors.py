"""Exception hierarchy for AMI cleanup runs.

Each pipeline stage raises its own exception type so callers can tell which
stage failed without parsing message text. Transport errors are chained as
``__cause__``.
"""

from __future__ import annotations

from typing import Iterable, Optional


class AmiCleanerError(Exception):
    """Base class for all cleanup errors."""


class SessionCreationFailed(AmiCleanerError):
    """Raised when an AWS session or credentials cannot be established."""


class ImageQueryFailed(AmiCleanerError):
    """Raised when the owned images cannot be listed."""


class InstanceQueryFailed(AmiCleanerError):
    """Raised when the instances using the owned images cannot be listed."""


class FilterFailed(AmiCleanerError):
    """Raised when an injected image filter fails."""


class BatchDeletionFailed(AmiCleanerError):
    """Raised when one or more images or snapshots could not be deleted.

    This is the only cleanup error that coexists with partial success: ``deleted``
    holds every id that was removed (or checked, in dry-run mode) before the
    batch finished.

    Attributes:
        failed_ids: Image and snapshot ids whose deletion failed
        deleted: Image and snapshot ids successfully processed
    """

    def __init__(self, failed_ids: Iterable[str], deleted: Optional[Iterable[str]] = None) -> None:
        self.failed_ids = list(failed_ids)
        self.deleted = list(deleted or [])
        super().__init__(f"Failed to delete {len(self.failed_ids)} resource(s): {', '.join(self.failed_ids)}")
