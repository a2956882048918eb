"""Deletion outcome and result models.

Represents the result of individual deregister/delete calls and the aggregated
outcome of a batch.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from amicleaner.errors import BatchDeletionFailed


class OutcomeStatus(Enum):
    """Outcome of a single mutating EC2 call."""

    SUCCEEDED = "succeeded"
    DRY_RUN_SUCCEEDED = "dry-run-succeeded"
    FAILED = "failed"


@dataclass
class DeleteOutcome:
    """Tagged result of deregistering an image or deleting a snapshot.

    ``DRY_RUN_SUCCEEDED`` means the backend confirmed the call would have
    succeeded without performing it.

    Attributes:
        resource_id: Image or snapshot id the call targeted
        status: Outcome of the call
        error_code: AWS error code if failed (optional)
        error_message: Human-readable error if failed (optional)
    """

    resource_id: str
    status: OutcomeStatus
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status in (OutcomeStatus.SUCCEEDED, OutcomeStatus.DRY_RUN_SUCCEEDED)

    @classmethod
    def ok(cls, resource_id: str) -> "DeleteOutcome":
        return cls(resource_id=resource_id, status=OutcomeStatus.SUCCEEDED)

    @classmethod
    def dry_run_ok(cls, resource_id: str) -> "DeleteOutcome":
        return cls(resource_id=resource_id, status=OutcomeStatus.DRY_RUN_SUCCEEDED)

    @classmethod
    def failed(cls, resource_id: str, error_code: str, error_message: Optional[str] = None) -> "DeleteOutcome":
        return cls(
            resource_id=resource_id,
            status=OutcomeStatus.FAILED,
            error_code=error_code,
            error_message=error_message,
        )


@dataclass
class DeletionResult:
    """Aggregated result of a deletion batch.

    Attributes:
        deleted: Ids successfully deleted or dry-run checked, in processing order
        failures: Failed id -> error description, in the order failures occurred
        dry_run: Whether the batch ran in dry-run mode
    """

    deleted: List[str] = field(default_factory=list)
    failures: Dict[str, str] = field(default_factory=dict)
    dry_run: bool = False

    @property
    def failed_ids(self) -> List[str]:
        return list(self.failures)

    @property
    def total_processed(self) -> int:
        return len(self.deleted) + len(self.failures)

    def record(self, outcome: DeleteOutcome) -> None:
        """Add a single call outcome to the batch."""
        if outcome.succeeded:
            self.deleted.append(outcome.resource_id)
            return

        if outcome.error_code and outcome.error_message:
            reason = f"{outcome.error_code}: {outcome.error_message}"
        else:
            reason = outcome.error_code or outcome.error_message or "unknown error"
        self.failures[outcome.resource_id] = reason

    def error_or_none(self) -> Optional[BatchDeletionFailed]:
        """Return the batch failure, or None if every call succeeded."""
        if not self.failures:
            return None
        return BatchDeletionFailed(self.failed_ids, self.deleted)

    def raise_for_failures(self) -> None:
        """Raise BatchDeletionFailed if any call in the batch failed."""
        error = self.error_or_none()
        if error is not None:
            raise error
