"""Tests for DeleteOutcome and DeletionResult models."""

from __future__ import annotations

import pytest

from amicleaner.errors import AmiCleanerError, BatchDeletionFailed
from amicleaner.models.deletion_result import DeleteOutcome, DeletionResult, OutcomeStatus


class TestDeleteOutcome:
    """Test suite for DeleteOutcome."""

    def test_ok(self) -> None:
        outcome = DeleteOutcome.ok("ami-1")

        assert outcome.status == OutcomeStatus.SUCCEEDED
        assert outcome.succeeded is True
        assert outcome.error_code is None

    def test_dry_run_ok_counts_as_success(self) -> None:
        outcome = DeleteOutcome.dry_run_ok("ami-1")

        assert outcome.status == OutcomeStatus.DRY_RUN_SUCCEEDED
        assert outcome.succeeded is True

    def test_failed(self) -> None:
        outcome = DeleteOutcome.failed("snap-1", "InvalidSnapshot.InUse", "snapshot in use")

        assert outcome.succeeded is False
        assert outcome.error_code == "InvalidSnapshot.InUse"
        assert outcome.error_message == "snapshot in use"


class TestDeletionResult:
    """Test suite for DeletionResult."""

    def test_empty_result_has_no_error(self) -> None:
        result = DeletionResult()

        assert result.deleted == []
        assert result.failed_ids == []
        assert result.total_processed == 0
        assert result.error_or_none() is None
        result.raise_for_failures()

    def test_record_keeps_order(self) -> None:
        result = DeletionResult()

        result.record(DeleteOutcome.ok("ami-1"))
        result.record(DeleteOutcome.failed("snap-1", "UnauthorizedOperation"))
        result.record(DeleteOutcome.dry_run_ok("ami-2"))
        result.record(DeleteOutcome.failed("snap-2", "InvalidSnapshot.InUse", "in use"))

        assert result.deleted == ["ami-1", "ami-2"]
        assert result.failed_ids == ["snap-1", "snap-2"]
        assert result.failures["snap-1"] == "UnauthorizedOperation"
        assert result.failures["snap-2"] == "InvalidSnapshot.InUse: in use"
        assert result.total_processed == 4

    def test_failure_without_details(self) -> None:
        result = DeletionResult()
        result.record(DeleteOutcome(resource_id="ami-1", status=OutcomeStatus.FAILED))

        assert result.failures == {"ami-1": "unknown error"}

    def test_error_or_none_with_failures(self) -> None:
        result = DeletionResult(deleted=["ami-1"], failures={"snap-1": "denied"})

        error = result.error_or_none()

        assert isinstance(error, BatchDeletionFailed)
        assert isinstance(error, AmiCleanerError)
        assert error.failed_ids == ["snap-1"]
        assert error.deleted == ["ami-1"]
        assert "snap-1" in str(error)

    def test_raise_for_failures(self) -> None:
        result = DeletionResult(failures={"ami-1": "denied", "snap-1": "denied"})

        with pytest.raises(BatchDeletionFailed) as exc_info:
            result.raise_for_failures()

        assert exc_info.value.failed_ids == ["ami-1", "snap-1"]
        assert exc_info.value.deleted == []
