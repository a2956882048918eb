"""Tests for DeletionReporter."""

from __future__ import annotations

import pytest

from amicleaner.cleanup.reporter import DeletionReporter
from amicleaner.models.deletion_result import DeletionResult
from tests.fixtures.images import create_image


@pytest.fixture
def reporter() -> DeletionReporter:
    return DeletionReporter()


class TestFormatTerminal:
    """Tests for terminal formatting of deletion results."""

    def test_nothing_to_delete(self, reporter: DeletionReporter) -> None:
        assert reporter.format_terminal(DeletionResult()) == "nothing to delete"

    def test_lists_deleted_and_failed(self, reporter: DeletionReporter) -> None:
        result = DeletionResult(deleted=["ami-1", "snap-1"], failures={"snap-2": "UnauthorizedOperation: denied"})

        output = reporter.format_terminal(result)

        assert "Deletion Results" in output
        assert "ami-1" in output
        assert "snap-1" in output
        assert "snap-2" in output
        assert "FAILED" in output
        assert "UnauthorizedOperation" in output

    def test_dry_run_title(self, reporter: DeletionReporter) -> None:
        output = reporter.format_terminal(DeletionResult(deleted=["ami-1"], dry_run=True))

        assert "Dry Run Results" in output
        assert "WOULD DELETE" in output

    def test_truncates_long_errors(self, reporter: DeletionReporter) -> None:
        result = DeletionResult(failures={"ami-1": "x" * 200})

        output = reporter.format_terminal(result)

        assert "x" * 200 not in output


class TestFormatUnusedImages:
    """Tests for the unused image table."""

    def test_no_images(self, reporter: DeletionReporter) -> None:
        assert reporter.format_unused_images([]) == "No unused images found."

    def test_lists_images_and_snapshots(self, reporter: DeletionReporter) -> None:
        output = reporter.format_unused_images([create_image("ami-123", ["snap-123"], name="web-base")])

        assert "ami-123" in output
        assert "snap-123" in output
        assert "web-base" in output


class TestGenerateSummary:
    """Tests for summary counts."""

    def test_counts_by_type(self, reporter: DeletionReporter) -> None:
        result = DeletionResult(
            deleted=["ami-1", "snap-1", "snap-2"],
            failures={"ami-2": "denied", "snap-3": "in use"},
        )

        summary = reporter.generate_summary(result)

        assert summary == {
            "dry_run": False,
            "total": 5,
            "succeeded_count": 3,
            "failed_count": 2,
            "images_succeeded": 1,
            "snapshots_succeeded": 2,
            "images_failed": 1,
            "snapshots_failed": 1,
        }
