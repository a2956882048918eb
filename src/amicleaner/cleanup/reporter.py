"""Terminal reporting for AMI cleanup results."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from rich.console import Console
from rich.table import Table

from amicleaner.models.deletion_result import DeletionResult
from amicleaner.models.image import Image


class DeletionReporter:
    """Render cleanup results with Rich."""

    def format_unused_images(self, images: Sequence[Image]) -> str:
        """Format the images selected for deletion as a table.

        Args:
            images: Unused images

        Returns:
            Formatted string for terminal display
        """
        if not images:
            return "No unused images found."

        table = Table(title="Unused Images")
        table.add_column("Image ID", style="cyan")
        table.add_column("Name")
        table.add_column("Created")
        table.add_column("Snapshots")

        for image in images:
            table.add_row(
                image.image_id,
                image.name or "-",
                image.creation_date or "-",
                ", ".join(image.snapshot_ids) or "-",
            )

        return self._render(table)

    def format_terminal(self, result: DeletionResult) -> str:
        """Format a deletion result for terminal output.

        Args:
            result: Result of a deletion batch

        Returns:
            Formatted string for terminal display
        """
        if not result.deleted and not result.failures:
            return "nothing to delete"

        title = "Dry Run Results" if result.dry_run else "Deletion Results"
        ok_label = "[green]WOULD DELETE[/green]" if result.dry_run else "[green]DELETED[/green]"

        table = Table(title=title)
        table.add_column("Status", style="bold")
        table.add_column("Resource")
        table.add_column("Type")
        table.add_column("Error")

        for resource_id in result.deleted:
            table.add_row(ok_label, resource_id, self._resource_type(resource_id), "")

        for resource_id, reason in result.failures.items():
            if len(reason) > 60:
                reason = reason[:57] + "..."
            table.add_row("[red]FAILED[/red]", resource_id, self._resource_type(resource_id), reason)

        return self._render(table)

    def generate_summary(self, result: DeletionResult) -> Dict[str, Any]:
        """Generate summary counts for a deletion result."""
        deleted_images: List[str] = [r for r in result.deleted if self._resource_type(r) == "image"]
        failed_images: List[str] = [r for r in result.failed_ids if self._resource_type(r) == "image"]

        return {
            "dry_run": result.dry_run,
            "total": result.total_processed,
            "succeeded_count": len(result.deleted),
            "failed_count": len(result.failures),
            "images_succeeded": len(deleted_images),
            "snapshots_succeeded": len(result.deleted) - len(deleted_images),
            "images_failed": len(failed_images),
            "snapshots_failed": len(result.failures) - len(failed_images),
        }

    def _resource_type(self, resource_id: str) -> str:
        if resource_id.startswith("ami-"):
            return "image"
        if resource_id.startswith("snap-"):
            return "snapshot"
        return "unknown"

    def _render(self, table: Table) -> str:
        console = Console(width=120)
        with console.capture() as capture:
            console.print(table)
        return capture.get()
