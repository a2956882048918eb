"""Data models for images, instances and deletion results."""

from __future__ import annotations

from .deletion_result import DeleteOutcome, DeletionResult, OutcomeStatus
from .image import BlockDeviceMapping, Image, Instance

__all__ = [
    "BlockDeviceMapping",
    "DeleteOutcome",
    "DeletionResult",
    "Image",
    "Instance",
    "OutcomeStatus",
]
