"""AMI cleanup module.

This module finds images owned by the account that no instance was launched
from and removes them together with their EBS snapshots.

Classes:
    AmiCleaner: Orchestrator for the list/filter/delete pipeline
    DeletionReporter: Terminal rendering of cleanup results
"""

from __future__ import annotations

__all__ = [
    "AmiCleaner",
    "DeletionReporter",
    "filter_unused_images",
]

from .cleaner import AmiCleaner, filter_unused_images
from .reporter import DeletionReporter
