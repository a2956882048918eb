"""AMI Cleaner - remove AMIs and EBS snapshots no instance is using."""

__version__ = "1.0.0"
