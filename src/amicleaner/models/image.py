"""Image and instance models built from EC2 API responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class BlockDeviceMapping:
    """A device mapping on an image.

    Only EBS-backed mappings reference a snapshot; instance store and
    ``NoDevice`` mappings leave ``snapshot_id`` unset.
    """

    device_name: Optional[str] = None
    snapshot_id: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "BlockDeviceMapping":
        ebs = data.get("Ebs") or {}
        return cls(
            device_name=data.get("DeviceName"),
            snapshot_id=ebs.get("SnapshotId"),
        )


@dataclass
class Image:
    """An Amazon Machine Image owned by the account.

    Attributes:
        image_id: AMI identifier (ami-...)
        block_device_mappings: Device mappings in the order the API returned them
        name: Image name (optional)
        creation_date: Creation timestamp as reported by EC2 (optional)
    """

    image_id: str
    block_device_mappings: List[BlockDeviceMapping] = field(default_factory=list)
    name: Optional[str] = None
    creation_date: Optional[str] = None

    @property
    def snapshot_ids(self) -> List[str]:
        """Snapshot ids referenced by this image, in mapping order."""
        return [bdm.snapshot_id for bdm in self.block_device_mappings if bdm.snapshot_id]

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Image":
        """Create an image from a DescribeImages entry."""
        return cls(
            image_id=data["ImageId"],
            block_device_mappings=[BlockDeviceMapping.from_api(m) for m in data.get("BlockDeviceMappings", [])],
            name=data.get("Name"),
            creation_date=data.get("CreationDate"),
        )


@dataclass
class Instance:
    """An EC2 instance and the image it was launched from."""

    instance_id: str
    image_id: str
    state: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Instance":
        """Create an instance from a DescribeInstances ``Instances`` entry."""
        return cls(
            instance_id=data.get("InstanceId", ""),
            image_id=data["ImageId"],
            state=data.get("State", {}).get("Name"),
        )
