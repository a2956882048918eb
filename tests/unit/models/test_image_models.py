"""Tests for Image, BlockDeviceMapping and Instance models."""

from __future__ import annotations

import pytest

from amicleaner.models.image import BlockDeviceMapping, Image, Instance
from tests.fixtures.images import image_api_dict


class TestImage:
    """Test suite for Image model."""

    def test_from_api(self) -> None:
        image = Image.from_api(image_api_dict("ami-123", ["snap-1", "snap-2"], name="web"))

        assert image.image_id == "ami-123"
        assert image.name == "web"
        assert image.creation_date == "2024-01-15T10:00:00.000Z"
        assert image.snapshot_ids == ["snap-1", "snap-2"]

    def test_skips_mappings_without_snapshot(self) -> None:
        """Test instance store and NoDevice mappings carry no snapshot."""
        image = Image.from_api(
            {
                "ImageId": "ami-123",
                "BlockDeviceMappings": [
                    {"DeviceName": "/dev/xvda", "Ebs": {"SnapshotId": "snap-root"}},
                    {"DeviceName": "/dev/sdb", "VirtualName": "ephemeral0"},
                    {"DeviceName": "/dev/sdc", "NoDevice": ""},
                    {"DeviceName": "/dev/sdd", "Ebs": {"VolumeSize": 100}},
                ],
            }
        )

        assert len(image.block_device_mappings) == 4
        assert image.snapshot_ids == ["snap-root"]

    def test_minimal_entry(self) -> None:
        image = Image.from_api({"ImageId": "ami-123"})

        assert image.block_device_mappings == []
        assert image.snapshot_ids == []
        assert image.name is None

    def test_requires_image_id(self) -> None:
        with pytest.raises(KeyError):
            Image.from_api({"Name": "no-id"})


class TestBlockDeviceMapping:
    """Test suite for BlockDeviceMapping model."""

    def test_from_api_ebs(self) -> None:
        bdm = BlockDeviceMapping.from_api({"DeviceName": "/dev/xvda", "Ebs": {"SnapshotId": "snap-1"}})

        assert bdm.device_name == "/dev/xvda"
        assert bdm.snapshot_id == "snap-1"

    def test_from_api_ephemeral(self) -> None:
        bdm = BlockDeviceMapping.from_api({"DeviceName": "/dev/sdb", "VirtualName": "ephemeral0"})

        assert bdm.snapshot_id is None


class TestInstance:
    """Test suite for Instance model."""

    def test_from_api(self) -> None:
        instance = Instance.from_api(
            {"InstanceId": "i-123", "ImageId": "ami-123", "State": {"Code": 16, "Name": "running"}}
        )

        assert instance.instance_id == "i-123"
        assert instance.image_id == "ami-123"
        assert instance.state == "running"

    def test_from_api_without_state(self) -> None:
        instance = Instance.from_api({"InstanceId": "i-123", "ImageId": "ami-123"})

        assert instance.state is None
