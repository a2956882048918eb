"""EC2 backend used by the AMI cleaner.

Wraps the four EC2 calls the cleaner needs and converts raw API responses into
models. This is the only module that inspects AWS error codes: a
``DryRunOperation`` error from a mutating call is reported as a dry-run success
rather than a failure.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Protocol, Sequence, Tuple

from botocore.exceptions import BotoCoreError, ClientError

from ..models.deletion_result import DeleteOutcome
from ..models.image import Image, Instance
from .client import create_boto_client

logger = logging.getLogger(__name__)

DRY_RUN_ERROR_CODE = "DryRunOperation"

# Upper limit accepted by DescribeInstances when filters are used.
DESCRIBE_INSTANCES_PAGE_SIZE = 1000


class Ec2Backend(Protocol):
    """Capabilities the cleaner needs from EC2."""

    def describe_images(self, owners: Sequence[str]) -> List[Image]:
        ...

    def describe_instances(
        self, image_ids: Sequence[str], next_token: Optional[str] = None
    ) -> Tuple[List[Instance], Optional[str]]:
        ...

    def deregister_image(self, image_id: str, dry_run: bool) -> DeleteOutcome:
        ...

    def delete_snapshot(self, snapshot_id: str, dry_run: bool) -> DeleteOutcome:
        ...


class Boto3Ec2Backend:
    """EC2 backend backed by a boto3 client.

    Describe calls let botocore errors propagate so the caller can wrap them
    with a stage-specific error. Mutating calls never raise for AWS errors;
    they return a DeleteOutcome instead.
    """

    def __init__(self, client: Any) -> None:
        """Initialize backend.

        Args:
            client: boto3 EC2 client
        """
        self.client = client

    @classmethod
    def create(
        cls,
        profile_name: Optional[str] = None,
        region_name: Optional[str] = None,
        session: Optional[Any] = None,
    ) -> "Boto3Ec2Backend":
        """Build a backend with a fresh EC2 client."""
        client = create_boto_client(
            service_name="ec2",
            region_name=region_name,
            profile_name=profile_name,
            session=session,
        )
        return cls(client)

    def describe_images(self, owners: Sequence[str]) -> List[Image]:
        """List images for the given owners, following every result page."""
        images = []
        paginator = self.client.get_paginator("describe_images")

        for page in paginator.paginate(Owners=list(owners)):
            for image in page.get("Images", []):
                images.append(Image.from_api(image))

        logger.debug(f"Described {len(images)} images owned by {', '.join(owners)}")
        return images

    def describe_instances(
        self, image_ids: Sequence[str], next_token: Optional[str] = None
    ) -> Tuple[List[Instance], Optional[str]]:
        """Fetch one page of instances launched from any of the given images.

        Returns:
            Tuple of (instances on this page, token for the next page or None)
        """
        params: dict = {
            "Filters": [{"Name": "image-id", "Values": list(image_ids)}],
            "MaxResults": DESCRIBE_INSTANCES_PAGE_SIZE,
        }
        if next_token:
            params["NextToken"] = next_token

        response = self.client.describe_instances(**params)

        instances = []
        for reservation in response.get("Reservations", []):
            for instance in reservation.get("Instances", []):
                instances.append(Instance.from_api(instance))

        return instances, response.get("NextToken") or None

    def deregister_image(self, image_id: str, dry_run: bool) -> DeleteOutcome:
        """Deregister an image."""
        return self._mutate(self.client.deregister_image, image_id, ImageId=image_id, DryRun=dry_run)

    def delete_snapshot(self, snapshot_id: str, dry_run: bool) -> DeleteOutcome:
        """Delete an EBS snapshot."""
        return self._mutate(self.client.delete_snapshot, snapshot_id, SnapshotId=snapshot_id, DryRun=dry_run)

    def _mutate(self, method: Any, resource_id: str, **params: Any) -> DeleteOutcome:
        """Call a mutating EC2 method and classify the result.

        Args:
            method: Bound boto3 client method
            resource_id: Id of the image or snapshot being removed
            **params: Parameters for the call

        Returns:
            DeleteOutcome for the call
        """
        try:
            method(**params)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            error_message = e.response.get("Error", {}).get("Message", str(e))

            if error_code == DRY_RUN_ERROR_CODE:
                logger.debug(f"Dry run succeeded for {resource_id}")
                return DeleteOutcome.dry_run_ok(resource_id)

            logger.error(f"Failed to delete {resource_id}: {error_code} - {error_message}")
            return DeleteOutcome.failed(resource_id, error_code, error_message)
        except BotoCoreError as e:
            logger.error(f"Failed to delete {resource_id}: {e}")
            return DeleteOutcome.failed(resource_id, type(e).__name__, str(e))

        return DeleteOutcome.ok(resource_id)
