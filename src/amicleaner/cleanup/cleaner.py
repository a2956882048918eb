"""AMI cleaner.

Main orchestrator for unused AMI cleanup with dry-run support. The pipeline is:
list owned images, list instances launched from them, keep the images no
instance references, then deregister those images and delete their snapshots.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from botocore.exceptions import BotoCoreError, ClientError

from amicleaner.aws.ec2 import Ec2Backend
from amicleaner.errors import FilterFailed, ImageQueryFailed, InstanceQueryFailed
from amicleaner.models.deletion_result import DeletionResult
from amicleaner.models.image import Image, Instance

logger = logging.getLogger(__name__)

MAX_INSTANCE_PAGES = 20

ImageFilter = Callable[[Sequence[Image], Sequence[Instance]], List[Image]]


def filter_unused_images(images: Sequence[Image], instances: Sequence[Instance]) -> List[Image]:
    """Return the images no instance was launched from, in input order."""
    in_use = {instance.image_id for instance in instances}
    return [image for image in images if image.image_id not in in_use]


class AmiCleaner:
    """Unused AMI cleaner.

    Attributes:
        backend: EC2 backend used for every API call
        dry_run: Check deletions without performing them
        max_instance_pages: Upper bound on DescribeInstances pages consumed
        image_filter: Callable selecting the images to delete
    """

    OWNERS = ("self",)

    def __init__(
        self,
        backend: Ec2Backend,
        dry_run: bool = False,
        max_instance_pages: int = MAX_INSTANCE_PAGES,
        image_filter: Optional[ImageFilter] = None,
    ) -> None:
        """Initialize AMI cleaner.

        Args:
            backend: EC2 backend
            dry_run: If True, deletions are only checked (default: False)
            max_instance_pages: Page cap for instance listing (default: 20)
            image_filter: Replacement for filter_unused_images (optional)

        Raises:
            ValueError: If max_instance_pages is less than 1
        """
        if max_instance_pages < 1:
            raise ValueError("max_instance_pages must be at least 1")

        self.backend = backend
        self.dry_run = dry_run
        self.max_instance_pages = max_instance_pages
        self.image_filter = image_filter or filter_unused_images

    def list_images(self) -> List[Image]:
        """List all images owned by the account.

        Raises:
            ImageQueryFailed: If EC2 cannot describe images
        """
        try:
            images = self.backend.describe_images(owners=list(self.OWNERS))
        except (ClientError, BotoCoreError) as e:
            raise ImageQueryFailed(f"Failed to describe images: {e}") from e

        logger.info(f"Found {len(images)} owned images")
        return images

    def list_instances(self, images: Sequence[Image]) -> List[Instance]:
        """List instances launched from any of the given images.

        Stops after max_instance_pages pages or on the last page, whichever
        comes first.

        Raises:
            InstanceQueryFailed: If EC2 cannot describe instances
        """
        if not images:
            return []

        image_ids = [image.image_id for image in images]
        instances: List[Instance] = []
        next_token: Optional[str] = None

        for page_num in range(1, self.max_instance_pages + 1):
            try:
                page, next_token = self.backend.describe_instances(image_ids, next_token=next_token)
            except (ClientError, BotoCoreError) as e:
                raise InstanceQueryFailed(f"Failed to describe instances: {e}") from e

            instances.extend(page)
            if not next_token:
                break
        else:
            logger.warning(
                f"Stopped listing instances after {page_num} pages; "
                f"images used only by unlisted instances may be reported as unused"
            )

        logger.info(f"Found {len(instances)} instances using owned images")
        return instances

    def filter_images(self, images: Sequence[Image], instances: Sequence[Instance]) -> List[Image]:
        """Return the images not referenced by any instance.

        Raises:
            FilterFailed: If the configured image filter raises
        """
        try:
            unused = self.image_filter(images, instances)
        except Exception as e:
            raise FilterFailed(f"Failed to filter images: {e}") from e

        logger.info(f"{len(unused)} of {len(images)} images are unused")
        return unused

    def find_unused_amis(self) -> List[Image]:
        """List owned images that no instance was launched from."""
        images = self.list_images()
        instances = self.list_instances(images)
        return self.filter_images(images, instances)

    def delete_images(self, images: Sequence[Image]) -> DeletionResult:
        """Deregister images and delete their snapshots.

        Every image and snapshot is attempted exactly once. A failed
        deregistration does not prevent the image's snapshots from being
        deleted.

        Args:
            images: Images to remove

        Returns:
            DeletionResult with deleted ids and failures
        """
        result = DeletionResult(dry_run=self.dry_run)
        action = "Probing" if self.dry_run else "Deleting"

        for image in images:
            logger.info(f"{action} image {image.image_id}")
            result.record(self.backend.deregister_image(image.image_id, dry_run=self.dry_run))

            for snapshot_id in image.snapshot_ids:
                logger.info(f"{action} snapshot {snapshot_id} of {image.image_id}")
                result.record(self.backend.delete_snapshot(snapshot_id, dry_run=self.dry_run))

        if result.failures:
            logger.warning(f"Failed to delete {len(result.failures)} of {result.total_processed} resources")
        return result

    def delete_unused_amis(self) -> List[str]:
        """Find and delete all AMIs, and their snapshots, not used by any instance.

        Returns:
            Ids of images and snapshots deleted (or checked in dry-run mode)

        Raises:
            ImageQueryFailed: If images cannot be listed
            InstanceQueryFailed: If instances cannot be listed
            FilterFailed: If the image filter fails
            BatchDeletionFailed: If any deletion failed; carries the partial deleted list
        """
        unused = self.find_unused_amis()
        result = self.delete_images(unused)
        result.raise_for_failures()
        return result.deleted
