"""boto3 client factory."""

from __future__ import annotations

from typing import Any, Optional

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError

from ..errors import SessionCreationFailed
from .credentials import create_session

# Retries here cover throttling and transport errors only; deletions are never
# re-attempted by the cleaner itself.
DEFAULT_BOTO_CONFIG = BotoConfig(retries={"max_attempts": 5, "mode": "standard"})


def create_boto_client(
    service_name: str,
    region_name: Optional[str] = None,
    profile_name: Optional[str] = None,
    session: Optional[boto3.Session] = None,
) -> Any:
    """Create a boto3 client for a service.

    Args:
        service_name: AWS service name (e.g., "ec2")
        region_name: AWS region (optional)
        profile_name: AWS profile name, ignored when session is given (optional)
        session: Existing boto3 session to reuse (optional)

    Returns:
        boto3 client

    Raises:
        SessionCreationFailed: If a session or client cannot be created (e.g. no region configured)
    """
    if session is None:
        session = create_session(profile_name=profile_name, region_name=region_name)

    try:
        return session.client(service_name, region_name=region_name, config=DEFAULT_BOTO_CONFIG)
    except BotoCoreError as e:
        raise SessionCreationFailed(f"Unable to create {service_name} client: {e}") from e
