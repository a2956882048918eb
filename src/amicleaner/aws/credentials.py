"""AWS session creation and credential validation."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError, ProfileNotFound

from ..errors import SessionCreationFailed

logger = logging.getLogger(__name__)

# Kept for callers that think in terms of credential validation.
CredentialValidationError = SessionCreationFailed


def create_session(profile_name: Optional[str] = None, region_name: Optional[str] = None) -> boto3.Session:
    """Create a boto3 session.

    Args:
        profile_name: AWS profile name (optional, default credential chain otherwise)
        region_name: AWS region (optional)

    Returns:
        Configured boto3 session

    Raises:
        SessionCreationFailed: If the profile does not exist or botocore cannot build a session
    """
    try:
        session = boto3.Session(profile_name=profile_name, region_name=region_name)
    except ProfileNotFound as e:
        raise SessionCreationFailed(f"AWS profile '{profile_name}' not found") from e
    except BotoCoreError as e:
        raise SessionCreationFailed(f"Unable to create AWS session: {e}") from e

    if profile_name:
        logger.debug(f"Using AWS profile: {profile_name}")
    return session


def validate_credentials(
    profile_name: Optional[str] = None,
    region_name: Optional[str] = None,
    session: Optional[boto3.Session] = None,
) -> Dict[str, Any]:
    """Validate credentials by calling STS GetCallerIdentity.

    Returns:
        Dict with account_id, arn and user_id of the caller

    Raises:
        SessionCreationFailed: If credentials are missing or rejected
    """
    if session is None:
        session = create_session(profile_name=profile_name, region_name=region_name)

    try:
        identity = session.client("sts").get_caller_identity()
    except NoCredentialsError as e:
        raise SessionCreationFailed("No AWS credentials found. Configure credentials or pass --profile.") from e
    except ClientError as e:
        error_code = e.response.get("Error", {}).get("Code", "Unknown")
        raise SessionCreationFailed(f"AWS rejected credentials: {error_code}") from e
    except BotoCoreError as e:
        raise SessionCreationFailed(f"Unable to validate AWS credentials: {e}") from e

    logger.info(f"Connected as: {identity['Arn']} (Account: {identity['Account']})")
    return {
        "account_id": identity["Account"],
        "arn": identity["Arn"],
        "user_id": identity.get("UserId"),
    }
