"""
Web identity federation: trade the session's Google id_token for temporary AWS credentials
(STS AssumeRoleWithWebIdentity). Credentials are cached in the session and never refreshed.
"""
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from webid_demo.config import (
    AWS_REGION,
    AWS_ROLE_ARN,
    AWS_ROLE_DURATION_SECONDS,
    AWS_ROLE_SESSION_NAME,
)
from webid_demo.errors import FederationError

if TYPE_CHECKING:
    from webid_demo.session_store import Session

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AwsConfig:
    access_key_id: str
    secret_access_key: str
    session_token: str
    region: str


def assume_role_with_web_identity(id_token: str, region: str = AWS_REGION) -> AwsConfig:
    """One STS call; no retry. Raises FederationError on any STS or transport failure."""
    sts = boto3.client("sts", region_name=region)
    try:
        response = sts.assume_role_with_web_identity(
            RoleArn=AWS_ROLE_ARN,
            RoleSessionName=AWS_ROLE_SESSION_NAME,
            WebIdentityToken=id_token,
            DurationSeconds=AWS_ROLE_DURATION_SECONDS,
        )
    except ClientError as e:
        message = e.response.get("Error", {}).get("Message") or str(e)
        raise FederationError(message) from e
    except BotoCoreError as e:
        raise FederationError(str(e)) from e

    creds = response["Credentials"]
    logger.info("Got AWS credentials for role %s (expires: %s)", AWS_ROLE_ARN, creds.get("Expiration"))
    return AwsConfig(
        access_key_id=creds["AccessKeyId"],
        secret_access_key=creds["SecretAccessKey"],
        session_token=creds["SessionToken"],
        region=region,
    )


def get_aws_config(session: "Session") -> AwsConfig:
    """
    Cached credentials from the session, or federate and cache new ones.
    No freshness check against the STS expiration; no single-flight across concurrent requests.
    """
    if session.aws_config is not None:
        return session.aws_config
    if not session.google_id_token:
        raise FederationError("No ID token in session")
    session.aws_config = assume_role_with_web_identity(session.google_id_token)
    return session.aws_config
