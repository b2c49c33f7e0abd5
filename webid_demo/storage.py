"""
S3 listing with federated credentials. First page only (list_objects, no marker handling).
"""
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from webid_demo.errors import StorageError
from webid_demo.federation import AwsConfig

logger = logging.getLogger(__name__)


def s3_client_for(aws_config: AwsConfig):
    return boto3.client(
        "s3",
        aws_access_key_id=aws_config.access_key_id,
        aws_secret_access_key=aws_config.secret_access_key,
        aws_session_token=aws_config.session_token,
        region_name=aws_config.region,
    )


def list_object_keys(aws_config: AwsConfig, bucket: str) -> list[str]:
    """Keys in provider order. Empty bucket (no Contents) yields []."""
    s3 = s3_client_for(aws_config)
    try:
        result = s3.list_objects(Bucket=bucket)
    except ClientError as e:
        message = e.response.get("Error", {}).get("Message") or str(e)
        raise StorageError(message) from e
    except BotoCoreError as e:
        raise StorageError(str(e)) from e
    keys = [entry["Key"] for entry in result.get("Contents", [])]
    if result.get("IsTruncated"):
        logger.info("Bucket %s has more than one page; returning first %d keys", bucket, len(keys))
    return keys
