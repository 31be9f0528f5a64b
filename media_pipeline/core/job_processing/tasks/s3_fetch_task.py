"""
S3 source fetch task.

Reads the raw bytes of an uploaded object. boto3 is synchronous, so the
call runs in a worker thread to keep the event loop free for other jobs.

Dependencies: boto3
System role: First stage of the job processor (source content)
"""

import asyncio
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from media_pipeline.core.exceptions import FetchError, ObjectEmptyError, ObjectNotFoundError

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}


class S3FetchTask:
    """Fetch object content from S3."""

    def __init__(self, region: str = "us-east-1", s3_client=None) -> None:
        """
        Initialize S3 fetch task.

        Args:
            region: AWS region for the S3 client
            s3_client: Preconfigured boto3 S3 client (created if None)
        """
        self._region = region
        self._s3_client = s3_client or boto3.client("s3", region_name=region)

    async def fetch(self, bucket: str, key: str) -> bytes:
        """
        Download object content.

        Args:
            bucket: Source bucket
            key: Source object key

        Returns:
            bytes: Object body

        Raises:
            ObjectNotFoundError: Object does not exist
            ObjectEmptyError: Object has no content
            FetchError: Any other storage failure
        """
        if not bucket or not key:
            raise FetchError("Bucket and key are required", bucket, key)
        return await asyncio.to_thread(self._get_object_bytes, bucket, key)

    def _get_object_bytes(self, bucket: str, key: str) -> bytes:
        try:
            response = self._s3_client.get_object(Bucket=bucket, Key=key)
            body = response.get("Body")
            content = body.read() if body is not None else b""
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code in _NOT_FOUND_CODES:
                raise ObjectNotFoundError(
                    f"Object not found: {bucket}/{key}", bucket, key
                ) from e
            raise FetchError(f"Failed to read from S3: {e}", bucket, key) from e
        except BotoCoreError as e:
            raise FetchError(f"Unexpected error reading from S3: {e}", bucket, key) from e

        if not content:
            raise ObjectEmptyError(f"Empty object: {bucket}/{key}", bucket, key)

        logger.debug(
            "Fetched source object",
            extra={"bucket": bucket, "key": key, "size_bytes": len(content)},
        )
        return content
