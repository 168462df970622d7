"""
S3 client for narration script uploads.

Writes scripts straight to the uploads bucket with short-lived identity
pool credentials. The object key carries the job metadata, and the
write itself is what makes the backend create the job.

Dependencies: boto3
System role: Storage boundary for script uploads
"""

import asyncio
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from voicecraft.core.exceptions import UploadError
from voicecraft.models.identity import StorageCredentials

logger = logging.getLogger(__name__)


class S3UploadClient:
    """S3 client for the uploads bucket (writes only)."""

    def __init__(self, bucket: str, region: str = "eu-west-2") -> None:
        """
        Initialize S3 client for the uploads bucket.

        Args:
            bucket: S3 bucket name receiving scripts
            region: AWS region for S3 bucket
        """
        self._bucket = bucket
        self._region = region

    @property
    def bucket(self) -> str:
        return self._bucket

    def _client_for(self, credentials: StorageCredentials):
        return boto3.client(
            "s3",
            region_name=self._region,
            aws_access_key_id=credentials.access_key_id,
            aws_secret_access_key=credentials.secret_key,
            aws_session_token=credentials.session_token,
        )

    async def upload_text(
        self,
        key: str,
        body: bytes,
        credentials: StorageCredentials,
        content_type: str = "text/plain",
    ) -> None:
        """
        Upload script bytes to the bucket.

        Args:
            key: Object key ({user}/{job}/{voice}/{category}/{audio}/{filename})
            body: File content
            credentials: Identity pool credentials
            content_type: MIME type stored with the object

        Raises:
            UploadError: S3 rejected the write or the request failed
        """
        client = self._client_for(credentials)
        try:
            # Upload to S3 (wrap sync call in thread executor)
            await asyncio.to_thread(
                client.put_object,
                Bucket=self._bucket,
                Key=key,
                Body=body,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(
                f"{__name__}:upload_text - {type(e).__name__}: {e}",
                extra={"bucket": self._bucket, "key": key},
            )
            raise UploadError(
                "There was an issue uploading your file.",
                details={"key": key, "error": str(e)},
            ) from e

        logger.info(
            f"{__name__}:upload_text - Uploaded key={key}, size={len(body)} bytes",
        )
