"""
Object storage for application documents (S3-compatible bucket via boto3).
"""
import io
import logging
import mimetypes
from functools import lru_cache

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from app.core import config
from app.core.errors import StorageError

logger = logging.getLogger(__name__)


class StorageService:
    """Uploads bytes to one bucket and returns the stored object path."""

    def __init__(self, bucket: str = None, client=None):
        self.bucket = bucket or config.STORAGE_BUCKET
        self.client = client or boto3.client(
            "s3",
            endpoint_url=config.STORAGE_ENDPOINT_URL or None,
            aws_access_key_id=config.STORAGE_ACCESS_KEY or None,
            aws_secret_access_key=config.STORAGE_SECRET_KEY or None,
            region_name=config.STORAGE_REGION,
            config=Config(
                signature_version="s3v4",
                connect_timeout=config.UPLOAD_TIMEOUT_SECONDS,
                read_timeout=config.UPLOAD_TIMEOUT_SECONDS,
                retries={"max_attempts": 1},
            ),
        )

    def upload(self, path: str, data: bytes, filename: str = None) -> str:
        """
        Store `data` at `path`.

        Returns:
            The stored path

        Raises:
            StorageError: On any failure (quota, permission, network)
        """
        content_type = mimetypes.guess_type(filename or path)[0] or "application/octet-stream"
        try:
            self.client.upload_fileobj(
                io.BytesIO(data),
                self.bucket,
                path,
                ExtraArgs={"ContentType": content_type},
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Upload failed: bucket={self.bucket}, path={path}, error={e}")
            raise StorageError(str(e)) from e

        logger.debug(f"Uploaded: bucket={self.bucket}, path={path}, bytes={len(data)}")
        return path


@lru_cache(maxsize=1)
def get_storage() -> StorageService:
    """Storage dependency; overridden in tests."""
    return StorageService()
