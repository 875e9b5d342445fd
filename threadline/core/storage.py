import logging
import os
import uuid
from pathlib import Path
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import UploadFile

from .config import settings

logger = logging.getLogger(__name__)

class MediaStorage:
    """Stores uploaded media in an S3-compatible bucket, or on local disk when no bucket is configured"""

    def __init__(self):
        self.client = None
        self.bucket = settings.S3_BUCKET_NAME
        self.public_url = settings.S3_PUBLIC_URL.rstrip("/")
        self.root = Path(settings.UPLOAD_DIRECTORY)
        self.media_path = f"{settings.API_PREFIX}/media/"

        if all([settings.S3_ENDPOINT, settings.S3_ACCESS_KEY_ID, settings.S3_SECRET_ACCESS_KEY]):
            try:
                self.client = boto3.client(
                    "s3",
                    endpoint_url=settings.S3_ENDPOINT,
                    aws_access_key_id=settings.S3_ACCESS_KEY_ID,
                    aws_secret_access_key=settings.S3_SECRET_ACCESS_KEY,
                )
                logger.info(f"Media storage using bucket '{self.bucket}' at {settings.S3_ENDPOINT}")
            except (BotoCoreError, ValueError) as e:
                logger.error(f"Failed to create S3 client: {e}")
                logger.warning("Falling back to local media storage")
        else:
            logger.info(f"Media storage using local directory '{self.root}'")

    def _url_for(self, key: str) -> str:
        if self.client and self.public_url:
            return f"{self.public_url}/{key}"
        return f"{self.media_path}{key}"

    def _key_for(self, url: str) -> Optional[str]:
        if self.public_url and url.startswith(f"{self.public_url}/"):
            return url[len(self.public_url) + 1:]
        if self.media_path in url:
            return url.split(self.media_path, 1)[1]
        return None

    def local_path(self, key: str) -> Optional[Path]:
        """Resolve a key to a file under the uploads directory, refusing paths that escape it"""
        root = self.root.resolve()
        path = (root / key).resolve()
        if root not in path.parents:
            return None
        return path

    async def upload_file(self, file: UploadFile, prefix: str = "profile_pictures") -> str:
        """Store an uploaded file under prefix and return the URL it is served from"""
        file_extension = os.path.splitext(file.filename or "")[1].lower()
        key = f"{prefix}/{uuid.uuid4().hex}{file_extension}"
        content = await file.read()
        await file.seek(0)

        if self.client:
            logger.info(f"Uploading '{file.filename}' to bucket '{self.bucket}' as '{key}'")
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=content,
                ContentType=file.content_type or "application/octet-stream",
            )
        else:
            path = self.root / key
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
            logger.info(f"Saved '{file.filename}' locally at {path}")

        return self._url_for(key)

    def delete_file(self, url: str) -> bool:
        """Delete a previously stored file by its URL; unknown URLs are left alone"""
        if not url:
            return False

        key = self._key_for(url)
        if key is None:
            logger.debug(f"URL {url} is not managed by media storage")
            return False

        if self.client:
            try:
                self.client.delete_object(Bucket=self.bucket, Key=key)
                return True
            except (BotoCoreError, ClientError) as e:
                logger.error(f"Failed to delete '{key}' from bucket: {e}")
                return False

        path = self.local_path(key)
        if path is None or not path.exists():
            return False
        path.unlink()
        logger.info(f"Deleted local media file {path}")
        return True

    def get_object(self, key: str):
        """Fetch an object from the bucket; returns the boto3 response"""
        return self.client.get_object(Bucket=self.bucket, Key=key)

# Global instance for app-wide usage
media_storage = MediaStorage()
