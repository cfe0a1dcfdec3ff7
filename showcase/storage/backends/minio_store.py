"""S3-compatible blob store backed by the MinIO SDK.

The SDK is synchronous, so each call runs in a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
from io import BytesIO

from minio import Minio

from showcase.storage.backends.base import BlobStore

logger = logging.getLogger(__name__)


class MinioBlobStore(BlobStore):
    """Blob store on a single MinIO/S3 bucket.

    Attributes:
        client: MinIO client, shared for the lifetime of the process.
        bucket_name: Bucket holding all objects.
    """

    def __init__(self, client: Minio, bucket_name: str) -> None:
        self.client = client
        self.bucket_name = bucket_name
        self._bucket_checked = False

    @classmethod
    def from_credentials(
        cls,
        endpoint: str,
        access_key: str,
        secret_key: str,
        bucket_name: str,
        secure: bool = True,
    ) -> "MinioBlobStore":
        """Create a store with its own MinIO client."""
        client = Minio(
            endpoint,
            access_key=access_key,
            secret_key=secret_key,
            secure=secure,
        )
        return cls(client=client, bucket_name=bucket_name)

    def _ensure_bucket(self) -> None:
        if self._bucket_checked:
            return
        if not self.client.bucket_exists(self.bucket_name):
            self.client.make_bucket(self.bucket_name)
            logger.info(f"Created bucket: {self.bucket_name}")
        self._bucket_checked = True

    def _put_sync(self, key: str, data: bytes, content_type: str) -> None:
        self._ensure_bucket()
        self.client.put_object(
            self.bucket_name,
            key,
            BytesIO(data),
            len(data),
            content_type=content_type,
        )

    def _list_sync(self, prefix: str) -> list[str]:
        objects = self.client.list_objects(self.bucket_name, prefix=prefix, recursive=True)
        return sorted(obj.object_name for obj in objects if not obj.is_dir)

    async def put(self, key: str, data: bytes, content_type: str | None = None) -> None:
        """Upload the payload to {bucket}/{key}."""
        await asyncio.to_thread(
            self._put_sync, key, data, content_type or "application/octet-stream"
        )

    async def list(self, prefix: str) -> list[str]:
        """List object keys under the prefix, recursively."""
        return await asyncio.to_thread(self._list_sync, prefix)
