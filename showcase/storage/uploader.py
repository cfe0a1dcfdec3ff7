"""Video uploader: names, stores, and publishes demo videos.

Examples:
    >>> uploader = VideoUploader(backend=LocalBlobStore("./output/blobs"), config=StorageConfig())
    >>> stored = await uploader.upload("My Video (1).mp4", data)
    >>> stored.storage_key
    'videos/3f0c...-..._My_Video__1_.mp4'
    >>> stored.public_url
    'https://cdn.gridrr.com/videos/3f0c...-..._My_Video__1_.mp4'
"""

from __future__ import annotations

import logging

from pydantic import BaseModel

from showcase.errors import IngestionFailure
from showcase.storage.backends.base import BlobStore
from showcase.storage.config import StorageConfig
from showcase.storage.naming import build_cdn_url, generate_video_key

logger = logging.getLogger(__name__)


class StoredVideo(BaseModel):
    """Where an uploaded video lives."""

    storage_key: str
    public_url: str


class VideoUploader:
    """Uploads videos under collision-free keys and derives their CDN URL.

    One write to the blob store per upload; no reads and no retries.

    Attributes:
        backend: Blob store receiving the payload.
        config: Storage configuration (CDN host).
    """

    def __init__(self, backend: BlobStore, config: StorageConfig) -> None:
        self.backend = backend
        self.config = config

    async def upload(
        self,
        filename: str,
        data: bytes,
        content_type: str | None = None,
        token: str | None = None,
    ) -> StoredVideo:
        """Store a video and return its key and public URL.

        Args:
            filename: Original file name.
            data: Video bytes.
            content_type: MIME type recorded with the blob.
            token: Override upload token (defaults to a fresh UUID4).

        Returns:
            StoredVideo with the blob key and CDN URL.

        Raises:
            IngestionFailure: If the blob store rejects the write.
        """
        storage_key, token, sanitized = generate_video_key(filename, token=token)
        logger.info(f"Uploading video: {filename!r} ({len(data)} bytes) -> {storage_key}")

        try:
            await self.backend.put(storage_key, data, content_type=content_type)
        except Exception as e:
            logger.error(f"Video upload failed for {storage_key}: {e}")
            raise IngestionFailure(f"Failed to upload video {filename!r}: {e}") from e

        public_url = build_cdn_url(token, sanitized, self.config.cdn_host)
        logger.info(f"Video uploaded: {public_url}")
        return StoredVideo(storage_key=storage_key, public_url=public_url)
