"""Storage configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field

MIB = 1024 * 1024
GIB = 1024 * MIB

VIDEO_PREFIX = "videos/"
DEFAULT_CDN_HOST = "cdn.gridrr.com"
DEFAULT_USAGE_FOLDERS = ("videos/", "websites/")

# Stored objects are not inspected for their real size; each one counts as this.
ESTIMATED_OBJECT_SIZE = MIB
STORAGE_QUOTA_BYTES = 5 * GIB
MAX_VIDEO_BYTES = 100 * MIB


class StorageConfig(BaseModel):
    """Configuration for blob storage.

    Attributes:
        root: Root directory for the local blob backend.
        cdn_host: Host that serves uploaded blobs publicly.
        quota_bytes: Provider quota the usage report is measured against.
        estimated_object_size: Size assumed for every listed object.
        usage_folders: Folders walked by the usage report.
        max_video_bytes: Largest accepted demo video.
    """

    root: str = Field(default="./output/blobs", description="Blob storage root directory")
    cdn_host: str = Field(default=DEFAULT_CDN_HOST, description="Public CDN host")
    quota_bytes: int = Field(default=STORAGE_QUOTA_BYTES, gt=0)
    estimated_object_size: int = Field(default=ESTIMATED_OBJECT_SIZE, ge=0)
    usage_folders: list[str] = Field(default_factory=lambda: list(DEFAULT_USAGE_FOLDERS))
    max_video_bytes: int = Field(default=MAX_VIDEO_BYTES, gt=0)
