"""Blob storage package for the showcase catalog.

Provides collision-free video naming, CDN URL derivation, uploads, and
estimated usage accounting on top of a pluggable blob store.

Examples:
    >>> from showcase.storage import LocalBlobStore, StorageConfig, VideoUploader
    >>> uploader = VideoUploader(backend=LocalBlobStore("./output/blobs"), config=StorageConfig())
    >>> stored = await uploader.upload("demo.mp4", data)
"""

from showcase.storage.backends import BlobStore, LocalBlobStore, MinioBlobStore
from showcase.storage.config import StorageConfig
from showcase.storage.naming import build_cdn_url, generate_video_key, sanitize_filename
from showcase.storage.uploader import StoredVideo, VideoUploader
from showcase.storage.usage import UsageAggregator

__all__ = [
    "BlobStore",
    "LocalBlobStore",
    "MinioBlobStore",
    "StorageConfig",
    "StoredVideo",
    "UsageAggregator",
    "VideoUploader",
    "build_cdn_url",
    "generate_video_key",
    "sanitize_filename",
]
