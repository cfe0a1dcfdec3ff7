"""Blob store backends."""

from showcase.storage.backends.base import BlobStore
from showcase.storage.backends.local import LocalBlobStore
from showcase.storage.backends.minio_store import MinioBlobStore

__all__ = ["BlobStore", "LocalBlobStore", "MinioBlobStore"]
