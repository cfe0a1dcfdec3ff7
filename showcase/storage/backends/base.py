"""Abstract base class for blob store backends."""

from __future__ import annotations

from abc import ABC, abstractmethod


class BlobStore(ABC):
    """Narrow interface to the blob store.

    Only writes and key listings are needed. Object size and other
    metadata are deliberately not part of the interface.
    """

    @abstractmethod
    async def put(self, key: str, data: bytes, content_type: str | None = None) -> None:
        """Store a payload under a key, replacing any existing object.

        Args:
            key: Object key, e.g. "videos/{token}_{name}".
            data: Payload bytes.
            content_type: Optional MIME type recorded with the object.
        """

    @abstractmethod
    async def list(self, prefix: str) -> list[str]:
        """List every object key under a prefix.

        Args:
            prefix: Key prefix, e.g. "videos/".

        Returns:
            Object keys, sorted. Empty if nothing is stored under the prefix.
        """

    async def close(self) -> None:
        """Release client resources. No-op by default."""
