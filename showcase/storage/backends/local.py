"""Local filesystem blob store using pathlib."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from showcase.storage.backends.base import BlobStore


class LocalBlobStore(BlobStore):
    """Pathlib-based blob store rooted at a directory.

    Keys map to relative POSIX paths below the root.
    """

    def __init__(self, root: str) -> None:
        self.root = Path(root)

    def _resolve(self, key: str) -> Path:
        rel = PurePosixPath(key)
        if rel.is_absolute() or ".." in rel.parts or not rel.parts:
            raise ValueError(f"Invalid blob key: {key!r}")
        return self.root.joinpath(*rel.parts)

    async def put(self, key: str, data: bytes, content_type: str | None = None) -> None:
        """Write the payload to {root}/{key}."""
        p = self._resolve(key)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(data)

    async def list(self, prefix: str) -> list[str]:
        """List files whose root-relative path starts with the prefix."""
        # Only walk the deepest directory the prefix names
        head, _, _ = prefix.rpartition("/")
        base = self._resolve(head) if head else self.root
        if not base.is_dir():
            return []
        keys = [
            p.relative_to(self.root).as_posix()
            for p in base.rglob("*")
            if p.is_file()
        ]
        return sorted(k for k in keys if k.startswith(prefix))
