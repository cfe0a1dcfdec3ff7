"""Storage usage aggregation.

Counts objects per folder and estimates their size with a fixed per-object
constant instead of fetching object metadata. A folder whose listing fails
counts as empty and is reported as degraded; it never fails the report.

Examples:
    >>> aggregator = UsageAggregator(backend, StorageConfig())
    >>> report = await aggregator.compute_usage(["videos/", "websites/"])
    >>> report.file_count, report.total_size
    (3, 3145728)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from showcase.schemas import FolderUsage, StorageUsageReport
from showcase.storage.backends.base import BlobStore
from showcase.storage.config import StorageConfig

logger = logging.getLogger(__name__)


class UsageAggregator:
    """Estimates blob store consumption across folders.

    Attributes:
        backend: Blob store to list.
        config: Storage configuration (default folders, quota).
        estimated_object_size: Bytes counted for each listed object.
    """

    def __init__(
        self,
        backend: BlobStore,
        config: StorageConfig,
        estimated_object_size: int | None = None,
    ) -> None:
        self.backend = backend
        self.config = config
        if estimated_object_size is None:
            estimated_object_size = config.estimated_object_size
        self.estimated_object_size = estimated_object_size

    async def _folder_usage(self, folder: str) -> tuple[FolderUsage, bool]:
        """Usage of one folder, and whether it had to be degraded."""
        try:
            keys = await self.backend.list(folder)
        except Exception as e:
            logger.error(f"Error listing files in {folder}: {e}")
            return FolderUsage(count=0, size=0), True

        count = len(keys)
        return FolderUsage(count=count, size=count * self.estimated_object_size), False

    async def compute_usage(
        self,
        folder_names: Sequence[str] | None = None,
    ) -> StorageUsageReport:
        """Compute a fresh usage report.

        Folders are listed concurrently. Each one contributes independently.

        Args:
            folder_names: Folders to walk. Defaults to the configured folders.

        Returns:
            StorageUsageReport with per-folder and total estimates.
        """
        if folder_names is None:
            folder_names = self.config.usage_folders
        folders = list(dict.fromkeys(folder_names))

        results = await asyncio.gather(*(self._folder_usage(f) for f in folders))

        report = StorageUsageReport(quota_bytes=self.config.quota_bytes)
        for folder, (usage, degraded) in zip(folders, results):
            report.folders[folder] = usage
            report.file_count += usage.count
            report.total_size += usage.size
            if degraded:
                report.degraded_folders.append(folder)

        logger.info(
            f"Storage usage calculated: {report.file_count} files, "
            f"{report.total_size} bytes, degraded={report.degraded_folders}"
        )
        return report
