"""Storage usage endpoint.

Endpoints:
    GET /api/v1/storage/usage - Estimated blob storage usage per folder
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from showcase.api.dependencies import get_usage_aggregator
from showcase.schemas import StorageUsageReport
from showcase.storage.usage import UsageAggregator

router = APIRouter(prefix="/storage", tags=["storage"])


@router.get("/usage", response_model=StorageUsageReport)
async def storage_usage(
    folder: list[str] | None = Query(None, description="Folders to include (default: configured folders)"),
    aggregator: UsageAggregator = Depends(get_usage_aggregator),
) -> StorageUsageReport:
    """Compute a fresh usage report.

    Folders whose listing fails count as empty and are named in
    ``degradedFolders``; the request itself still succeeds.
    """
    return await aggregator.compute_usage(folder)
