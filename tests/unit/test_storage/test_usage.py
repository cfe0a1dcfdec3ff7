"""Tests for showcase.storage.usage module.

Covers:
    - per-folder counts and constant-size estimates
    - degraded folders on listing failure
    - default folders, duplicates, quota percentage
"""

from unittest.mock import AsyncMock

import pytest

from showcase.storage.config import MIB, StorageConfig
from showcase.storage.usage import UsageAggregator


def _backend_with(listings: dict):
    """Mock backend whose list() returns or raises per prefix."""

    async def _list(prefix):
        result = listings[prefix]
        if isinstance(result, Exception):
            raise result
        return result

    backend = AsyncMock()
    backend.list = AsyncMock(side_effect=_list)
    return backend


@pytest.fixture
def config():
    return StorageConfig()


class TestComputeUsage:
    """Tests for UsageAggregator.compute_usage()."""

    @pytest.mark.asyncio
    async def test_counts_and_estimates(self, config):
        backend = _backend_with({
            "videos/": ["videos/a", "videos/b", "videos/c"],
            "websites/": [],
        })
        report = await UsageAggregator(backend, config).compute_usage(["videos/", "websites/"])

        assert report.file_count == 3
        assert report.total_size == 3 * MIB
        assert report.folders["videos/"].count == 3
        assert report.folders["videos/"].size == 3 * MIB
        assert report.folders["websites/"].count == 0
        assert report.folders["websites/"].size == 0
        assert report.degraded_folders == []

    @pytest.mark.asyncio
    async def test_failed_folder_degrades_to_zero(self, config):
        backend = _backend_with({
            "videos/": ["videos/a", "videos/b", "videos/c"],
            "websites/": PermissionError("storage/unauthorized"),
        })
        report = await UsageAggregator(backend, config).compute_usage(["videos/", "websites/"])

        assert report.folders["websites/"].count == 0
        assert report.folders["websites/"].size == 0
        assert report.folders["videos/"].count == 3
        assert report.file_count == 3
        assert report.total_size == 3 * MIB
        assert report.degraded_folders == ["websites/"]

    @pytest.mark.asyncio
    async def test_failure_is_logged(self, config, caplog):
        backend = _backend_with({"videos/": RuntimeError("boom")})
        with caplog.at_level("ERROR", logger="showcase.storage.usage"):
            await UsageAggregator(backend, config).compute_usage(["videos/"])
        assert "videos/" in caplog.text
        assert "boom" in caplog.text

    @pytest.mark.asyncio
    async def test_all_folders_failing_still_returns(self, config):
        backend = _backend_with({"videos/": OSError("a"), "websites/": OSError("b")})
        report = await UsageAggregator(backend, config).compute_usage(["videos/", "websites/"])
        assert report.file_count == 0
        assert report.total_size == 0
        assert report.degraded_folders == ["videos/", "websites/"]

    @pytest.mark.asyncio
    async def test_default_folders_from_config(self, config):
        backend = _backend_with({"videos/": ["videos/a"], "websites/": ["websites/b"]})
        report = await UsageAggregator(backend, config).compute_usage()
        assert list(report.folders) == ["videos/", "websites/"]
        assert report.file_count == 2

    @pytest.mark.asyncio
    async def test_folder_order_follows_input(self, config):
        backend = _backend_with({"videos/": [], "websites/": []})
        report = await UsageAggregator(backend, config).compute_usage(["websites/", "videos/"])
        assert list(report.folders) == ["websites/", "videos/"]

    @pytest.mark.asyncio
    async def test_duplicate_folders_counted_once(self, config):
        backend = _backend_with({"videos/": ["videos/a", "videos/b"]})
        report = await UsageAggregator(backend, config).compute_usage(["videos/", "videos/"])
        assert report.file_count == 2
        assert backend.list.await_count == 1

    @pytest.mark.asyncio
    async def test_estimated_size_overridable(self, config):
        backend = _backend_with({"videos/": ["videos/a", "videos/b"]})
        aggregator = UsageAggregator(backend, config, estimated_object_size=10)
        report = await aggregator.compute_usage(["videos/"])
        assert report.total_size == 20

    @pytest.mark.asyncio
    async def test_estimated_size_from_config(self):
        backend = _backend_with({"videos/": ["videos/a"]})
        report = await UsageAggregator(backend, StorageConfig(estimated_object_size=7)).compute_usage(["videos/"])
        assert report.total_size == 7

    @pytest.mark.asyncio
    async def test_quota_percentage(self):
        backend = _backend_with({"videos/": ["videos/a"] * 4})
        config = StorageConfig(quota_bytes=8 * MIB)
        report = await UsageAggregator(backend, config).compute_usage(["videos/"])
        assert report.quota_bytes == 8 * MIB
        assert report.usage_percent == 50.0

    @pytest.mark.asyncio
    async def test_empty_folder_list(self, config):
        backend = _backend_with({})
        report = await UsageAggregator(backend, config).compute_usage([])
        assert report.file_count == 0
        assert report.folders == {}
