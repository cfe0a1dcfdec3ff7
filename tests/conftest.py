"""
Pytest configuration and fixtures for showcase catalog tests.

Every test gets a fresh in-memory SQLite catalog and a blob root under
pytest's tmp_path, so tests never touch a real document or blob store.
"""
import logging
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from showcase.clients import ShowcaseClients
from showcase.config import Settings
from showcase.main import create_app

logger = logging.getLogger(__name__)

TEST_CDN_HOST = "cdn.test.local"


# ============================================
# Test Fixtures
# ============================================

@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings backed by in-memory SQLite and a temporary blob root."""
    return Settings(
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        BLOB_ROOT=str(tmp_path / "blobs"),
        CDN_HOST=TEST_CDN_HOST,
        DEBUG=True,
    )


@pytest.fixture
async def clients(test_settings: Settings) -> AsyncGenerator[ShowcaseClients, None]:
    """Started clients with tables created; closed after the test."""
    clients = ShowcaseClients.from_settings(test_settings)
    await clients.start()
    yield clients
    await clients.close()


@pytest.fixture
async def test_client(
    test_settings: Settings,
    clients: ShowcaseClients,
) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client against an app wired to the test clients."""
    app = create_app(settings=test_settings, clients=clients)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# ============================================
# Pytest Configuration
# ============================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "fast: Fast unit tests (no I/O beyond tmp_path and in-memory SQLite)"
    )
    config.addinivalue_line(
        "markers", "integration: Tests exercising the HTTP API end to end"
    )
