"""Process-wide service clients, built once and injected into components.

Examples:
    >>> clients = ShowcaseClients.from_settings(get_settings())
    >>> await clients.start()
    >>> entry_id = (await clients.orchestrator.submit(form)).entry_id
    >>> await clients.close()
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from showcase.catalog import CatalogStore
from showcase.config import BlobBackendType, Settings
from showcase.database import check_db_connection, create_engine, create_session_factory, init_db
from showcase.ingestion import IngestionOrchestrator
from showcase.storage.backends import BlobStore, LocalBlobStore, MinioBlobStore
from showcase.storage.config import StorageConfig
from showcase.storage.uploader import VideoUploader
from showcase.storage.usage import UsageAggregator

logger = logging.getLogger(__name__)


def create_blob_store(settings: Settings) -> BlobStore:
    """Create the blob store selected by BLOB_BACKEND."""
    if settings.BLOB_BACKEND == BlobBackendType.MINIO:
        return MinioBlobStore.from_credentials(
            endpoint=settings.MINIO_ENDPOINT,
            access_key=settings.MINIO_ACCESS_KEY,
            secret_key=settings.MINIO_SECRET_KEY,
            bucket_name=settings.MINIO_BUCKET,
            secure=settings.MINIO_SECURE,
        )
    return LocalBlobStore(settings.BLOB_ROOT)


class ShowcaseClients:
    """Shared client handles and the components wired on top of them.

    Attributes:
        engine: Database engine.
        session_factory: Session factory for the catalog.
        blob_store: Blob store backend.
        storage_config: Storage configuration.
        catalog: Catalog store.
        uploader: Video uploader.
        usage: Usage aggregator.
        orchestrator: Ingestion orchestrator.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        session_factory: async_sessionmaker[AsyncSession],
        blob_store: BlobStore,
        storage_config: StorageConfig,
    ) -> None:
        self.engine = engine
        self.session_factory = session_factory
        self.blob_store = blob_store
        self.storage_config = storage_config

        self.catalog = CatalogStore(session_factory)
        self.uploader = VideoUploader(blob_store, storage_config)
        self.usage = UsageAggregator(blob_store, storage_config)
        self.orchestrator = IngestionOrchestrator(self.uploader, self.catalog)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ShowcaseClients":
        """Build every client from validated settings."""
        engine = create_engine(settings)
        return cls(
            engine=engine,
            session_factory=create_session_factory(engine),
            blob_store=create_blob_store(settings),
            storage_config=settings.storage_config(),
        )

    async def start(self) -> None:
        """Create tables. Call once at startup."""
        await init_db(self.engine)

    async def healthy(self) -> bool:
        return await check_db_connection(self.engine)

    async def close(self) -> None:
        """Dispose the engine and release blob store resources."""
        await self.blob_store.close()
        await self.engine.dispose()
        logger.info("Client connections closed")
