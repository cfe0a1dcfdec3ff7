"""Catalog store for website entries.

Create, list, and delete over the ``websites`` table. There is no update:
entries are immutable once created. The store assigns ``id`` and
``uploaded_at``; callers never supply them.

Examples:
    >>> catalog = CatalogStore(session_factory)
    >>> entry_id = await catalog.create(NewWebsiteEntry(name="Acme", url="https://acme.dev"))
    >>> [e.name for e in await catalog.list()]
    ['Acme']
    >>> await catalog.delete(entry_id)

Tests:
    - tests/unit/test_catalog.py
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from showcase.database import session_scope
from showcase.errors import PersistenceFailure
from showcase.models import WebsiteRecord
from showcase.schemas import NewWebsiteEntry, WebsiteEntry

logger = logging.getLogger(__name__)

# Drivers such as asyncpg raise a bare OSError when the server refuses the
# connection; SQLAlchemy does not wrap it.
STORE_ERRORS = (SQLAlchemyError, OSError)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CatalogStore:
    """Website entry persistence.

    Attributes:
        session_factory: Factory for database sessions.
        clock: Source of creation timestamps (server clock).
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.session_factory = session_factory
        self.clock = clock

    async def create(self, entry: NewWebsiteEntry) -> str:
        """Persist a new entry.

        Args:
            entry: Entry without id or timestamp.

        Returns:
            The new entry's id.

        Raises:
            PersistenceFailure: If the store is unreachable or rejects the write.
        """
        entry_id = str(uuid.uuid4())
        record = WebsiteRecord(
            id=entry_id,
            name=entry.name,
            url=entry.url,
            categories=list(entry.categories),
            social_links=entry.social_links.model_dump(exclude_none=True),
            built_with=entry.built_with,
            other_technologies=entry.other_technologies,
            video_url=entry.video_url,
            uploaded_at=self.clock(),
        )

        try:
            async with session_scope(self.session_factory) as session:
                session.add(record)
        except STORE_ERRORS as e:
            logger.error(f"Error saving website {entry.name!r}: {e}")
            raise PersistenceFailure(f"Failed to save website: {e}") from e

        logger.info(f"Website saved with ID: {entry_id}")
        return entry_id

    async def list(self) -> list[WebsiteEntry]:
        """All entries, most recent first.

        Entries with equal timestamps come back most recently inserted first.

        Raises:
            PersistenceFailure: On read error.
        """
        query = select(WebsiteRecord).order_by(
            WebsiteRecord.uploaded_at.desc(),
            WebsiteRecord.seq.desc(),
        )

        try:
            async with session_scope(self.session_factory) as session:
                result = await session.execute(query)
                records = result.scalars().all()
        except STORE_ERRORS as e:
            logger.error(f"Error fetching websites: {e}")
            raise PersistenceFailure(f"Failed to fetch websites: {e}") from e

        logger.info(f"Retrieved {len(records)} websites")
        return [record.to_entry() for record in records]

    async def get(self, entry_id: str) -> WebsiteEntry | None:
        """One entry by id, or None if it does not exist."""
        try:
            async with session_scope(self.session_factory) as session:
                result = await session.execute(
                    select(WebsiteRecord).where(WebsiteRecord.id == entry_id)
                )
                record = result.scalar_one_or_none()
        except STORE_ERRORS as e:
            raise PersistenceFailure(f"Failed to fetch website {entry_id}: {e}") from e

        return record.to_entry() if record else None

    async def delete(self, entry_id: str) -> None:
        """Delete an entry by id. Unknown ids are a no-op.

        Raises:
            PersistenceFailure: On transport or permission error.
        """
        try:
            async with session_scope(self.session_factory) as session:
                result = await session.execute(
                    delete(WebsiteRecord).where(WebsiteRecord.id == entry_id)
                )
        except STORE_ERRORS as e:
            logger.error(f"Error deleting website {entry_id}: {e}")
            raise PersistenceFailure(f"Failed to delete website: {e}") from e

        if result.rowcount:
            logger.info(f"Website deleted: {entry_id}")
        else:
            logger.info(f"Website not found, nothing to delete: {entry_id}")
