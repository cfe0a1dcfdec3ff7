"""Unit tests for the catalog store.

Tests for showcase/catalog.py against an in-memory SQLite database.

Run with:
    pytest tests/unit/test_catalog.py -v
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from showcase.catalog import CatalogStore
from showcase.database import create_engine, create_session_factory
from showcase.errors import PersistenceFailure
from showcase.schemas import NewWebsiteEntry, SocialLinks

T0 = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _entry(name: str = "Acme", **overrides) -> NewWebsiteEntry:
    fields = {"name": name, "url": f"https://{name.lower()}.dev", "built_with": "Next.js"}
    fields.update(overrides)
    return NewWebsiteEntry(**fields)


class FixedClock:
    """Clock returning preset timestamps in order."""

    def __init__(self, *times: datetime) -> None:
        self.times = list(times)

    def __call__(self) -> datetime:
        return self.times.pop(0)


@pytest.fixture
def catalog(clients):
    return clients.catalog


@pytest.mark.fast
class TestCreate:
    """Tests for CatalogStore.create()."""

    @pytest.mark.asyncio
    async def test_returns_new_id(self, catalog):
        entry_id = await catalog.create(_entry())
        assert isinstance(entry_id, str)
        assert len(entry_id) == 36

    @pytest.mark.asyncio
    async def test_ids_are_unique(self, catalog):
        ids = {await catalog.create(_entry(f"Site{i}")) for i in range(5)}
        assert len(ids) == 5

    @pytest.mark.asyncio
    async def test_assigns_timestamp_from_clock(self, clients):
        catalog = CatalogStore(clients.session_factory, clock=FixedClock(T0))
        entry_id = await catalog.create(_entry())
        entry = await catalog.get(entry_id)
        assert entry.uploaded_at == T0

    @pytest.mark.asyncio
    async def test_default_timestamp_is_utc_now(self, catalog):
        before = datetime.now(timezone.utc)
        entry = await catalog.get(await catalog.create(_entry()))
        after = datetime.now(timezone.utc)
        assert before - timedelta(seconds=1) <= entry.uploaded_at <= after + timedelta(seconds=1)

    @pytest.mark.asyncio
    async def test_round_trips_all_fields(self, catalog):
        new = _entry(
            categories=["portfolio", "blog"],
            social_links=SocialLinks(twitter="https://twitter.com/alice"),
            other_technologies="Tailwind",
            video_url="https://cdn.test.local/videos/t_clip.mp4",
        )
        entry = await catalog.get(await catalog.create(new))
        assert entry.name == "Acme"
        assert entry.categories == ["portfolio", "blog"]
        assert entry.social_links.twitter == "https://twitter.com/alice"
        assert entry.social_links.instagram is None
        assert entry.other_technologies == "Tailwind"
        assert entry.video_url == "https://cdn.test.local/videos/t_clip.mp4"

    @pytest.mark.asyncio
    async def test_absent_optionals_stay_absent(self, catalog):
        entry = await catalog.get(await catalog.create(_entry()))
        dumped = entry.model_dump(by_alias=True, exclude_none=True)
        assert "videoUrl" not in dumped
        assert "otherTechnologies" not in dumped
        assert dumped["socialLinks"] == {}


@pytest.mark.fast
class TestList:
    """Tests for CatalogStore.list()."""

    @pytest.mark.asyncio
    async def test_empty(self, catalog):
        assert await catalog.list() == []

    @pytest.mark.asyncio
    async def test_most_recent_first(self, clients):
        t1, t2, t3 = T0, T0 + timedelta(minutes=1), T0 + timedelta(minutes=2)
        catalog = CatalogStore(clients.session_factory, clock=FixedClock(t1, t2, t3))
        for name in ("First", "Second", "Third"):
            await catalog.create(_entry(name))

        entries = await catalog.list()
        assert [e.uploaded_at for e in entries] == [t3, t2, t1]
        assert [e.name for e in entries] == ["Third", "Second", "First"]

    @pytest.mark.asyncio
    async def test_orders_by_timestamp_not_insertion(self, clients):
        t1, t2, t3 = T0, T0 + timedelta(minutes=1), T0 + timedelta(minutes=2)
        catalog = CatalogStore(clients.session_factory, clock=FixedClock(t2, t3, t1))
        for name in ("B", "C", "A"):
            await catalog.create(_entry(name))

        assert [e.name for e in await catalog.list()] == ["C", "B", "A"]

    @pytest.mark.asyncio
    async def test_ties_broken_by_insertion_order(self, clients):
        catalog = CatalogStore(clients.session_factory, clock=FixedClock(T0, T0, T0))
        for name in ("One", "Two", "Three"):
            await catalog.create(_entry(name))

        first = [e.name for e in await catalog.list()]
        second = [e.name for e in await catalog.list()]
        assert first == ["Three", "Two", "One"]
        assert first == second


@pytest.mark.fast
class TestDelete:
    """Tests for CatalogStore.delete()."""

    @pytest.mark.asyncio
    async def test_removes_entry(self, catalog):
        keep = await catalog.create(_entry("Keep"))
        gone = await catalog.create(_entry("Gone"))
        await catalog.delete(gone)

        assert [e.id for e in await catalog.list()] == [keep]
        assert await catalog.get(gone) is None

    @pytest.mark.asyncio
    async def test_unknown_id_is_noop(self, catalog):
        await catalog.create(_entry())
        before = await catalog.list()
        await catalog.delete("does-not-exist")
        assert await catalog.list() == before

    @pytest.mark.asyncio
    async def test_delete_twice(self, catalog):
        entry_id = await catalog.create(_entry())
        await catalog.delete(entry_id)
        await catalog.delete(entry_id)
        assert await catalog.list() == []


@pytest.mark.fast
class TestPersistenceFailure:
    """Store errors surface as PersistenceFailure."""

    @pytest.fixture
    async def broken_catalog(self, test_settings):
        # Fresh in-memory database with no tables
        engine = create_engine(test_settings)
        yield CatalogStore(create_session_factory(engine))
        await engine.dispose()

    @pytest.mark.asyncio
    async def test_create_failure(self, broken_catalog):
        with pytest.raises(PersistenceFailure, match="Failed to save website"):
            await broken_catalog.create(_entry())

    @pytest.mark.asyncio
    async def test_list_failure(self, broken_catalog):
        with pytest.raises(PersistenceFailure, match="Failed to fetch websites"):
            await broken_catalog.list()

    @pytest.mark.asyncio
    async def test_delete_failure(self, broken_catalog):
        with pytest.raises(PersistenceFailure, match="Failed to delete website"):
            await broken_catalog.delete("any")

    @pytest.mark.asyncio
    async def test_get_failure(self, broken_catalog):
        with pytest.raises(PersistenceFailure):
            await broken_catalog.get("any")


@pytest.mark.fast
class TestUnreachableStore:
    """Connection errors raised by the driver itself surface as PersistenceFailure."""

    @pytest.fixture
    def unreachable_catalog(self):
        refused = ConnectionRefusedError(111, "Connect call failed ('127.0.0.1', 1)")
        session = MagicMock()
        session.execute = AsyncMock(side_effect=refused)
        session.commit = AsyncMock(side_effect=refused)
        session.rollback = AsyncMock()
        session.close = AsyncMock()
        return CatalogStore(MagicMock(return_value=session))

    @pytest.mark.asyncio
    async def test_create_failure(self, unreachable_catalog):
        with pytest.raises(PersistenceFailure, match="Failed to save website") as exc_info:
            await unreachable_catalog.create(_entry())
        assert isinstance(exc_info.value.__cause__, ConnectionRefusedError)

    @pytest.mark.asyncio
    async def test_list_failure(self, unreachable_catalog):
        with pytest.raises(PersistenceFailure, match="Failed to fetch websites"):
            await unreachable_catalog.list()

    @pytest.mark.asyncio
    async def test_get_failure(self, unreachable_catalog):
        with pytest.raises(PersistenceFailure):
            await unreachable_catalog.get("any")

    @pytest.mark.asyncio
    async def test_delete_failure(self, unreachable_catalog):
        with pytest.raises(PersistenceFailure, match="Failed to delete website"):
            await unreachable_catalog.delete("any")
