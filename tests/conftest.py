from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from printfinder.api.dependencies import get_catalog_lookup, get_lookup_cache
from printfinder.db.database import get_session
from printfinder.db.operations import upsert_printings
from printfinder.main import app
from printfinder.models.db import Base
from printfinder.models.printing import PrintingRecord
from printfinder.services.card_catalog import CatalogLookup
from printfinder.services.lookup_cache import LookupCache


@pytest.fixture
def catalog_printings() -> list[PrintingRecord]:
    """A small catalog covering dated, undated, foil and etched printings."""
    return [
        PrintingRecord(
            name="Island",
            set_code="lea",
            set_name="Limited Edition Alpha",
            collector_number="288",
            released_at=date(1993, 8, 5),
            finishes=frozenset({"nonfoil"}),
            scryfall_id="island-lea",
        ),
        PrintingRecord(
            name="Island",
            set_code="m12",
            set_name="Magic 2012",
            collector_number="234",
            released_at=date(2011, 7, 15),
            finishes=frozenset({"nonfoil", "foil"}),
            scryfall_id="island-m12-234",
        ),
        PrintingRecord(
            name="Island",
            set_code="m12",
            set_name="Magic 2012",
            collector_number="235",
            released_at=date(2011, 7, 15),
            finishes=frozenset({"nonfoil", "foil"}),
            scryfall_id="island-m12-235",
        ),
        PrintingRecord(
            name="Island",
            set_code="pfut",
            set_name="Future Promos",
            collector_number="1",
            released_at=None,
            finishes=frozenset({"nonfoil"}),
            scryfall_id="island-undated",
        ),
        PrintingRecord(
            name="Lightning Bolt",
            set_code="lea",
            set_name="Limited Edition Alpha",
            collector_number="161",
            released_at=date(1993, 8, 5),
            finishes=frozenset({"nonfoil"}),
            scryfall_id="bolt-lea",
        ),
        PrintingRecord(
            name="Lightning Bolt",
            set_code="m11",
            set_name="Magic 2011",
            collector_number="149",
            released_at=date(2010, 7, 16),
            finishes=frozenset({"nonfoil", "foil"}),
            scryfall_id="bolt-m11",
        ),
        PrintingRecord(
            name="Aetherflux Reservoir",
            set_code="kld",
            set_name="Kaladesh",
            collector_number="192",
            released_at=date(2016, 9, 30),
            finishes=frozenset({"nonfoil", "foil"}),
            scryfall_id="aetherflux-kld",
        ),
        PrintingRecord(
            name="Sol Ring",
            set_code="cmr",
            set_name="Commander Legends",
            collector_number="472",
            released_at=date(2020, 11, 20),
            finishes=frozenset({"etched"}),
            scryfall_id="sol-ring-cmr-etched",
        ),
        PrintingRecord(
            name="Birgi, God of Storytelling // Harnfel, Horn of Bounty",
            set_code="khm",
            set_name="Kaldheim",
            collector_number="123",
            released_at=date(2021, 2, 5),
            finishes=frozenset({"nonfoil", "foil"}),
            scryfall_id="birgi-khm",
        ),
    ]


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the in-memory engine."""
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory) -> AsyncSession:
    """Provide a database session for tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def seeded_session_factory(
    session_factory, catalog_printings
) -> async_sessionmaker[AsyncSession]:
    """Session factory whose database already holds `catalog_printings`."""
    async with session_factory() as session:
        await upsert_printings(session, catalog_printings)
        await session.commit()
    return session_factory


@pytest.fixture
def lookup_cache() -> LookupCache:
    """Fresh cache per test, in place of the application's shared one."""
    return LookupCache()


@pytest.fixture
async def client(seeded_session_factory, lookup_cache):
    """Provide an async test client wired to the seeded in-memory catalog."""

    async def override_get_session():
        async with seeded_session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_catalog_lookup] = lambda: CatalogLookup(seeded_session_factory)
    app.dependency_overrides[get_lookup_cache] = lambda: lookup_cache

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
