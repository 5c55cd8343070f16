"""
Centralized Test Configuration.
"""

import random

import pytest
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from parcel_tracker.app.db.session import Base, init_db
from parcel_tracker.app.schemas.parcel import ParcelCreate, utc_timestamp
from parcel_tracker.app.services.parcel_store import ParcelStore

# Setup In-Memory Test Database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="session")
def rng():
    """Per-run random source for client ids (never the global random state)."""
    return random.Random()


@pytest.fixture
async def engine():
    """Fresh in-memory database per test, schema created up front."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(test_engine)

    yield test_engine

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine):
    TestingSessionLocal = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )
    async with TestingSessionLocal() as session:
        yield session


@pytest.fixture
def store(db_session):
    return ParcelStore(db_session)


def make_parcel(client: int = 1000) -> ParcelCreate:
    """The standard test parcel."""
    return ParcelCreate(
        client=client,
        status="registered",
        address="test",
        created_at=utc_timestamp(),
    )


@pytest.fixture
def parcel():
    return make_parcel()


@pytest.fixture
def parcel_factory():
    return make_parcel
