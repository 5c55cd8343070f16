"""
Database handle for the parcel tracker.

The engine and session factory are built from settings (SQLite via aiosqlite
unless DATABASE_URL says otherwise). Callers open a session here and hand it
to a ParcelStore; init_db is the bootstrap step that creates the parcel table
and applies the configured log level.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from parcel_tracker.app.core.config import settings
from parcel_tracker.app.core.observability import configure_logging

engine = create_async_engine(
    settings.database_url,
    echo=settings.db_echo,
    future=True,
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

Base = declarative_base()


async def get_db():
    """Yield a session for a ParcelStore and close it afterwards."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_db(bind: AsyncEngine = engine) -> None:
    """
    Bootstrap the tracker: set the log level and create the parcel table.

    Safe to call repeatedly; existing tables are left alone.
    """
    configure_logging(settings.log_level)

    # Register the parcel table on Base before create_all
    from parcel_tracker.app.models.parcel import Parcel  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
