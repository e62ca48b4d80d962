"""Engine, sessions and schema for the SQL snapshot backend.

SQLite through aiosqlite is the default target. Any SQLAlchemy async URL
works; server databases get a sized connection pool.
"""

from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from canopy.config import Settings
from canopy.persistence.tables import metadata


def engine_options(url: str, debug: bool = False) -> dict[str, Any]:
    """Keyword arguments for ``create_async_engine`` suited to a URL.

    Args:
        url: SQLAlchemy async URL
        debug: Echo SQL statements

    Returns:
        Engine options
    """
    options: dict[str, Any] = {"echo": debug, "pool_pre_ping": True}
    if make_url(url).get_backend_name() != "sqlite":
        # SQLite pools take no sizing options
        options.update(pool_size=5, max_overflow=10)
    return options


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for ``settings.persistence.database_url``."""
    url = settings.persistence.database_url
    return create_async_engine(url, **engine_options(url, settings.debug))


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory used by ``SqlSnapshotStorage``.

    Args:
        engine: Database engine

    Returns:
        Session factory
    """
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_schema(engine: AsyncEngine) -> None:
    """Create the snapshot table if it does not exist yet.

    Args:
        engine: Database engine
    """
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
