"""SQL implementation of snapshot storage."""

from typing import Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from canopy.domain.repository.storage import SnapshotStorage
from canopy.persistence.error import StorageError
from canopy.persistence.tables import snapshots_table
from canopy.util.time import now_ms


class SqlSnapshotStorage(SnapshotStorage):
    """SQLAlchemy implementation of SnapshotStorage.

    One row per slot in the ``snapshots`` table. Each call runs in its own
    short transaction.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize storage with a session factory.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self.session_factory = session_factory

    async def read(self, key: str) -> Optional[str]:
        """Read a slot's blob."""
        stmt = select(snapshots_table.c.data).where(snapshots_table.c.key == key)
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise StorageError("read", key, str(e)) from e

    async def write(self, key: str, data: str) -> None:
        """Upsert a slot's blob."""
        values = {"data": data, "updated_at": now_ms()}
        try:
            async with self.session_factory() as session, session.begin():
                result = await session.execute(
                    update(snapshots_table)
                    .where(snapshots_table.c.key == key)
                    .values(**values)
                )
                if result.rowcount == 0:
                    await session.execute(
                        insert(snapshots_table).values(key=key, **values)
                    )
        except SQLAlchemyError as e:
            raise StorageError("write", key, str(e)) from e

    async def remove(self, key: str) -> None:
        """Delete a slot's row."""
        try:
            async with self.session_factory() as session, session.begin():
                await session.execute(
                    delete(snapshots_table).where(snapshots_table.c.key == key)
                )
        except SQLAlchemyError as e:
            raise StorageError("remove", key, str(e)) from e
