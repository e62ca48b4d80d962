"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire

from canopy.config import Settings
from canopy.domain.repository import SnapshotStorage
from canopy.persistence.database import (
    create_engine,
    create_schema,
    create_session_factory,
)
from canopy.persistence.repository import (
    FileSnapshotStorage,
    InMemorySnapshotStorage,
    SqlSnapshotStorage,
)
from canopy.util.di.base import ProviderBase
from canopy.util.error import ConfigurationError
from canopy.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider.

    Picks the storage medium from ``settings.persistence.backend``.
    """

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_snapshot_storage(
        self, settings: Settings
    ) -> AsyncIterator[SnapshotStorage]:
        """Provide snapshot storage.

        The database backend creates its schema on startup and disposes of the
        engine when the container closes.
        """
        backend = settings.persistence.backend
        logfire.info("Opening snapshot storage", backend=backend)

        if backend == "memory":
            yield InMemorySnapshotStorage()
        elif backend == "file":
            yield FileSnapshotStorage(settings.persistence.directory)
        elif backend == "database":
            engine = create_engine(settings)
            # Instrument SQLAlchemy for observability
            instrument_sqlalchemy(engine)
            await create_schema(engine)
            try:
                yield SqlSnapshotStorage(create_session_factory(engine))
            finally:
                await engine.dispose()
        else:
            raise ConfigurationError("persistence.backend", backend)
