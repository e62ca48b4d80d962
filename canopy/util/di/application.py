"""Application layer DI providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide

from canopy.application import CommentStore
from canopy.config import PersistenceSettings
from canopy.domain.repository import SnapshotStorage
from canopy.persistence.persister import SnapshotPersister
from canopy.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application provider - concrete, no mocks needed.

    The comment store is APP-scoped: one store per container, hydrated on
    first use and flushed when the container closes.
    """

    @provide(scope=Scope.APP)
    def get_snapshot_persister(
        self, storage: SnapshotStorage, persistence_settings: PersistenceSettings
    ) -> SnapshotPersister:
        """Provide the debounced snapshot persister."""
        return SnapshotPersister.from_settings(storage, persistence_settings)

    @provide(scope=Scope.APP)
    async def get_comment_store(
        self, persister: SnapshotPersister
    ) -> AsyncIterator[CommentStore]:
        """Provide the hydrated comment store, torn down on container close."""
        store = CommentStore(persister)
        await store.init()
        try:
            yield store
        finally:
            await store.teardown()
