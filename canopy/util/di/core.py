"""Settings providers."""

from dishka import Scope, provide

from canopy.config import PersistenceSettings, Settings
from canopy.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Reads settings once per container from the environment and ``.env``."""

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        return Settings()

    @provide(scope=Scope.APP)
    def provide_persistence_settings(self, settings: Settings) -> PersistenceSettings:
        """Persistence section on its own, for consumers that need nothing else."""
        return settings.persistence
