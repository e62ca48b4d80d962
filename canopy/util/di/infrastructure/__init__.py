"""Infrastructure providers.

Implementations are imported here so ``get_provider`` can find them among the
base's subclasses.
"""

from .persistence import PersistenceProvider, ProdPersistenceProvider

__all__ = [
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
