"""Dependency injection wiring.

Every provider is listed once in ``PROVIDERS``. Entries that name a mock
component are resolved to one of their subclasses by ``get_provider``: the
production subclass lives next to the base, the mock is registered by the
test suite.
"""

from typing import Type

from canopy.util.di.application import ProdApplicationProvider
from canopy.util.di.base import Component, ProviderBase
from canopy.util.di.core import ProdConfigProvider
from canopy.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    PersistenceProvider,
    ProdApplicationProvider,
]


def mockable_components() -> set[Component]:
    """Components whose provider can be swapped for a mock."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.__mock_component__ is not None
    }


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a ``PROVIDERS`` entry to the class to instantiate.

    Args:
        base: Entry from ``PROVIDERS``
        use_mock: Pick the mock implementation of a mockable component
            (ignored for providers without a component)

    Returns:
        Provider class (not instantiated)

    Raises:
        ValueError: If the component has no implementation of the requested kind
    """
    if base.__mock_component__ is None:
        return base

    for impl in base.__subclasses__():
        if impl.__is_mock__ == use_mock:
            return impl

    kind = "mock" if use_mock else "production"
    raise ValueError(
        f"No {kind} provider registered for component {base.__mock_component__!r}"
    )


__all__ = [
    "PROVIDERS",
    "Component",
    "ProviderBase",
    "PersistenceProvider",
    "ProdPersistenceProvider",
    "get_provider",
    "mockable_components",
]
