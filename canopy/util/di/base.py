"""Provider base class carrying mock metadata."""

from typing import ClassVar, Literal

from dishka import Provider

# Components that tests may swap for in-memory doubles
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Base for every Canopy provider.

    A provider whose ``__mock_component__`` is set is the base of a mockable
    component; its subclasses are the implementations, told apart by
    ``__is_mock__``. Providers without a component are used as they are.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
