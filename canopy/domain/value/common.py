"""Shared base for single-value wrappers."""

from typing import Generic, TypeVar

from pydantic import ConfigDict, RootModel

T = TypeVar("T")


class RootValueObject(RootModel[T], Generic[T]):
    """Immutable wrapper around one value, reachable as ``.root``.

    Serializes as the bare wrapped value, so a ledger dumps to a plain JSON
    object rather than ``{"root": ...}``.
    """

    model_config = ConfigDict(frozen=True)
