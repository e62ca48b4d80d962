"""Snapshot storage interface."""

from abc import ABC, abstractmethod
from typing import Optional


class SnapshotStorage(ABC):
    """Key/value storage medium for serialized snapshots.

    Defines the contract for the durable medium the persister writes to.
    Implementations live in the persistence layer and raise
    ``StorageError`` when the medium fails.
    """

    @abstractmethod
    async def read(self, key: str) -> Optional[str]:
        """Read a stored blob.

        Args:
            key: Storage slot

        Returns:
            The stored text, or None if the slot is empty
        """
        pass

    @abstractmethod
    async def write(self, key: str, data: str) -> None:
        """Replace the blob stored in a slot.

        Args:
            key: Storage slot
            data: Serialized snapshot
        """
        pass

    @abstractmethod
    async def remove(self, key: str) -> None:
        """Empty a slot. Removing an empty slot is not an error.

        Args:
            key: Storage slot
        """
        pass
