"""In-memory snapshot storage for testing."""

from typing import Optional

from canopy.domain.repository.storage import SnapshotStorage


class InMemorySnapshotStorage(SnapshotStorage):
    """In-memory implementation of SnapshotStorage for testing."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._blobs: dict[str, str] = dict(initial or {})

    async def read(self, key: str) -> Optional[str]:
        """Read a stored blob."""
        return self._blobs.get(key)

    async def write(self, key: str, data: str) -> None:
        """Store a blob."""
        self._blobs[key] = data

    async def remove(self, key: str) -> None:
        """Remove a blob."""
        self._blobs.pop(key, None)
