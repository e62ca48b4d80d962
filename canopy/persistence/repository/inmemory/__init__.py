"""In-memory storage implementations for testing."""

from .storage import InMemorySnapshotStorage

__all__ = [
    "InMemorySnapshotStorage",
]
