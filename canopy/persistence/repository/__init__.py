"""Snapshot storage implementations."""

from .file import FileSnapshotStorage
from .inmemory import InMemorySnapshotStorage
from .sql import SqlSnapshotStorage

__all__ = [
    "FileSnapshotStorage",
    "InMemorySnapshotStorage",
    "SqlSnapshotStorage",
]
