"""File-system implementation of snapshot storage.

Each slot is a JSON file in one directory. Writes go to a temporary file that
then replaces the target, so a crash mid-write never leaves a truncated
snapshot behind.
"""

import asyncio
from pathlib import Path
from typing import Optional
from urllib.parse import quote

from canopy.domain.repository.storage import SnapshotStorage
from canopy.persistence.error import StorageError


class FileSnapshotStorage(SnapshotStorage):
    """Stores each slot as ``<directory>/<quoted key>.json``."""

    def __init__(self, directory: Path) -> None:
        """Initialize storage rooted at a directory.

        Args:
            directory: Directory holding the snapshot files (created on first write)
        """
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        """File path backing a slot."""
        return self.directory / f"{quote(key, safe='')}.json"

    async def read(self, key: str) -> Optional[str]:
        """Read a slot's file, None if it does not exist."""
        try:
            return await asyncio.to_thread(self._read, self.path_for(key))
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError("read", key, str(e)) from e

    async def write(self, key: str, data: str) -> None:
        """Atomically replace a slot's file."""
        try:
            await asyncio.to_thread(self._atomic_write, self.path_for(key), data)
        except OSError as e:
            raise StorageError("write", key, str(e)) from e

    async def remove(self, key: str) -> None:
        """Delete a slot's file if present."""
        try:
            await asyncio.to_thread(self.path_for(key).unlink, missing_ok=True)
        except OSError as e:
            raise StorageError("remove", key, str(e)) from e

    @staticmethod
    def _read(path: Path) -> Optional[str]:
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    @staticmethod
    def _atomic_write(path: Path, data: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(path.suffix + ".tmp")
        tmp.write_text(data, encoding="utf-8")
        tmp.replace(path)
