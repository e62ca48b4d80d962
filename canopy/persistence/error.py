"""Persistence layer errors."""


class PersistenceError(Exception):
    """Base persistence error."""

    pass


class StorageError(PersistenceError):
    """The storage medium could not be read or written."""

    def __init__(self, operation: str, key: str, reason: str):
        self.operation = operation
        self.key = key
        super().__init__(f"Storage {operation} failed for {key}: {reason}")
