"""Repository interfaces for the Canopy domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from canopy.domain.repository.storage import SnapshotStorage

__all__ = [
    "SnapshotStorage",
]
