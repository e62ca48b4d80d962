"""Domain value objects for Canopy."""

from canopy.domain.value.common import RootValueObject
from canopy.domain.value.identifiers import CommentId
from canopy.domain.value.types import Vote

__all__ = [
    "CommentId",
    "RootValueObject",
    "Vote",
]
