"""Application layer: the comment store facade."""

from canopy.application.store import CommentStore

__all__ = ["CommentStore"]
