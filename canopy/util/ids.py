"""Comment identifier generation."""

from uuid import uuid4

from canopy.domain.value import CommentId


def new_comment_id() -> CommentId:
    """Return a fresh, globally unique comment id."""
    return CommentId(str(uuid4()))
