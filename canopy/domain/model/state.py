"""Comment tree state."""

from pydantic import Field

from canopy.domain.model.comment import CommentNode
from canopy.domain.model.common import DomainModel
from canopy.domain.value import CommentId


class CommentsState(DomainModel):
    """The whole comment tree.

    ``by_id`` maps every comment id to its node and ``root_ids`` lists the
    top-level comments in insertion order. Transitions always build a new
    state; the dict inside a state is never mutated after construction.
    """

    by_id: dict[CommentId, CommentNode] = Field(default_factory=dict)
    root_ids: tuple[CommentId, ...] = ()
