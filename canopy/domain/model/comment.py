"""Comment node entity.

Comments form a forest stored as an arena: nodes reference each other by id
through ``parent_id`` and ``child_ids`` and are never nested inside one
another.
"""

from typing import Optional

from canopy.domain.model.common import DomainModel
from canopy.domain.value import CommentId


class CommentNode(DomainModel):
    """A single authored comment.

    - parent_id: Direct parent comment (None for top-level)
    - child_ids: Direct replies in insertion order
    - likes/dislikes: Aggregate counters, independent of any actor's ledger

    ``text`` is raw user input and is stored verbatim.
    """

    id: CommentId
    parent_id: Optional[CommentId] = None
    text: str
    created_at: int  # epoch milliseconds
    updated_at: Optional[int] = None  # None until the first edit
    child_ids: tuple[CommentId, ...] = ()
    is_collapsed: bool = False
    likes: int = 0
    dislikes: int = 0
