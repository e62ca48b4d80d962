"""Read-only views over a comment tree.

Each selector only touches the slice it returns: children of a comment are
resolved through that comment's ``child_ids``, never by scanning the tree.
"""

from typing import Optional

from canopy.domain.model import CommentNode, CommentsState
from canopy.domain.value import CommentId


def select_comment_by_id(
    state: CommentsState, comment_id: CommentId
) -> Optional[CommentNode]:
    return state.by_id.get(comment_id)


def select_root_comments(state: CommentsState) -> list[CommentNode]:
    """Top-level comments in insertion order."""
    by_id = state.by_id
    return [by_id[rid] for rid in state.root_ids if rid in by_id]


def select_child_comments(
    state: CommentsState, parent_id: CommentId
) -> list[CommentNode]:
    """Direct replies of a comment in insertion order (empty if unknown)."""
    parent = state.by_id.get(parent_id)
    if parent is None:
        return []
    by_id = state.by_id
    return [by_id[cid] for cid in parent.child_ids if cid in by_id]


def select_reply_count(state: CommentsState, parent_id: CommentId) -> int:
    """Number of direct replies of a comment."""
    parent = state.by_id.get(parent_id)
    return len(parent.child_ids) if parent is not None else 0


def select_total_count(state: CommentsState) -> int:
    return len(state.by_id)


def select_has_comments(state: CommentsState) -> bool:
    return bool(state.root_ids)
