"""Comment tree reducer.

Pure state transitions over ``CommentsState``. Every function returns a new
snapshot and never mutates its input. When the target of a transition does
not exist (it may have been deleted between the intent being issued and
applied) the transition is a no-op and returns the very same state object,
so callers can detect "nothing changed" with ``is``.
"""

from typing import Callable, Optional

from canopy.domain.model import (
    AddComment,
    ClearAll,
    CommentNode,
    CommentsState,
    DeleteComment,
    DislikeComment,
    EditComment,
    Intent,
    LikeComment,
    ToggleCollapse,
)
from canopy.domain.value import CommentId, Vote
from canopy.util.ids import new_comment_id
from canopy.util.time import now_ms
from canopy.util.tree import collect_subtree_ids

Clock = Callable[[], int]
IdFactory = Callable[[], CommentId]

# (likes delta, dislikes delta) keyed by the actor's previous vote.
# Counters are not clamped, so a wrong previous_vote can drive them negative.
LIKE_TRANSITIONS: dict[Vote, tuple[int, int]] = {
    Vote.LIKE: (-1, 0),
    Vote.DISLIKE: (1, -1),
    Vote.NONE: (1, 0),
}

DISLIKE_TRANSITIONS: dict[Vote, tuple[int, int]] = {
    Vote.DISLIKE: (0, -1),
    Vote.LIKE: (-1, 1),
    Vote.NONE: (0, 1),
}

EMPTY_STATE = CommentsState()


def _replace_node(state: CommentsState, node: CommentNode) -> CommentsState:
    return CommentsState(by_id={**state.by_id, node.id: node}, root_ids=state.root_ids)


def add_comment(
    state: CommentsState,
    parent_id: Optional[CommentId],
    text: str,
    *,
    clock: Clock = now_ms,
    id_factory: IdFactory = new_comment_id,
) -> tuple[CommentsState, Optional[CommentId]]:
    """Add a top-level comment or a reply.

    Args:
        state: Current tree
        parent_id: Parent comment ID for replies (None for top-level)
        text: Comment text, stored verbatim
        clock: Source of the creation timestamp
        id_factory: Source of the new comment id

    Returns:
        The new state and the new comment id, or the unchanged state and
        None when the parent does not exist
    """
    if parent_id is not None:
        parent = state.by_id.get(parent_id)
        if parent is None:
            return state, None

    comment_id = id_factory()
    node = CommentNode(
        id=comment_id,
        parent_id=parent_id,
        text=text,
        created_at=clock(),
    )

    if parent_id is None:
        return (
            CommentsState(
                by_id={**state.by_id, comment_id: node},
                root_ids=(*state.root_ids, comment_id),
            ),
            comment_id,
        )

    updated_parent = parent.model_copy(
        update={"child_ids": (*parent.child_ids, comment_id)}
    )
    return (
        CommentsState(
            by_id={**state.by_id, comment_id: node, parent_id: updated_parent},
            root_ids=state.root_ids,
        ),
        comment_id,
    )


def edit_comment(
    state: CommentsState,
    comment_id: CommentId,
    text: str,
    *,
    clock: Clock = now_ms,
) -> CommentsState:
    """Replace a comment's text and stamp ``updated_at``."""
    node = state.by_id.get(comment_id)
    if node is None:
        return state
    return _replace_node(state, node.model_copy(update={"text": text, "updated_at": clock()}))


def delete_comment(state: CommentsState, comment_id: CommentId) -> CommentsState:
    """Delete a comment together with its whole subtree.

    All removed ids disappear from ``by_id`` in a single snapshot and the
    comment is unlinked from ``root_ids`` or from its parent's ``child_ids``.
    """
    node = state.by_id.get(comment_id)
    if node is None:
        return state

    doomed = set(collect_subtree_ids(state, comment_id))
    by_id = {cid: n for cid, n in state.by_id.items() if cid not in doomed}

    root_ids = state.root_ids
    if node.parent_id is None:
        root_ids = tuple(rid for rid in root_ids if rid != comment_id)
    else:
        parent = by_id.get(node.parent_id)
        if parent is not None:
            by_id[parent.id] = parent.model_copy(
                update={
                    "child_ids": tuple(
                        cid for cid in parent.child_ids if cid != comment_id
                    )
                }
            )

    return CommentsState(by_id=by_id, root_ids=root_ids)


def toggle_collapse(state: CommentsState, comment_id: CommentId) -> CommentsState:
    """Flip a comment's collapsed flag."""
    node = state.by_id.get(comment_id)
    if node is None:
        return state
    return _replace_node(state, node.model_copy(update={"is_collapsed": not node.is_collapsed}))


def _apply_vote(
    state: CommentsState,
    comment_id: CommentId,
    transitions: dict[Vote, tuple[int, int]],
    previous_vote: Vote,
) -> CommentsState:
    node = state.by_id.get(comment_id)
    if node is None:
        return state
    likes_delta, dislikes_delta = transitions[previous_vote]
    return _replace_node(
        state,
        node.model_copy(
            update={
                "likes": node.likes + likes_delta,
                "dislikes": node.dislikes + dislikes_delta,
            }
        ),
    )


def like_comment(
    state: CommentsState, comment_id: CommentId, previous_vote: Vote = Vote.NONE
) -> CommentsState:
    """Apply a like press given the actor's previous vote.

    LIKE toggles the like off, DISLIKE switches to like, NONE adds a like.
    """
    return _apply_vote(state, comment_id, LIKE_TRANSITIONS, previous_vote)


def dislike_comment(
    state: CommentsState, comment_id: CommentId, previous_vote: Vote = Vote.NONE
) -> CommentsState:
    """Apply a dislike press given the actor's previous vote (mirror of like)."""
    return _apply_vote(state, comment_id, DISLIKE_TRANSITIONS, previous_vote)


def clear_all() -> CommentsState:
    """Return the canonical empty state."""
    return EMPTY_STATE


def reduce(
    state: CommentsState,
    intent: Intent,
    *,
    clock: Clock = now_ms,
    id_factory: IdFactory = new_comment_id,
) -> CommentsState:
    """Apply an intent to a state.

    Args:
        state: Current tree
        intent: Transition to apply
        clock: Timestamp source for add/edit
        id_factory: Id source for add

    Returns:
        The next state (the same object when the intent was a no-op)

    Raises:
        TypeError: If ``intent`` is not a known intent model
    """
    if isinstance(intent, AddComment):
        new_state, _ = add_comment(
            state, intent.parent_id, intent.text, clock=clock, id_factory=id_factory
        )
        return new_state
    if isinstance(intent, EditComment):
        return edit_comment(state, intent.id, intent.text, clock=clock)
    if isinstance(intent, DeleteComment):
        return delete_comment(state, intent.id)
    if isinstance(intent, ToggleCollapse):
        return toggle_collapse(state, intent.id)
    if isinstance(intent, LikeComment):
        return like_comment(state, intent.id, intent.previous_vote)
    if isinstance(intent, DislikeComment):
        return dislike_comment(state, intent.id, intent.previous_vote)
    if isinstance(intent, ClearAll):
        return clear_all()
    raise TypeError(f"Unknown intent: {type(intent).__name__}")
