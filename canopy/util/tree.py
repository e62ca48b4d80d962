"""Tree traversal utilities for the comment hierarchy."""

from typing import Iterator

from canopy.domain.model import CommentsState
from canopy.domain.value import CommentId


def iter_subtree_ids(state: CommentsState, comment_id: CommentId) -> Iterator[CommentId]:
    """Yield a comment id followed by all of its descendants in pre-order.

    Uses an explicit stack so deep reply chains do not hit the recursion limit.
    Ids listed in ``child_ids`` but missing from ``by_id`` are still yielded,
    their own (unknown) children are not.

    Args:
        state: Comment tree to walk
        comment_id: Root of the subtree

    Yields:
        Comment ids, parents before children, siblings in insertion order
    """
    stack = [comment_id]
    while stack:
        current = stack.pop()
        yield current
        node = state.by_id.get(current)
        if node is not None:
            stack.extend(reversed(node.child_ids))


def collect_subtree_ids(state: CommentsState, comment_id: CommentId) -> list[CommentId]:
    """Collect a comment id and every descendant id.

    Used for cascade deletes.

    Args:
        state: Comment tree to walk
        comment_id: Root of the subtree

    Returns:
        Subtree ids in pre-order, including ``comment_id`` itself
    """
    return list(iter_subtree_ids(state, comment_id))


def find_integrity_errors(state: CommentsState) -> list[str]:
    """Check the forest invariants of a comment tree.

    Checks that:
    - every node is stored under its own id
    - root ids are unique, known and have no parent
    - child ids are known and point back at their parent
    - every node is reachable from a root exactly once (no cycles, no orphans)

    Args:
        state: Comment tree to check

    Returns:
        Human-readable problems, empty when the tree is consistent
    """
    errors: list[str] = []
    by_id = state.by_id

    for key, node in by_id.items():
        if node.id != key:
            errors.append(f"node stored under {key} has id {node.id}")

    if len(set(state.root_ids)) != len(state.root_ids):
        errors.append("duplicate root ids")

    for root_id in state.root_ids:
        root = by_id.get(root_id)
        if root is None:
            errors.append(f"root {root_id} does not exist")
        elif root.parent_id is not None:
            errors.append(f"root {root_id} has parent {root.parent_id}")

    for node in by_id.values():
        for child_id in node.child_ids:
            child = by_id.get(child_id)
            if child is None:
                errors.append(f"child {child_id} of {node.id} does not exist")
            elif child.parent_id != node.id:
                errors.append(
                    f"child {child_id} of {node.id} has parent {child.parent_id}"
                )

    seen: set[CommentId] = set()
    for root_id in state.root_ids:
        if root_id not in by_id:
            continue
        for comment_id in iter_subtree_ids(state, root_id):
            if comment_id in seen:
                errors.append(f"comment {comment_id} is reachable more than once")
                return errors
            seen.add(comment_id)

    orphans = by_id.keys() - seen
    if orphans:
        errors.append(f"{len(orphans)} comment(s) unreachable from roots")

    return errors
