"""Test configuration and fixtures."""

from itertools import count
from typing import Callable, Optional

import logfire

from canopy.domain.model import CommentsState
from canopy.domain.service import add_comment
from canopy.domain.value import CommentId

# Keep test output quiet; nothing is sent anywhere
logfire.configure(send_to_logfire=False, console=False)


def sequential_ids(prefix: str = "c") -> Callable[[], CommentId]:
    """Id factory producing c1, c2, c3, ... for readable assertions."""
    counter = count(1)
    return lambda: CommentId(f"{prefix}{next(counter)}")


def ticking_clock(start: int = 1_700_000_000_000, step: int = 1000) -> Callable[[], int]:
    """Clock that advances by ``step`` milliseconds on every call."""
    counter = count(start, step)
    return lambda: next(counter)


def build_tree(
    spec: list[tuple[Optional[str], str]],
    state: Optional[CommentsState] = None,
) -> CommentsState:
    """Build a tree from (parent id, text) pairs using ids c1, c2, ...

    Args:
        spec: Comments to add in order; parent ids refer to earlier entries
        state: Starting state (empty if omitted)

    Returns:
        The resulting state
    """
    ids = sequential_ids()
    clock = ticking_clock()
    state = state if state is not None else CommentsState()
    for parent_id, text in spec:
        state, _ = add_comment(
            state,
            CommentId(parent_id) if parent_id else None,
            text,
            clock=clock,
            id_factory=ids,
        )
    return state
