#!/usr/bin/env python3
"""Print the persisted comment tree, with Logfire error tracking."""

import asyncio
import sys

import logfire

from canopy.application import CommentStore
from canopy.config import Settings
from canopy.domain.model import CommentNode
from canopy.domain.service import select_reply_count
from canopy.util.di.container import create_container
from canopy.util.logging import setup_logging
from canopy.util.observability import configure_logfire


def format_node(node: CommentNode, depth: int, hidden_replies: int = 0) -> str:
    """One line per comment: indentation, collapse marker, counters and text."""
    marker = "+" if node.is_collapsed else "-"
    hidden = f" ({hidden_replies} hidden)" if hidden_replies else ""
    edited = " (edited)" if node.updated_at is not None else ""
    first_line = node.text.splitlines()[0] if node.text else ""
    return (
        f"{'  ' * depth}{marker} [{node.likes}/{node.dislikes}] "
        f"{first_line}{edited}{hidden}  <{node.id}>"
    )


def print_tree(store: CommentStore) -> None:
    """Walk the tree depth-first, skipping the replies of collapsed comments."""
    stack = [(node, 0) for node in reversed(store.root_comments())]
    while stack:
        node, depth = stack.pop()
        if node.is_collapsed:
            print(format_node(node, depth, select_reply_count(store.state, node.id)))
        else:
            print(format_node(node, depth))
            children = store.child_comments(node.id)
            stack.extend((child, depth + 1) for child in reversed(children))
    print(f"{store.total_count} comment(s)")


async def run() -> None:
    container = create_container()
    try:
        store = await container.get(CommentStore)
        print_tree(store)
    finally:
        await container.close()


def main() -> int:
    """Load the configured storage and print its comments."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    try:
        asyncio.run(run())
        return 0
    except Exception as e:
        logfire.error(
            "Failed to show comments",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
