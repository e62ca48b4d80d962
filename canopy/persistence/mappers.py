"""Mappers between domain snapshots and their stored JSON form.

Comments blob: ``{"byId": {id: node}, "rootIds": [id, ...]}`` with camelCase
node keys; ``parentId`` and ``updatedAt`` are omitted when null.
Votes blob: ``{id: "like" | "dislike"}``.
"""

from canopy.domain.model import CommentsState, VoteLedger
from canopy.util.tree import find_integrity_errors


def comments_to_json(state: CommentsState) -> str:
    """Serialize a comment tree.

    Args:
        state: Comment tree

    Returns:
        JSON text in the persisted layout
    """
    return state.model_dump_json(by_alias=True, exclude_none=True)


def json_to_comments(data: str) -> CommentsState:
    """Parse and validate a stored comment tree.

    The tree must be well formed JSON, match the node schema and satisfy the
    forest invariants. Nothing is returned unless all of it holds.

    Args:
        data: JSON text

    Returns:
        Comment tree

    Raises:
        ValueError: If the text is not valid JSON, does not match the schema
            (pydantic.ValidationError) or describes an inconsistent tree
    """
    state = CommentsState.model_validate_json(data)
    errors = find_integrity_errors(state)
    if errors:
        raise ValueError(f"Inconsistent comment tree: {'; '.join(errors)}")
    return state


def votes_to_json(ledger: VoteLedger) -> str:
    """Serialize a vote ledger."""
    return ledger.model_dump_json()


def json_to_votes(data: str) -> VoteLedger:
    """Parse and validate a stored vote ledger.

    Raises:
        ValueError: If the text is not a JSON object of "like"/"dislike" values
    """
    return VoteLedger.model_validate_json(data)
