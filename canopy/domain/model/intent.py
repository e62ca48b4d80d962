"""Intents accepted by the comment tree reducer.

Each intent is a frozen model tagged with a ``type`` literal so a mixed
stream of intents can be parsed back into the right classes.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import Field, TypeAdapter

from canopy.domain.model.common import DomainModel
from canopy.domain.value import CommentId, Vote


class AddComment(DomainModel):
    """Add a top-level comment or a reply."""

    type: Literal["add_comment"] = "add_comment"
    parent_id: Optional[CommentId] = None
    text: str


class EditComment(DomainModel):
    """Replace a comment's text."""

    type: Literal["edit_comment"] = "edit_comment"
    id: CommentId
    text: str


class DeleteComment(DomainModel):
    """Delete a comment and all of its replies."""

    type: Literal["delete_comment"] = "delete_comment"
    id: CommentId


class ToggleCollapse(DomainModel):
    """Flip a comment's collapsed flag."""

    type: Literal["toggle_collapse"] = "toggle_collapse"
    id: CommentId


class LikeComment(DomainModel):
    """Press like on a comment.

    previous_vote is the actor's vote before this press, as recorded in
    their ledger.
    """

    type: Literal["like_comment"] = "like_comment"
    id: CommentId
    previous_vote: Vote = Vote.NONE


class DislikeComment(DomainModel):
    """Press dislike on a comment."""

    type: Literal["dislike_comment"] = "dislike_comment"
    id: CommentId
    previous_vote: Vote = Vote.NONE


class ClearAll(DomainModel):
    """Reset the tree to the empty state."""

    type: Literal["clear_all"] = "clear_all"


Intent = Annotated[
    Union[
        AddComment,
        EditComment,
        DeleteComment,
        ToggleCollapse,
        LikeComment,
        DislikeComment,
        ClearAll,
    ],
    Field(discriminator="type"),
]

_intent_adapter: TypeAdapter[Intent] = TypeAdapter(Intent)


def parse_intent(data: object) -> Intent:
    """Validate a raw mapping into a typed intent.

    Args:
        data: Mapping with a ``type`` key and the intent's fields

    Returns:
        The matching intent model

    Raises:
        pydantic.ValidationError: If the type is unknown or fields are invalid
    """
    return _intent_adapter.validate_python(data)
