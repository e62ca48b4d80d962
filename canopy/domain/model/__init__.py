"""Domain model entities for Canopy."""

from canopy.domain.model.comment import CommentNode
from canopy.domain.model.intent import (
    AddComment,
    ClearAll,
    DeleteComment,
    DislikeComment,
    EditComment,
    Intent,
    LikeComment,
    ToggleCollapse,
    parse_intent,
)
from canopy.domain.model.state import CommentsState
from canopy.domain.model.vote import VoteLedger

__all__ = [
    "CommentNode",
    "CommentsState",
    "VoteLedger",
    # Intents
    "Intent",
    "AddComment",
    "EditComment",
    "DeleteComment",
    "ToggleCollapse",
    "LikeComment",
    "DislikeComment",
    "ClearAll",
    "parse_intent",
]
