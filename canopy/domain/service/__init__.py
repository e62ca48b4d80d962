"""Domain services: pure transitions and views over comment state."""

from canopy.domain.service.comment_reducer import (
    EMPTY_STATE,
    add_comment,
    clear_all,
    delete_comment,
    dislike_comment,
    edit_comment,
    like_comment,
    reduce,
    toggle_collapse,
)
from canopy.domain.service.selectors import (
    select_child_comments,
    select_comment_by_id,
    select_has_comments,
    select_reply_count,
    select_root_comments,
    select_total_count,
)
from canopy.domain.service.validation import (
    TextValidation,
    remaining_characters,
    validate_comment_text,
)
from canopy.domain.service.vote_ledger import (
    EMPTY_LEDGER,
    get_vote,
    next_vote,
    set_vote,
)

__all__ = [
    # Reducer
    "EMPTY_STATE",
    "add_comment",
    "edit_comment",
    "delete_comment",
    "toggle_collapse",
    "like_comment",
    "dislike_comment",
    "clear_all",
    "reduce",
    # Vote ledger
    "EMPTY_LEDGER",
    "get_vote",
    "set_vote",
    "next_vote",
    # Selectors
    "select_comment_by_id",
    "select_root_comments",
    "select_child_comments",
    "select_reply_count",
    "select_total_count",
    "select_has_comments",
    # Validation
    "TextValidation",
    "validate_comment_text",
    "remaining_characters",
]
