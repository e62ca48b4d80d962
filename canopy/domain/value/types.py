"""Domain value objects for Canopy."""

from enum import Enum


class Vote(str, Enum):
    """An actor's vote on a comment.

    NONE is never stored in a vote ledger; absence of an entry means NONE.
    """

    NONE = "none"
    LIKE = "like"
    DISLIKE = "dislike"
