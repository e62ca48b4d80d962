"""Vote ledger operations.

The ledger answers "how did this actor vote on comment X". It never adjusts
the aggregate counters on the tree: callers pair ``set_vote`` with the
matching reducer transition, passing the ledger's prior value as
``previous_vote``.
"""

from canopy.domain.model import VoteLedger
from canopy.domain.value import CommentId, Vote

EMPTY_LEDGER = VoteLedger()


def get_vote(ledger: VoteLedger, comment_id: CommentId) -> Vote:
    """Return the actor's vote on a comment, NONE when there is no entry."""
    return ledger.root.get(comment_id, Vote.NONE)


def set_vote(ledger: VoteLedger, comment_id: CommentId, vote: Vote) -> VoteLedger:
    """Record a vote.

    Args:
        ledger: Current ledger
        comment_id: Comment voted on
        vote: New vote; NONE removes the entry

    Returns:
        A new ledger, or the same ledger when nothing changed
    """
    if get_vote(ledger, comment_id) is vote:
        return ledger

    votes = dict(ledger.root)
    if vote is Vote.NONE:
        del votes[comment_id]
    else:
        votes[comment_id] = vote
    return VoteLedger(votes)


def next_vote(previous: Vote, pressed: Vote) -> Vote:
    """Vote recorded after the actor presses like or dislike.

    Pressing the vote already in place clears it; pressing the other one
    switches to it.

    Raises:
        ValueError: If ``pressed`` is NONE
    """
    if pressed is Vote.NONE:
        raise ValueError("Pressed vote must be LIKE or DISLIKE")
    return Vote.NONE if previous is pressed else pressed
