"""Vote ledger value object.

The ledger records how the local actor voted on each comment. It is kept
apart from the aggregate like/dislike counters on the comment nodes, which
many actors may have contributed to.
"""

from pydantic import Field, field_validator

from canopy.domain.value import CommentId, RootValueObject, Vote


class VoteLedger(RootValueObject[dict[CommentId, Vote]]):
    """Mapping of comment id to the actor's current vote.

    Only LIKE and DISLIKE are stored; a missing key means no vote.
    """

    root: dict[CommentId, Vote] = Field(default_factory=dict)

    @field_validator("root")
    @classmethod
    def validate_no_none_entries(
        cls, v: dict[CommentId, Vote]
    ) -> dict[CommentId, Vote]:
        """Reject explicit NONE entries."""
        if any(vote is Vote.NONE for vote in v.values()):
            raise ValueError("Vote ledger entries must be 'like' or 'dislike'")
        return v

    def __len__(self) -> int:
        return len(self.root)
