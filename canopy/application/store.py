"""Comment store.

Owns the current comment tree and the local actor's vote ledger, applies
intents through the reducer and hands every new snapshot to subscribers and
to the persister. The store is constructed explicitly and passed to whoever
needs it; ``init()`` hydrates it and ``teardown()`` flushes pending writes.
"""

from typing import Callable, Optional

import logfire

from canopy.domain.model import (
    ClearAll,
    CommentNode,
    CommentsState,
    DeleteComment,
    DislikeComment,
    EditComment,
    Intent,
    LikeComment,
    ToggleCollapse,
    VoteLedger,
)
from canopy.domain.service import (
    EMPTY_LEDGER,
    EMPTY_STATE,
    add_comment,
    get_vote,
    next_vote,
    reduce,
    select_child_comments,
    select_comment_by_id,
    select_has_comments,
    select_root_comments,
    select_total_count,
    set_vote,
)
from canopy.domain.service.comment_reducer import Clock, IdFactory
from canopy.domain.value import CommentId, Vote
from canopy.persistence.persister import SnapshotPersister
from canopy.util.ids import new_comment_id
from canopy.util.time import now_ms

Listener = Callable[[CommentsState], None]


class CommentStore:
    """Stateful facade over the pure comment reducer and vote ledger."""

    def __init__(
        self,
        persister: Optional[SnapshotPersister] = None,
        *,
        clock: Clock = now_ms,
        id_factory: IdFactory = new_comment_id,
    ) -> None:
        """Initialize an empty store.

        Args:
            persister: Persistence for snapshots (None keeps everything in memory)
            clock: Timestamp source for new and edited comments
            id_factory: Id source for new comments
        """
        self.persister = persister
        self._clock = clock
        self._id_factory = id_factory
        self._state: CommentsState = EMPTY_STATE
        self._votes: VoteLedger = EMPTY_LEDGER
        self._listeners: list[Listener] = []

    @property
    def state(self) -> CommentsState:
        """Current comment tree snapshot."""
        return self._state

    @property
    def votes(self) -> VoteLedger:
        """Current vote ledger snapshot."""
        return self._votes

    # --- Lifecycle ------------------------------------------------------------

    async def init(self) -> None:
        """Hydrate the store from persisted snapshots.

        Missing or untrustworthy snapshots leave the empty state in place.
        """
        if self.persister is None:
            return

        with logfire.span("comment_store.init"):
            state = await self.persister.load_comments()
            ledger = await self.persister.load_votes()

            self._state = state if state is not None else EMPTY_STATE
            self._votes = ledger if ledger is not None else EMPTY_LEDGER
            logfire.info(
                "Comment store initialized",
                hydrated=state is not None,
                total_comments=select_total_count(self._state),
                total_votes=len(self._votes),
            )

    async def teardown(self) -> None:
        """Flush pending writes."""
        if self.persister is not None:
            await self.persister.flush()
        logfire.info("Comment store torn down")

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with every new comment tree.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- Transitions ----------------------------------------------------------

    def dispatch(self, intent: Intent) -> CommentsState:
        """Apply an intent.

        Args:
            intent: Transition to apply

        Returns:
            The resulting state (unchanged object if the intent was a no-op)
        """
        new_state = reduce(
            self._state, intent, clock=self._clock, id_factory=self._id_factory
        )
        self._commit(new_state, intent.type)
        return new_state

    def add_comment(self, parent_id: Optional[CommentId], text: str) -> Optional[CommentId]:
        """Add a comment or reply.

        Returns:
            The new comment id, or None if the parent does not exist
        """
        new_state, comment_id = add_comment(
            self._state,
            parent_id,
            text,
            clock=self._clock,
            id_factory=self._id_factory,
        )
        self._commit(new_state, "add_comment")
        return comment_id

    def edit_comment(self, comment_id: CommentId, text: str) -> CommentsState:
        return self.dispatch(EditComment(id=comment_id, text=text))

    def delete_comment(self, comment_id: CommentId) -> CommentsState:
        """Delete a comment and all of its replies, without confirmation."""
        return self.dispatch(DeleteComment(id=comment_id))

    def toggle_collapse(self, comment_id: CommentId) -> CommentsState:
        return self.dispatch(ToggleCollapse(id=comment_id))

    def clear_all(self) -> CommentsState:
        """Remove every comment. The vote ledger is left as it is."""
        return self.dispatch(ClearAll())

    def like_comment(self, comment_id: CommentId) -> CommentsState:
        """Press like as the local actor and record the vote in the ledger."""
        return self._press_vote(comment_id, Vote.LIKE)

    def dislike_comment(self, comment_id: CommentId) -> CommentsState:
        """Press dislike as the local actor and record the vote in the ledger."""
        return self._press_vote(comment_id, Vote.DISLIKE)

    def _press_vote(self, comment_id: CommentId, pressed: Vote) -> CommentsState:
        previous = get_vote(self._votes, comment_id)
        if pressed is Vote.LIKE:
            intent: Intent = LikeComment(id=comment_id, previous_vote=previous)
        else:
            intent = DislikeComment(id=comment_id, previous_vote=previous)

        before = self._state
        new_state = self.dispatch(intent)
        if new_state is not before:
            self.set_vote(comment_id, next_vote(previous, pressed))
        return new_state

    def _commit(self, new_state: CommentsState, intent_type: str) -> None:
        if new_state is self._state:
            logfire.debug("Intent had no effect", intent=intent_type)
            return

        self._state = new_state
        logfire.debug(
            "Comments updated",
            intent=intent_type,
            total_comments=select_total_count(new_state),
        )
        for listener in list(self._listeners):
            listener(new_state)
        if self.persister is not None:
            self.persister.observe_comments(new_state)

    # --- Vote ledger ----------------------------------------------------------

    def get_vote(self, comment_id: CommentId) -> Vote:
        """The local actor's vote on a comment."""
        return get_vote(self._votes, comment_id)

    def set_vote(self, comment_id: CommentId, vote: Vote) -> VoteLedger:
        """Record the local actor's vote without touching counters."""
        ledger = set_vote(self._votes, comment_id, vote)
        if ledger is not self._votes:
            self._votes = ledger
            if self.persister is not None:
                self.persister.observe_votes(ledger)
        return ledger

    # --- Views ----------------------------------------------------------------

    def comment(self, comment_id: CommentId) -> Optional[CommentNode]:
        return select_comment_by_id(self._state, comment_id)

    def root_comments(self) -> list[CommentNode]:
        return select_root_comments(self._state)

    def child_comments(self, comment_id: CommentId) -> list[CommentNode]:
        return select_child_comments(self._state, comment_id)

    @property
    def total_count(self) -> int:
        return select_total_count(self._state)

    @property
    def has_comments(self) -> bool:
        return select_has_comments(self._state)
