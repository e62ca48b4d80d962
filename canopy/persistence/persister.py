"""Snapshot persister.

Loads the comment tree and vote ledger at startup and writes them back after
a quiet interval. Storage failures and malformed data stay inside this
module: loads degrade to None and failed writes are logged and dropped, so a
state transition is never blocked or crashed by the storage medium.
"""

from typing import Callable, Optional, TypeVar

import logfire

from canopy.config import PersistenceSettings
from canopy.domain.model import CommentsState, VoteLedger
from canopy.domain.repository import SnapshotStorage
from canopy.persistence.debounce import Debouncer
from canopy.persistence.error import StorageError
from canopy.persistence.mappers import (
    comments_to_json,
    json_to_comments,
    json_to_votes,
    votes_to_json,
)

T = TypeVar("T")


class SnapshotPersister:
    """Debounced persistence of comment and vote snapshots.

    Each slot (comments, votes) has its own debouncer, so a burst of changes
    to one slot results in a single write of the latest snapshot.
    """

    def __init__(
        self,
        storage: SnapshotStorage,
        *,
        comments_key: str = "canopy:comments",
        votes_key: str = "canopy:userVotes",
        debounce_ms: int = 300,
    ) -> None:
        """Initialize persister.

        Args:
            storage: Storage medium
            comments_key: Slot holding the comment tree
            votes_key: Slot holding the vote ledger
            debounce_ms: Quiet window before writing
        """
        self.storage = storage
        self.comments_key = comments_key
        self.votes_key = votes_key

        self._comments_writer = Debouncer(
            debounce_ms, self._write_latest_comments, name="comments"
        )
        self._votes_writer = Debouncer(
            debounce_ms, self._write_latest_votes, name="votes"
        )

        self._latest_comments: Optional[CommentsState] = None
        self._latest_votes: Optional[VoteLedger] = None
        # Snapshots known to match what is in storage
        self._durable_comments: Optional[CommentsState] = None
        self._durable_votes: Optional[VoteLedger] = None

    @classmethod
    def from_settings(
        cls, storage: SnapshotStorage, settings: PersistenceSettings
    ) -> "SnapshotPersister":
        """Build a persister from persistence settings."""
        return cls(
            storage,
            comments_key=settings.comments_key,
            votes_key=settings.votes_key,
            debounce_ms=settings.debounce_ms,
        )

    @property
    def pending(self) -> bool:
        """Whether any snapshot is waiting to be written."""
        return (
            self._comments_writer.pending
            or self._votes_writer.pending
            or self._latest_comments is not None
            or self._latest_votes is not None
        )

    # --- Loading --------------------------------------------------------------

    async def load_comments(self) -> Optional[CommentsState]:
        """Load the stored comment tree.

        Returns:
            The stored tree, or None if nothing is stored or it cannot be trusted
        """
        state = await self._load(self.comments_key, json_to_comments)
        if state is not None:
            self._durable_comments = state
            logfire.info(
                "Comments loaded",
                key=self.comments_key,
                total_comments=len(state.by_id),
                root_comments=len(state.root_ids),
            )
        return state

    async def load_votes(self) -> Optional[VoteLedger]:
        """Load the stored vote ledger.

        Returns:
            The stored ledger, or None if nothing is stored or it cannot be trusted
        """
        ledger = await self._load(self.votes_key, json_to_votes)
        if ledger is not None:
            self._durable_votes = ledger
            logfire.info("User votes loaded", key=self.votes_key, total_votes=len(ledger))
        return ledger

    async def _load(self, key: str, parse: Callable[[str], T]) -> Optional[T]:
        with logfire.span("snapshot_persister.load", key=key):
            try:
                data = await self.storage.read(key)
            except StorageError as e:
                logfire.error("Failed to read snapshot", key=key, error=str(e))
                return None

            if data is None:
                logfire.debug("No snapshot stored", key=key)
                return None

            try:
                return parse(data)
            except ValueError as e:
                logfire.warn("Discarding invalid snapshot", key=key, error=str(e))
                return None

    # --- Saving ---------------------------------------------------------------

    async def save_comments(self, state: CommentsState) -> bool:
        """Write a comment tree now.

        Returns:
            True if the write succeeded
        """
        saved = await self._save(self.comments_key, comments_to_json(state))
        if saved:
            self._durable_comments = state
            logfire.debug(
                "Comments saved",
                key=self.comments_key,
                total_comments=len(state.by_id),
                root_comments=len(state.root_ids),
            )
        return saved

    async def save_votes(self, ledger: VoteLedger) -> bool:
        """Write a vote ledger now.

        Returns:
            True if the write succeeded
        """
        saved = await self._save(self.votes_key, votes_to_json(ledger))
        if saved:
            self._durable_votes = ledger
            logfire.debug("User votes saved", key=self.votes_key, total_votes=len(ledger))
        return saved

    async def _save(self, key: str, data: str) -> bool:
        try:
            await self.storage.write(key, data)
        except StorageError as e:
            logfire.error("Failed to write snapshot", key=key, error=str(e))
            return False
        return True

    # --- Debounced writes -----------------------------------------------------

    def observe_comments(self, state: CommentsState) -> None:
        """Schedule a debounced write of a new comment tree.

        A snapshot that is already durable (e.g. the one just hydrated) is not
        written back, unless another write is armed or in flight: that write
        would otherwise land last and overwrite it.
        """
        if (
            state is self._durable_comments
            and self._latest_comments is None
            and not self._comments_writer.busy
        ):
            logfire.debug("Comments already durable, skipping write", key=self.comments_key)
            return
        self._latest_comments = state
        self._schedule(self._comments_writer, self.comments_key)

    def observe_votes(self, ledger: VoteLedger) -> None:
        """Schedule a debounced write of a new vote ledger."""
        if (
            ledger is self._durable_votes
            and self._latest_votes is None
            and not self._votes_writer.busy
        ):
            logfire.debug("User votes already durable, skipping write", key=self.votes_key)
            return
        self._latest_votes = ledger
        self._schedule(self._votes_writer, self.votes_key)

    def _schedule(self, writer: Debouncer, key: str) -> None:
        try:
            writer.trigger()
        except RuntimeError as e:
            # No running event loop; the snapshot stays queued for flush()
            logfire.warn("Write deferred until flush", key=key, error=str(e))

    async def _write_latest_comments(self) -> None:
        state, self._latest_comments = self._latest_comments, None
        if state is not None:
            await self.save_comments(state)

    async def _write_latest_votes(self) -> None:
        ledger, self._latest_votes = self._latest_votes, None
        if ledger is not None:
            await self.save_votes(ledger)

    async def flush(self) -> None:
        """Write pending snapshots immediately and wait for in-flight writes."""
        with logfire.span("snapshot_persister.flush"):
            await self._comments_writer.flush()
            await self._votes_writer.flush()
            # Snapshots observed without a running loop have no timer
            if self._latest_comments is not None:
                await self._write_latest_comments()
            if self._latest_votes is not None:
                await self._write_latest_votes()

    async def clear(self) -> None:
        """Drop pending writes and empty both storage slots."""
        self._comments_writer.cancel()
        self._votes_writer.cancel()
        self._latest_comments = None
        self._latest_votes = None
        self._durable_comments = None
        self._durable_votes = None

        for key in (self.comments_key, self.votes_key):
            try:
                await self.storage.remove(key)
            except StorageError as e:
                logfire.error("Failed to clear snapshot", key=key, error=str(e))
        logfire.info("Storage cleared", keys=[self.comments_key, self.votes_key])
