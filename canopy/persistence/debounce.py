"""Debounced scheduling of async actions.

A ``Debouncer`` owns a single pending-timer slot. Every ``trigger()`` cancels
the pending timer and arms a new one, so a burst of triggers collapses into
one run of the action once the burst has been quiet for ``delay_ms``.
"""

import asyncio
from typing import Awaitable, Callable, Optional

import logfire


class Debouncer:
    """Timer-reset scheduler for a single async action.

    The action runs as a fire-and-forget task on the running event loop.
    Runs never overlap: a run that fires while the previous one is still in
    flight waits for it. Exceptions escaping the action are logged and
    dropped.
    """

    def __init__(
        self,
        delay_ms: int,
        action: Callable[[], Awaitable[None]],
        *,
        name: str = "debouncer",
    ) -> None:
        """Initialize debouncer.

        Args:
            delay_ms: Quiet window in milliseconds
            action: Coroutine function to run when the window elapses
            name: Label used in log events
        """
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        self.delay_ms = delay_ms
        self.name = name
        self._action = action
        self._handle: Optional[asyncio.TimerHandle] = None
        self._task: Optional[asyncio.Task[None]] = None
        self._lock = asyncio.Lock()

    @property
    def pending(self) -> bool:
        """Whether a timer is armed and has not fired yet."""
        return self._handle is not None

    @property
    def busy(self) -> bool:
        """Whether a run is armed, queued or still executing."""
        if self._handle is not None or self._lock.locked():
            return True
        return self._task is not None and not self._task.done()

    def trigger(self) -> None:
        """Arm the timer, replacing any pending one.

        Must be called from within a running event loop.
        """
        loop = asyncio.get_running_loop()
        if self._handle is not None:
            self._handle.cancel()
        self._handle = loop.call_later(self.delay_ms / 1000, self._fire)

    def cancel(self) -> None:
        """Drop the pending timer, if any. An in-flight run is not interrupted."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    async def flush(self) -> None:
        """Run a pending action now and wait for any in-flight run."""
        if self._handle is not None:
            self.cancel()
            await self._run()
        if self._task is not None and not self._task.done():
            await self._task

    def _fire(self) -> None:
        self._handle = None
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def _run(self) -> None:
        async with self._lock:
            try:
                await self._action()
            except Exception as e:
                logfire.error(
                    "Debounced action failed",
                    debouncer=self.name,
                    error=str(e),
                    error_type=type(e).__name__,
                    _exc_info=True,
                )
