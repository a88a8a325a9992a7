"""Asyncio-based reload scheduling.

Reloads run as event loop callbacks on the same loop that serves the
shell, so they never race with request handling.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable


class AsyncioScheduledReload:
    """ScheduledReload backed by an asyncio TimerHandle."""

    def __init__(
        self,
        handle: asyncio.TimerHandle,
        on_done: Callable[[AsyncioScheduledReload], None] | None = None,
    ) -> None:
        self._handle = handle
        self._on_done = on_done

    def cancel(self) -> None:
        self._handle.cancel()
        if self._on_done is not None:
            self._on_done(self)

    @property
    def cancelled(self) -> bool:
        return self._handle.cancelled()


class AsyncioReloadScheduler:
    """ReloadScheduler implementation using loop.call_later."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Initialize the scheduler.

        Args:
            loop: Event loop to schedule on; defaults to the running loop at
                the time schedule() is called
        """
        self._loop = loop
        self._pending: list[AsyncioScheduledReload] = []

    def schedule(
        self, delay_seconds: float, reload: Callable[[], None]
    ) -> AsyncioScheduledReload:
        loop = self._loop or asyncio.get_running_loop()
        scheduled: AsyncioScheduledReload

        def _run() -> None:
            self._forget(scheduled)
            reload()

        scheduled = AsyncioScheduledReload(loop.call_later(delay_seconds, _run), self._forget)
        self._pending.append(scheduled)
        return scheduled

    def cancel_all(self) -> None:
        pending, self._pending = self._pending, []
        for scheduled in pending:
            scheduled.cancel()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def _forget(self, scheduled: AsyncioScheduledReload) -> None:
        if scheduled in self._pending:
            self._pending.remove(scheduled)
