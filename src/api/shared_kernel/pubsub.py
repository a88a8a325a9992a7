"""In-process publish/subscribe primitives.

A small, storage-agnostic notification channel. Publishers push events
synchronously to every subscriber registered at publish time; subscribers
detach through the returned Subscription handle.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

E = TypeVar("E")


class Subscription:
    """Handle returned by subscribe(); detaches the listener when closed."""

    def __init__(self, unsubscribe: Callable[[], None]) -> None:
        self._unsubscribe = unsubscribe
        self._active = True

    @property
    def active(self) -> bool:
        """Whether the listener is still attached."""
        return self._active

    def close(self) -> None:
        """Detach the listener. Safe to call more than once."""
        if self._active:
            self._active = False
            self._unsubscribe()


class Broadcaster(Generic[E]):
    """Synchronous fan-out of events to registered listeners.

    Listeners are invoked in registration order. The listener list is
    snapshotted before delivery, so listeners may subscribe or unsubscribe
    while an event is being delivered.
    """

    def __init__(self) -> None:
        self._listeners: list[Callable[[E], None]] = []

    def subscribe(self, listener: Callable[[E], None]) -> Subscription:
        """Register a listener and return its subscription handle."""
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return Subscription(_remove)

    def publish(self, event: E) -> None:
        """Deliver an event to every listener registered right now."""
        for listener in list(self._listeners):
            listener(event)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)
