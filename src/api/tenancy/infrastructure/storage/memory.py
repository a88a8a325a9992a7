"""In-memory key/value backend.

Every execution context in the process that shares one backend instance
sees the others' writes as storage events, the way browser tabs share
local storage.
"""

from __future__ import annotations

from collections.abc import Callable

from shared_kernel.pubsub import Broadcaster, Subscription
from tenancy.ports.persistence import StorageChange


class InMemoryKeyValueBackend:
    """Process-local KeyValueBackend implementation."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})
        self._changes: Broadcaster[StorageChange] = Broadcaster()

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str, origin: str | None = None) -> None:
        old_value = self._values.get(key)
        self._values[key] = value
        self._changes.publish(
            StorageChange(key=key, old_value=old_value, new_value=value, origin=origin)
        )

    def remove(self, key: str, origin: str | None = None) -> None:
        """Remove a key, emitting a change with new_value None."""
        if key not in self._values:
            return
        old_value = self._values.pop(key)
        self._changes.publish(
            StorageChange(key=key, old_value=old_value, new_value=None, origin=origin)
        )

    def subscribe(self, listener: Callable[[StorageChange], None]) -> Subscription:
        return self._changes.subscribe(listener)
