"""Persistence protocols for the selected tenant.

Two layers are involved:

- KeyValueBackend: a durable string store shared by every execution
  context, emitting a StorageChange for every write.
- SelectedTenantStore: the adapter one execution context uses to read and
  write its selection and to hear about writes made by *other* contexts.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from shared_kernel.pubsub import Subscription

SELECTED_TENANT_KEY = "selectedClient"


@dataclass(frozen=True)
class StorageChange:
    """Storage event emitted by a backend after a write.

    Attributes:
        key: Storage key that changed
        old_value: Previous value, None if unset
        new_value: New value, None if removed
        origin: Execution context that performed the write, None when the
            writer is unknown (e.g. another process detected by polling)
    """

    key: str
    old_value: str | None
    new_value: str | None
    origin: str | None = None


@runtime_checkable
class KeyValueBackend(Protocol):
    """Durable key/value store shared across execution contexts."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None if never set."""
        ...

    def set(self, key: str, value: str, origin: str | None = None) -> None:
        """Store a value and emit a StorageChange to subscribers."""
        ...

    def subscribe(self, listener: Callable[[StorageChange], None]) -> Subscription:
        """Register for storage events; close the subscription to detach."""
        ...


@runtime_checkable
class SelectedTenantStore(Protocol):
    """Reads and writes the currently selected tenant for one context."""

    @property
    def context_id(self) -> str:
        """Identifier of the execution context owning this adapter."""
        ...

    def read_selected(self) -> str | None:
        """Return the persisted tenant key, or None if never set.

        Raises:
            TenantPersistenceError: If the backing store cannot be read
        """
        ...

    def write_selected(self, key: str) -> None:
        """Persist the selected tenant key, visible to other contexts.

        Raises:
            TenantPersistenceError: If the backing store cannot be written
        """
        ...

    def on_external_change(
        self, callback: Callable[[str | None], None]
    ) -> Subscription:
        """Notify callback with the new value when another context writes it."""
        ...
