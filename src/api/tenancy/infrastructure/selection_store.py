"""Selected-tenant store backed by a shared key/value backend.

One instance belongs to one execution context. Writes are tagged with the
context id so that storage events caused by this context are not reported
back to it as external changes.
"""

from __future__ import annotations

from collections.abc import Callable
from uuid import uuid4

from shared_kernel.pubsub import Subscription
from tenancy.infrastructure.observability import (
    DefaultSelectionStoreProbe,
    SelectionStoreProbe,
)
from tenancy.ports.exceptions import TenantPersistenceError
from tenancy.ports.persistence import SELECTED_TENANT_KEY, KeyValueBackend, StorageChange


class BackendSelectedTenantStore:
    """SelectedTenantStore implementation over a KeyValueBackend."""

    def __init__(
        self,
        backend: KeyValueBackend,
        context_id: str | None = None,
        storage_key: str = SELECTED_TENANT_KEY,
        probe: SelectionStoreProbe | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            backend: Shared backend holding the selection
            context_id: Identifier of the owning execution context
                (generated when omitted)
            storage_key: Key the selection is stored under
            probe: Optional domain probe for observability
        """
        self._backend = backend
        self._context_id = context_id or uuid4().hex
        self._storage_key = storage_key
        self._probe = probe or DefaultSelectionStoreProbe()

    @property
    def context_id(self) -> str:
        return self._context_id

    def read_selected(self) -> str | None:
        try:
            value = self._backend.get(self._storage_key)
        except (OSError, ValueError) as e:
            self._probe.selection_read_failed(e)
            raise TenantPersistenceError(f"Could not read selected tenant: {e}") from e

        if value is None or not value.strip():
            return None
        return value

    def write_selected(self, key: str) -> None:
        try:
            self._backend.set(self._storage_key, key, origin=self._context_id)
        except (OSError, ValueError) as e:
            self._probe.selection_write_failed(key, e)
            raise TenantPersistenceError(f"Could not persist selected tenant: {e}") from e

        self._probe.selection_written(key)

    def on_external_change(
        self, callback: Callable[[str | None], None]
    ) -> Subscription:
        def _listener(change: StorageChange) -> None:
            if change.key != self._storage_key:
                return
            if change.origin is not None and change.origin == self._context_id:
                return
            self._probe.external_change_observed(change.new_value, change.origin)
            callback(change.new_value)

        return self._backend.subscribe(_listener)
