"""Cache whose entries never outlive the tenant they were stored for.

Entries are tagged with the tenant key and the context generation at the
time they were stored. A published tenant change bumps the generation, so
no entry stored before the change can be returned after it.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from shared_kernel.pubsub import Subscription
from tenancy.application.services import TenantContextManager
from tenancy.domain.value_objects import ActiveTenantState, TenantChanged

V = TypeVar("V")
D = TypeVar("D")


@dataclass(frozen=True)
class _Entry(Generic[V]):
    value: V
    tenant_key: str
    generation: int
    expires_at: float | None


class TenantScopedCache(Generic[V]):
    """Key/value cache invalidated on every tenant change.

    Example:
        cache = TenantScopedCache[dict](context, ttl_seconds=300)
        cache.set(url, payload)
        cache.get(url)  # None once the tenant has been switched
    """

    def __init__(
        self,
        context: TenantContextManager,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._context = context
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, _Entry[V]] = {}
        self._subscription: Subscription = context.subscribe(self._on_tenant_changed)

    def get(self, key: str, default: D | None = None) -> V | D | None:
        """Return the cached value, or default if missing, expired or stale.

        Pass a sentinel as default to tell a cached None from a miss.
        """
        entry = self._entries.get(key)
        if entry is None:
            return default

        state = self._context.state
        stale = entry.tenant_key != state.tenant_key or entry.generation != state.generation
        expired = entry.expires_at is not None and self._clock() >= entry.expires_at
        if stale or expired:
            del self._entries[key]
            return default
        return entry.value

    def set(
        self,
        key: str,
        value: V,
        ttl_seconds: float | None = None,
        state: ActiveTenantState | None = None,
    ) -> bool:
        """Store a value for the active tenant.

        Args:
            state: Tenant state the value was produced for. A value
                fetched before a tenant change is dropped instead of
                being tagged with the newer tenant. Defaults to the
                current state.

        Returns:
            True if the value was stored
        """
        current = self._context.state
        if state is None:
            state = current
        elif (state.tenant_key, state.generation) != (current.tenant_key, current.generation):
            return False

        ttl = ttl_seconds if ttl_seconds is not None else self._ttl_seconds
        self._entries[key] = _Entry(
            value=value,
            tenant_key=state.tenant_key,
            generation=state.generation,
            expires_at=self._clock() + ttl if ttl is not None else None,
        )
        return True

    def clear(self) -> None:
        self._entries.clear()

    def close(self) -> None:
        """Stop listening for tenant changes and drop every entry."""
        self._subscription.close()
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def _on_tenant_changed(self, event: TenantChanged) -> None:
        self._entries.clear()
