"""Repository protocols for the tenancy bounded context."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from tenancy.domain.value_objects import TenantConfig, TenantOption


@runtime_checkable
class ITenantRegistry(Protocol):
    """Read-only lookup of tenant configuration records.

    Lookups never fail: unknown keys resolve to the default tenant so the
    dashboard is never left without a configuration.
    """

    @property
    def default_key(self) -> str:
        """Key of the tenant substituted for unknown keys."""
        ...

    def lookup(self, key: str | None) -> TenantConfig:
        """Return the configuration for a key, or the default tenant's."""
        ...

    def resolve_key(self, key: str | None) -> str:
        """Return the normalized key if registered, else the default key."""
        ...

    def is_registered(self, key: str | None) -> bool:
        """Return True if the normalized key is registered."""
        ...

    def list(self) -> Sequence[TenantOption]:
        """Return every tenant in declaration order."""
        ...
