"""Ports for the application shell around the tenant context.

The tenant context drives two shell side effects: applying tenant
branding (document title and icon) and scheduling a full reload after an
explicit switch.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from tenancy.domain.value_objects import TenantConfig


@runtime_checkable
class BrandingSink(Protocol):
    """Applies a tenant's branding to the shell chrome."""

    def apply(self, config: TenantConfig) -> None:
        """Apply title and icon for the given tenant."""
        ...


@runtime_checkable
class ScheduledReload(Protocol):
    """Handle to a reload that has been scheduled but may not have run."""

    def cancel(self) -> None:
        """Prevent the reload from running if it has not run yet."""
        ...


@runtime_checkable
class ReloadScheduler(Protocol):
    """Schedules a full reload of the shell after a delay."""

    def schedule(self, delay_seconds: float, reload: Callable[[], None]) -> ScheduledReload:
        """Run reload once after delay_seconds."""
        ...

    def cancel_all(self) -> None:
        """Cancel every pending reload (process teardown)."""
        ...
