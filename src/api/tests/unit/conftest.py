"""Unit test fixtures with in-memory tenancy collaborators."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from unittest.mock import MagicMock

import pytest

from tenancy.domain.catalog import TENANT_CATALOG
from tenancy.infrastructure.branding import InMemoryBrandingSink
from tenancy.infrastructure.selection_store import BackendSelectedTenantStore
from tenancy.infrastructure.storage import InMemoryKeyValueBackend
from tenancy.infrastructure.tenant_registry import TenantRegistry


@dataclass
class FakeScheduledReload:
    delay_seconds: float
    reload: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class FakeReloadScheduler:
    """ReloadScheduler that records reloads and runs them on demand."""

    scheduled: list[FakeScheduledReload] = field(default_factory=list)

    def schedule(self, delay_seconds: float, reload: Callable[[], None]) -> FakeScheduledReload:
        entry = FakeScheduledReload(delay_seconds=delay_seconds, reload=reload)
        self.scheduled.append(entry)
        return entry

    def cancel_all(self) -> None:
        for entry in self.scheduled:
            entry.cancel()

    @property
    def pending(self) -> list[FakeScheduledReload]:
        return [entry for entry in self.scheduled if not entry.cancelled]

    def run_pending(self) -> None:
        for entry in self.pending:
            entry.cancelled = True
            entry.reload()


@pytest.fixture
def registry_probe() -> MagicMock:
    return MagicMock()


@pytest.fixture
def registry(registry_probe: MagicMock) -> TenantRegistry:
    """Registry over the built-in catalog with gcpl as default."""
    return TenantRegistry(TENANT_CATALOG, default_key="gcpl", probe=registry_probe)


@pytest.fixture
def backend() -> InMemoryKeyValueBackend:
    """Backend shared by every store created in a test, like one browser."""
    return InMemoryKeyValueBackend()


@pytest.fixture
def store_probe() -> MagicMock:
    return MagicMock()


@pytest.fixture
def store(backend: InMemoryKeyValueBackend, store_probe: MagicMock) -> BackendSelectedTenantStore:
    return BackendSelectedTenantStore(backend, context_id="tab-a", probe=store_probe)


@pytest.fixture
def reload_scheduler() -> FakeReloadScheduler:
    return FakeReloadScheduler()


@pytest.fixture
def branding() -> InMemoryBrandingSink:
    return InMemoryBrandingSink()


@pytest.fixture
def context_probe() -> MagicMock:
    return MagicMock()
