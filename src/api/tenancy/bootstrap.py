"""Assembly of the tenancy subsystem for one application shell.

The shell owns exactly one TenantContextManager per execution context.
It is created explicitly at application start, injected into consumers
and torn down when the application shuts down.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any

from infrastructure.settings import DashboardSettings
from tenancy.application.services import TenantContextManager
from tenancy.application.tenant_scoped_cache import TenantScopedCache
from tenancy.domain.api_routing import ApiUrlBuilder
from tenancy.infrastructure.api_client import TenantApiClient
from tenancy.infrastructure.branding import InMemoryBrandingSink
from tenancy.infrastructure.observability import (
    ApiRoutingProbe,
    DefaultApiRoutingProbe,
    DefaultSelectionStoreProbe,
    SelectionStoreProbe,
)
from tenancy.infrastructure.reload_scheduler import AsyncioReloadScheduler
from tenancy.infrastructure.selection_store import BackendSelectedTenantStore
from tenancy.infrastructure.storage import (
    InMemoryKeyValueBackend,
    JsonFileKeyValueBackend,
)
from tenancy.infrastructure.tenant_registry import get_default_registry
from tenancy.ports.persistence import KeyValueBackend

FALLBACK_API_BASE_URL = "https://react-api-script.onrender.com"


def resolve_api_base_url(
    settings: DashboardSettings,
    probe: ApiRoutingProbe | None = None,
) -> str:
    """Return the configured base URL, or the fallback with a warning."""
    if settings.api_base_url and settings.api_base_url.strip():
        return settings.api_base_url.strip()

    (probe or DefaultApiRoutingProbe()).base_url_missing(fallback=FALLBACK_API_BASE_URL)
    return FALLBACK_API_BASE_URL


def create_backend(settings: DashboardSettings) -> KeyValueBackend:
    """Create the key/value backend selected by settings."""
    if settings.storage_backend == "file":
        return JsonFileKeyValueBackend(settings.storage_path)
    return InMemoryKeyValueBackend()


@dataclass
class TenancyShell:
    """Everything one execution context needs around its tenant context."""

    context: TenantContextManager
    backend: KeyValueBackend
    store: BackendSelectedTenantStore
    branding: InMemoryBrandingSink
    reload_scheduler: AsyncioReloadScheduler
    url_builder: ApiUrlBuilder
    api_client: TenantApiClient
    response_cache: TenantScopedCache[Any]
    poll_interval_seconds: float = 2.0
    store_probe: SelectionStoreProbe = field(default_factory=DefaultSelectionStoreProbe)
    _poll_task: asyncio.Task[None] | None = field(default=None, init=False, repr=False)

    async def start(self) -> None:
        """Initialize the tenant context and start change polling if needed."""
        self.context.initialize()
        if isinstance(self.backend, JsonFileKeyValueBackend):
            self._poll_task = asyncio.create_task(self._poll_loop())

    async def stop(self) -> None:
        """Tear down listeners, pending reloads and background polling."""
        if self._poll_task is not None:
            self._poll_task.cancel()
            try:
                await self._poll_task
            except asyncio.CancelledError:
                pass
            self._poll_task = None

        self.context.close()
        self.reload_scheduler.cancel_all()
        self.response_cache.close()
        await self.api_client.aclose()

    async def _poll_loop(self) -> None:
        """Detect selections written by other processes sharing the file."""
        assert isinstance(self.backend, JsonFileKeyValueBackend)
        while True:
            await asyncio.sleep(self.poll_interval_seconds)
            try:
                self.backend.poll()
            except (OSError, ValueError) as e:
                self.store_probe.external_poll_failed(e)


def build_tenancy_shell(
    settings: DashboardSettings,
    *,
    backend: KeyValueBackend | None = None,
    loop: asyncio.AbstractEventLoop | None = None,
    context_id: str | None = None,
) -> TenancyShell:
    """Wire the tenancy subsystem from settings.

    Args:
        settings: Dashboard settings
        backend: Shared backend to use instead of the configured one
        loop: Event loop for reload scheduling (running loop if omitted)
        context_id: Identifier of this execution context (generated if omitted)

    Returns:
        A TenancyShell; call start() before serving requests
    """
    registry = get_default_registry(settings.default_tenant)
    backend = backend or create_backend(settings)
    store_probe = DefaultSelectionStoreProbe()
    store = BackendSelectedTenantStore(backend, context_id=context_id, probe=store_probe)
    branding = InMemoryBrandingSink()
    scheduler = AsyncioReloadScheduler(loop)

    context = TenantContextManager(
        registry,
        store,
        branding=branding,
        reload_scheduler=scheduler,
        reload_delay_seconds=settings.reload_delay_seconds,
        reload_on_external_change=settings.reload_on_external_change,
    )

    url_builder = ApiUrlBuilder(resolve_api_base_url(settings))
    response_cache: TenantScopedCache[Any] = TenantScopedCache(context)
    api_client = TenantApiClient(context, url_builder, cache=response_cache)

    return TenancyShell(
        context=context,
        backend=backend,
        store=store,
        branding=branding,
        reload_scheduler=scheduler,
        url_builder=url_builder,
        api_client=api_client,
        response_cache=response_cache,
        poll_interval_seconds=settings.storage_poll_interval_seconds,
        store_probe=store_probe,
    )
