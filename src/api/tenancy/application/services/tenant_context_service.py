"""Tenant context manager for the tenancy bounded context.

The single authority for which tenant is active in one execution context.
It mediates reads, explicit switch requests and change notifications from
other contexts, exposes the feature-flag query and drives the reload
handoff after a switch.

State machine:
    Idle(key) --switch(other)--> Switching(key, other)
    Switching --persisted & published--> Idle(other)
    Switching --failure--> Idle(key) with last_error set
    Idle(key) --external change(other)--> Idle(other)
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import replace

from shared_kernel.observability_context import ObservationContext
from shared_kernel.pubsub import Broadcaster, Subscription
from tenancy.application.observability import (
    DefaultTenantContextProbe,
    TenantContextProbe,
)
from tenancy.domain.value_objects import (
    ActiveTenantState,
    ChangeOrigin,
    Feature,
    SwitchPhase,
    TenantChanged,
    TenantConfig,
    TenantOption,
    normalize_tenant_key,
)
from tenancy.ports.exceptions import TenantPersistenceError
from tenancy.ports.persistence import SelectedTenantStore
from tenancy.ports.repositories import ITenantRegistry
from tenancy.ports.shell import BrandingSink, ReloadScheduler, ScheduledReload


class TenantContextManager:
    """Owns the ActiveTenantState of one execution context.

    Construct one instance per application shell and inject it into every
    consumer. State is initialized on first access from the persisted
    selection and published synchronously: once switch() returns, every
    reader observes the new tenant.
    """

    def __init__(
        self,
        registry: ITenantRegistry,
        store: SelectedTenantStore,
        *,
        branding: BrandingSink | None = None,
        reload_scheduler: ReloadScheduler | None = None,
        reload_delay_seconds: float = 0.1,
        reload_on_external_change: bool = False,
        on_reload: Callable[[], None] | None = None,
        probe: TenantContextProbe | None = None,
    ) -> None:
        """Initialize the manager.

        Args:
            registry: Tenant configuration lookup
            store: Persistence adapter for the selected tenant
            branding: Optional sink receiving branding on every change
            reload_scheduler: Optional scheduler for the post-switch reload;
                without one, forced reloads are skipped
            reload_delay_seconds: Grace period before a forced reload
            reload_on_external_change: Also reload when another context
                switched tenant
            on_reload: What a reload does; defaults to reload()
            probe: Optional domain probe for observability
        """
        self._registry = registry
        self._store = store
        self._branding = branding
        self._reload_scheduler = reload_scheduler
        self._reload_delay_seconds = reload_delay_seconds
        self._reload_on_external_change = reload_on_external_change
        self._on_reload = on_reload or self.reload
        self._probe = probe or DefaultTenantContextProbe(
            context=ObservationContext(execution_context_id=store.context_id)
        )

        self._state: ActiveTenantState | None = None
        self._phase = SwitchPhase.IDLE
        self._generation = 0
        self._changes: Broadcaster[TenantChanged] = Broadcaster()
        self._external_subscription: Subscription | None = None
        self._pending_reload: ScheduledReload | None = None
        self._closed = False

    # Published state

    @property
    def state(self) -> ActiveTenantState:
        """Current snapshot; initializes the context on first access."""
        if self._state is None:
            return self.initialize()
        return self._state

    @property
    def current_key(self) -> str:
        return self.state.tenant_key

    @property
    def current_config(self) -> TenantConfig:
        return self.state.config

    @property
    def is_loading(self) -> bool:
        return self.state.is_loading

    @property
    def last_error(self) -> str | None:
        return self.state.last_error

    @property
    def generation(self) -> int:
        return self.state.generation

    @property
    def phase(self) -> SwitchPhase:
        return self._phase

    # Lifecycle

    def initialize(self) -> ActiveTenantState:
        """Resolve the persisted selection and enter Idle.

        An unreadable or unknown selection resolves to the default tenant.
        Calling this again after initialization returns the current state.
        """
        if self._state is not None:
            return self._state

        persisted: str | None = None
        try:
            persisted = self._store.read_selected()
        except TenantPersistenceError as e:
            self._probe.initial_read_failed(e)

        config = self._registry.lookup(persisted)
        self._state = ActiveTenantState(
            tenant_key=config.key,
            config=config,
            generation=self._generation,
        )
        self._apply_branding(config)
        self._external_subscription = self._store.on_external_change(
            self._handle_external_change
        )

        self._probe.context_initialized(tenant_key=config.key, persisted=persisted)
        return self._state

    def close(self) -> None:
        """Detach from change notifications and drop any pending reload."""
        if self._closed:
            return
        self._closed = True

        if self._external_subscription is not None:
            self._external_subscription.close()
            self._external_subscription = None
        if self._pending_reload is not None:
            self._pending_reload.cancel()
            self._pending_reload = None

        self._probe.context_closed(
            tenant_key=self._state.tenant_key if self._state else None
        )

    # Operations

    def switch(self, requested_key: str, force_reload: bool = True) -> ActiveTenantState:
        """Make another tenant active.

        Switching to the tenant that is already active is a no-op. Unknown
        keys resolve to the default tenant. Persistence failures never
        propagate: the previous tenant stays active and last_error is set.

        Args:
            requested_key: Key of the tenant to activate (any case)
            force_reload: Schedule a full reload after publishing

        Returns:
            The state after the switch attempt
        """
        current = self.state
        target_key = self._registry.resolve_key(requested_key)

        if (
            normalize_tenant_key(requested_key) == current.tenant_key
            or target_key == current.tenant_key
        ):
            self._probe.switch_noop(tenant_key=current.tenant_key)
            return current

        self._probe.switch_requested(from_key=current.tenant_key, requested=requested_key)
        self._phase = SwitchPhase.SWITCHING
        self._state = replace(current, is_loading=True, last_error=None)

        try:
            config = self._registry.lookup(target_key)
            self._store.write_selected(config.key)
        except Exception as e:
            self._probe.switch_failed(
                from_key=current.tenant_key, requested=requested_key, error=e
            )
            self._state = replace(
                current,
                is_loading=False,
                last_error=f"Failed to switch to {requested_key}: {e}",
            )
            self._phase = SwitchPhase.IDLE
            return self._state

        self._apply_branding(config)
        self._publish(config, ChangeOrigin.LOCAL, is_loading=True)

        if force_reload:
            self._schedule_reload()

        # A listener may have switched again while we were publishing; the
        # latest published tenant wins.
        self._state = replace(self.state, is_loading=False)
        self._phase = SwitchPhase.IDLE

        self._probe.switch_succeeded(
            from_key=current.tenant_key,
            to_key=config.key,
            display_name=config.display_name,
        )
        return self._state

    def refresh(self) -> ActiveTenantState:
        """Re-sync with the persisted selection and invalidate caches.

        Always publishes, even when the tenant is unchanged, so that every
        tenant-scoped cache is discarded.
        """
        current = self.state
        try:
            persisted = self._store.read_selected()
        except TenantPersistenceError as e:
            self._probe.initial_read_failed(e)
            self._state = replace(current, last_error=f"Failed to refresh tenant: {e}")
            return self._state

        config = self._registry.lookup(persisted)
        self._apply_branding(config)
        self._publish(config, ChangeOrigin.REFRESH, last_error=current.last_error)
        self._probe.context_refreshed(tenant_key=config.key)
        return self.state

    def reload(self) -> None:
        """Full reload of tenant-scoped data for the current selection."""
        state = self.refresh()
        self._probe.reload_performed(tenant_key=state.tenant_key)

    def has_feature(self, feature: str | Feature) -> bool:
        """Return whether a feature is enabled for the active tenant.

        Unrecognized feature names are reported as disabled.
        """
        return self.state.config.is_feature_enabled(feature)

    def is_tenant(self, key: str) -> bool:
        """Return True if key names the active tenant."""
        return normalize_tenant_key(key) == self.current_key

    def available_tenants(self) -> Sequence[TenantOption]:
        """Return every tenant in registry order, for selectors."""
        return self._registry.list()

    def clear_error(self) -> None:
        """Clear the advisory error left by a failed switch."""
        current = self.state
        if current.last_error is None:
            return
        self._state = replace(current, last_error=None)
        self._probe.error_cleared(tenant_key=current.tenant_key)

    def subscribe(self, listener: Callable[[TenantChanged], None]) -> Subscription:
        """Register for in-process tenant change broadcasts.

        Listeners run synchronously after the new state is published.
        Exceptions raised by a listener are reported and do not reach the
        caller that triggered the change.
        """

        def _guarded(event: TenantChanged) -> None:
            try:
                listener(event)
            except Exception as e:
                self._probe.listener_failed(tenant_key=event.client, error=e)

        return self._changes.subscribe(_guarded)

    # Internals

    def _handle_external_change(self, new_value: str | None) -> None:
        if self._closed:
            return

        current = self.state
        target_key = self._registry.resolve_key(new_value)
        if target_key == current.tenant_key:
            self._probe.external_change_ignored(tenant_key=target_key)
            return

        config = self._registry.lookup(target_key)
        self._apply_branding(config)
        self._publish(config, ChangeOrigin.EXTERNAL)
        self._probe.external_change_applied(from_key=current.tenant_key, to_key=config.key)

        if self._reload_on_external_change:
            self._schedule_reload()

    def _publish(
        self,
        config: TenantConfig,
        origin: ChangeOrigin,
        is_loading: bool = False,
        last_error: str | None = None,
    ) -> None:
        self._generation += 1
        self._state = ActiveTenantState(
            tenant_key=config.key,
            config=config,
            is_loading=is_loading,
            last_error=last_error,
            generation=self._generation,
        )
        self._changes.publish(
            TenantChanged(
                client=config.key,
                config=config,
                origin=origin,
                generation=self._generation,
            )
        )

    def _apply_branding(self, config: TenantConfig) -> None:
        if self._branding is None:
            return
        try:
            self._branding.apply(config)
        except Exception as e:
            self._probe.branding_failed(tenant_key=config.key, error=e)

    def _schedule_reload(self) -> None:
        if self._reload_scheduler is None:
            return
        if self._pending_reload is not None:
            self._pending_reload.cancel()

        self._pending_reload = self._reload_scheduler.schedule(
            self._reload_delay_seconds, self._run_reload
        )
        self._probe.reload_scheduled(
            tenant_key=self.state.tenant_key, delay_seconds=self._reload_delay_seconds
        )

    def _run_reload(self) -> None:
        self._pending_reload = None
        if self._closed:
            return
        self._on_reload()
