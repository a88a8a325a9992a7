"""Unit tests for TenantContextManager.

Uses in-memory storage shared between managers to stand in for browser
tabs sharing local storage.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from tenancy.application.services import TenantContextManager
from tenancy.domain.api_routing import ApiUrlBuilder
from tenancy.domain.value_objects import ChangeOrigin, Feature, SwitchPhase, TenantChanged
from tenancy.infrastructure.branding import InMemoryBrandingSink
from tenancy.infrastructure.selection_store import BackendSelectedTenantStore
from tenancy.infrastructure.storage import InMemoryKeyValueBackend


class FlakyBackend(InMemoryKeyValueBackend):
    """In-memory backend whose reads or writes can be made to fail."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        super().__init__(initial)
        self.fail_reads = False
        self.fail_writes = False
        self.writes: list[str] = []

    def get(self, key: str) -> str | None:
        if self.fail_reads:
            raise OSError("storage unavailable")
        return super().get(key)

    def set(self, key: str, value: str, origin: str | None = None) -> None:
        if self.fail_writes:
            raise OSError("quota exceeded")
        self.writes.append(value)
        super().set(key, value, origin)


@pytest.fixture
def flaky_backend() -> FlakyBackend:
    return FlakyBackend()


@pytest.fixture
def make_manager(registry, reload_scheduler, branding, context_probe):
    """Build managers sharing one backend, each with its own context id."""

    def _make(
        backend: InMemoryKeyValueBackend,
        context_id: str = "tab-a",
        **kwargs,
    ) -> TenantContextManager:
        store = BackendSelectedTenantStore(backend, context_id=context_id, probe=MagicMock())
        kwargs.setdefault("branding", branding)
        kwargs.setdefault("reload_scheduler", reload_scheduler)
        kwargs.setdefault("probe", context_probe)
        return TenantContextManager(registry, store, **kwargs)

    return _make


@pytest.fixture
def manager(make_manager, flaky_backend) -> TenantContextManager:
    return make_manager(flaky_backend)


class TestInitialize:
    """Tests for resolving the initial tenant."""

    def test_defaults_to_gcpl_without_selection(self, manager: TenantContextManager):
        assert manager.current_key == "gcpl"
        assert manager.is_loading is False
        assert manager.last_error is None
        assert manager.phase == SwitchPhase.IDLE

    def test_uses_persisted_selection(self, make_manager):
        manager = make_manager(FlakyBackend({"selectedClient": "samsonite"}))
        assert manager.current_key == "samsonite"

    def test_persisted_selection_is_normalized(self, make_manager):
        manager = make_manager(FlakyBackend({"selectedClient": " Bunge "}))
        assert manager.current_key == "bunge"

    def test_unknown_persisted_selection_falls_back_to_default(self, make_manager):
        manager = make_manager(FlakyBackend({"selectedClient": "acme"}))
        assert manager.current_key == "gcpl"

    def test_unreadable_selection_falls_back_to_default(self, make_manager, context_probe):
        backend = FlakyBackend({"selectedClient": "samsonite"})
        backend.fail_reads = True

        manager = make_manager(backend)

        assert manager.current_key == "gcpl"
        context_probe.initial_read_failed.assert_called_once()

    def test_initialization_is_lazy_and_idempotent(self, manager, context_probe):
        context_probe.context_initialized.assert_not_called()

        first = manager.initialize()
        second = manager.initialize()

        assert first is second
        context_probe.context_initialized.assert_called_once_with(
            tenant_key="gcpl", persisted=None
        )

    def test_initialization_applies_branding(self, manager, branding: InMemoryBrandingSink):
        manager.initialize()

        assert branding.document_title == "GCPL Analytics"
        assert branding.favicon == manager.current_config.branding.favicon

    def test_initialization_does_not_write(self, manager, flaky_backend: FlakyBackend):
        manager.initialize()
        assert flaky_backend.writes == []


class TestSwitch:
    """Tests for explicit tenant switches."""

    def test_switch_publishes_new_tenant(self, manager: TenantContextManager):
        state = manager.switch("samsonite")

        assert state.tenant_key == "samsonite"
        assert manager.current_key == "samsonite"
        assert manager.current_config.display_name == "Samsonite Analytics"
        assert manager.is_loading is False
        assert manager.last_error is None
        assert manager.phase == SwitchPhase.IDLE

    def test_switch_persists_selection(self, manager, flaky_backend: FlakyBackend):
        manager.switch("Samsonite")

        assert flaky_backend.writes == ["samsonite"]
        assert flaky_backend.get("selectedClient") == "samsonite"

    def test_samsonite_features_and_urls(self, manager: TenantContextManager):
        manager.switch("samsonite")
        builder = ApiUrlBuilder("https://api.example.com")

        assert manager.has_feature("negativeKeywords") is True
        assert builder.build_url("keyword", manager.current_key).startswith(
            "https://api.example.com/samsonite/"
        )
        assert (
            builder.build_url("goals-add", manager.current_key)
            == "https://api.example.com/app/goals-add"
        )

    def test_bowlers_features(self, manager: TenantContextManager):
        manager.switch("bowlers")

        assert manager.has_feature("negativeKeywords") is False
        assert manager.has_feature(Feature.CAMPAIGNS) is True

    def test_switch_to_current_tenant_is_noop(
        self, manager, flaky_backend: FlakyBackend, reload_scheduler, context_probe
    ):
        before = manager.state

        after = manager.switch("GCPL")

        assert after is before
        assert flaky_backend.writes == []
        assert reload_scheduler.scheduled == []
        context_probe.switch_noop.assert_called_once_with(tenant_key="gcpl")

    def test_unknown_tenant_resolving_to_current_is_noop(
        self, manager, flaky_backend: FlakyBackend
    ):
        before = manager.state

        assert manager.switch("acme") is before
        assert flaky_backend.writes == []

    def test_unknown_tenant_switches_to_default(self, make_manager):
        backend = FlakyBackend({"selectedClient": "bunge"})
        manager = make_manager(backend)

        manager.switch("acme")

        assert manager.current_key == "gcpl"
        assert backend.writes == ["gcpl"]

    def test_switch_bumps_generation(self, manager: TenantContextManager):
        generation = manager.generation

        manager.switch("bunge")

        assert manager.generation == generation + 1

    def test_switch_applies_branding(self, manager, branding: InMemoryBrandingSink):
        manager.switch("bunge")

        assert branding.document_title == "Bunge Analytics"
        assert branding.tenant_key == "bunge"

    def test_switch_is_reported(self, manager, context_probe):
        manager.switch("bunge")

        context_probe.switch_succeeded.assert_called_once_with(
            from_key="gcpl", to_key="bunge", display_name="Bunge Analytics"
        )


class TestSwitchFailure:
    """Tests for persistence failures during a switch."""

    def test_failed_write_reverts_and_sets_error(
        self, make_manager, flaky_backend: FlakyBackend
    ):
        flaky_backend.set("selectedClient", "samsonite")
        manager = make_manager(flaky_backend)
        manager.initialize()
        flaky_backend.fail_writes = True

        state = manager.switch("gcpl")

        assert state.tenant_key == "samsonite"
        assert manager.current_key == "samsonite"
        assert manager.last_error
        assert "gcpl" in manager.last_error
        assert manager.is_loading is False
        assert manager.phase == SwitchPhase.IDLE

    def test_failed_switch_keeps_generation_and_branding(
        self, manager, flaky_backend: FlakyBackend, branding: InMemoryBrandingSink
    ):
        manager.initialize()
        generation = manager.generation
        flaky_backend.fail_writes = True

        manager.switch("bunge")

        assert manager.generation == generation
        assert branding.document_title == "GCPL Analytics"

    def test_failed_switch_schedules_no_reload(
        self, manager, flaky_backend: FlakyBackend, reload_scheduler
    ):
        flaky_backend.fail_writes = True

        manager.switch("bunge")

        assert reload_scheduler.scheduled == []

    def test_failed_switch_publishes_nothing(self, manager, flaky_backend: FlakyBackend):
        events: list[TenantChanged] = []
        manager.subscribe(events.append)
        flaky_backend.fail_writes = True

        manager.switch("bunge")

        assert events == []

    def test_failure_is_reported(self, manager, flaky_backend: FlakyBackend, context_probe):
        flaky_backend.fail_writes = True

        manager.switch("bunge")

        context_probe.switch_failed.assert_called_once()
        assert context_probe.switch_failed.call_args.kwargs["requested"] == "bunge"

    def test_error_persists_until_cleared(self, manager, flaky_backend: FlakyBackend):
        flaky_backend.fail_writes = True
        manager.switch("bunge")

        manager.has_feature("campaigns")
        assert manager.last_error is not None

        manager.clear_error()
        assert manager.last_error is None

    def test_next_switch_clears_error(self, manager, flaky_backend: FlakyBackend):
        flaky_backend.fail_writes = True
        manager.switch("bunge")
        flaky_backend.fail_writes = False

        manager.switch("bunge")

        assert manager.current_key == "bunge"
        assert manager.last_error is None

    def test_clear_error_without_error_is_silent(self, manager, context_probe):
        manager.clear_error()
        context_probe.error_cleared.assert_not_called()


class TestReload:
    """Tests for the reload scheduled after a switch."""

    def test_switch_schedules_reload(self, manager, reload_scheduler):
        manager.switch("samsonite")

        assert len(reload_scheduler.pending) == 1
        assert reload_scheduler.pending[0].delay_seconds == pytest.approx(0.1)

    def test_reload_can_be_skipped(self, manager, reload_scheduler):
        manager.switch("samsonite", force_reload=False)

        assert reload_scheduler.scheduled == []

    def test_reload_runs_after_state_is_published(self, make_manager, flaky_backend):
        seen: list[tuple[str, bool]] = []
        manager = make_manager(flaky_backend, on_reload=lambda: None)
        manager.subscribe(lambda event: seen.append((event.client, manager.is_loading)))

        manager.switch("samsonite")

        # Listeners observe the switch while it is still loading
        assert seen == [("samsonite", True)]
        assert manager.is_loading is False

    def test_custom_reload_hook(self, make_manager, flaky_backend, reload_scheduler):
        reloads: list[str] = []
        manager = make_manager(flaky_backend, on_reload=lambda: reloads.append("reload"))

        manager.switch("samsonite")
        reload_scheduler.run_pending()

        assert reloads == ["reload"]

    def test_default_reload_resyncs_and_invalidates(
        self, manager, reload_scheduler, context_probe
    ):
        manager.switch("samsonite")
        generation = manager.generation

        reload_scheduler.run_pending()

        assert manager.current_key == "samsonite"
        assert manager.generation == generation + 1
        context_probe.reload_performed.assert_called_once_with(tenant_key="samsonite")

    def test_pending_reload_keeps_error_from_failed_switch(
        self, manager, flaky_backend: FlakyBackend, reload_scheduler
    ):
        manager.switch("samsonite")
        flaky_backend.fail_writes = True
        manager.switch("bunge")
        error = manager.last_error
        assert error is not None

        reload_scheduler.run_pending()

        assert manager.current_key == "samsonite"
        assert manager.last_error == error

    def test_newer_switch_supersedes_pending_reload(self, manager, reload_scheduler):
        manager.switch("samsonite")
        manager.switch("bunge")

        assert len(reload_scheduler.scheduled) == 2
        assert reload_scheduler.scheduled[0].cancelled is True
        assert len(reload_scheduler.pending) == 1

    def test_without_scheduler_reload_is_skipped(self, make_manager, flaky_backend):
        manager = make_manager(flaky_backend, reload_scheduler=None)

        manager.switch("samsonite")

        assert manager.current_key == "samsonite"

    def test_close_cancels_pending_reload(self, manager, reload_scheduler):
        manager.switch("samsonite")

        manager.close()

        assert reload_scheduler.pending == []

    def test_reload_after_close_is_ignored(self, make_manager, flaky_backend, reload_scheduler):
        reloads: list[str] = []
        manager = make_manager(flaky_backend, on_reload=lambda: reloads.append("reload"))
        manager.switch("samsonite")
        pending = reload_scheduler.pending[0]

        manager.close()
        pending.reload()

        assert reloads == []


class TestExternalChange:
    """Tests for switches made by another execution context."""

    def test_external_change_is_applied_without_writing(self, make_manager, flaky_backend):
        tab_a = make_manager(flaky_backend, context_id="tab-a")
        tab_b = make_manager(flaky_backend, context_id="tab-b")
        tab_a.initialize()
        tab_b.initialize()

        tab_b.switch("bunge")

        assert tab_a.current_key == "bunge"
        # Only tab-b wrote the selection
        assert flaky_backend.writes == ["bunge"]

    def test_simulated_notification(self, manager, flaky_backend: FlakyBackend):
        manager.initialize()

        flaky_backend.set("selectedClient", "bunge", origin="another-tab")

        assert manager.current_key == "bunge"
        assert flaky_backend.writes == ["bunge"]

    def test_external_change_applies_branding(
        self, manager, flaky_backend: FlakyBackend, branding: InMemoryBrandingSink
    ):
        manager.initialize()

        flaky_backend.set("selectedClient", "bowlers", origin="another-tab")

        assert branding.document_title == "Bowlers Analytics"

    def test_external_change_publishes_with_external_origin(self, manager, flaky_backend):
        events: list[TenantChanged] = []
        manager.subscribe(events.append)
        manager.initialize()

        flaky_backend.set("selectedClient", "bunge", origin="another-tab")

        assert [(e.client, e.origin) for e in events] == [("bunge", ChangeOrigin.EXTERNAL)]

    def test_external_change_does_not_reload_by_default(
        self, manager, flaky_backend, reload_scheduler
    ):
        manager.initialize()

        flaky_backend.set("selectedClient", "bunge", origin="another-tab")

        assert reload_scheduler.scheduled == []

    def test_external_change_can_reload(self, make_manager, flaky_backend, reload_scheduler):
        manager = make_manager(flaky_backend, reload_on_external_change=True)
        manager.initialize()

        flaky_backend.set("selectedClient", "bunge", origin="another-tab")

        assert len(reload_scheduler.pending) == 1

    def test_same_tenant_notification_is_ignored(self, manager, flaky_backend, context_probe):
        manager.initialize()
        generation = manager.generation

        flaky_backend.set("selectedClient", "GCPL", origin="another-tab")

        assert manager.generation == generation
        context_probe.external_change_ignored.assert_called_once_with(tenant_key="gcpl")

    def test_removed_selection_resolves_to_default(self, make_manager):
        backend = FlakyBackend({"selectedClient": "bunge"})
        manager = make_manager(backend)
        manager.initialize()

        backend.remove("selectedClient", origin="another-tab")

        assert manager.current_key == "gcpl"

    def test_unknown_external_key_resolves_to_default(self, make_manager):
        backend = FlakyBackend({"selectedClient": "bunge"})
        manager = make_manager(backend)
        manager.initialize()

        backend.set("selectedClient", "acme", origin="another-tab")

        assert manager.current_key == "gcpl"

    def test_closed_manager_ignores_notifications(self, manager, flaky_backend):
        manager.initialize()
        manager.close()

        flaky_backend.set("selectedClient", "bunge", origin="another-tab")

        assert manager.current_key == "gcpl"


class TestRefresh:
    """Tests for re-syncing from persistence."""

    def test_refresh_picks_up_persisted_value(self, manager, flaky_backend: FlakyBackend):
        manager.initialize()
        # Written without notifying anyone, as a store without events would
        flaky_backend._values["selectedClient"] = "samsonite"

        manager.refresh()

        assert manager.current_key == "samsonite"

    def test_refresh_always_publishes(self, manager):
        events: list[TenantChanged] = []
        manager.subscribe(events.append)
        manager.initialize()

        manager.refresh()

        assert [(e.client, e.origin) for e in events] == [("gcpl", ChangeOrigin.REFRESH)]

    def test_refresh_read_failure_sets_error(self, manager, flaky_backend: FlakyBackend):
        manager.initialize()
        flaky_backend.fail_reads = True

        state = manager.refresh()

        assert state.tenant_key == "gcpl"
        assert state.last_error

    def test_refresh_keeps_error_until_cleared(self, manager, flaky_backend: FlakyBackend):
        flaky_backend.fail_writes = True
        manager.switch("bunge")
        error = manager.last_error

        state = manager.refresh()

        assert state.last_error == error
        manager.clear_error()
        assert manager.refresh().last_error is None

    def test_external_change_clears_error(self, manager, flaky_backend: FlakyBackend):
        flaky_backend.fail_writes = True
        manager.switch("bunge")
        assert manager.last_error is not None

        flaky_backend.fail_writes = False
        flaky_backend.set("selectedClient", "bowlers", origin="tab-b")

        assert manager.current_key == "bowlers"
        assert manager.last_error is None


class TestQueries:
    """Tests for read-only queries."""

    def test_unknown_feature_is_disabled(self, manager: TenantContextManager):
        assert manager.has_feature("teleportation") is False

    def test_is_tenant(self, manager: TenantContextManager):
        assert manager.is_tenant("GCPL") is True
        assert manager.is_tenant("bunge") is False

    def test_available_tenants_in_registry_order(self, manager: TenantContextManager):
        assert [option.key for option in manager.available_tenants()] == [
            "gcpl",
            "samsonite",
            "bowlers",
            "bunge",
        ]


class TestSubscribers:
    """Tests for in-process change broadcasts."""

    def test_listener_receives_client_and_config(self, manager: TenantContextManager):
        events: list[TenantChanged] = []
        manager.subscribe(events.append)

        manager.switch("bunge")

        assert len(events) == 1
        assert events[0].client == "bunge"
        assert events[0].config is manager.current_config
        assert events[0].origin == ChangeOrigin.LOCAL
        assert events[0].generation == manager.generation

    def test_failing_listener_does_not_break_switch(self, manager, context_probe):
        def explode(event: TenantChanged) -> None:
            raise RuntimeError("listener bug")

        manager.subscribe(explode)

        state = manager.switch("bunge")

        assert state.tenant_key == "bunge"
        assert state.last_error is None
        context_probe.listener_failed.assert_called_once()

    def test_unsubscribed_listener_is_not_called(self, manager: TenantContextManager):
        events: list[TenantChanged] = []
        subscription = manager.subscribe(events.append)
        subscription.close()

        manager.switch("bunge")

        assert events == []

    def test_listener_switching_again_wins(self, manager: TenantContextManager):
        def redirect(event: TenantChanged) -> None:
            if event.client == "samsonite":
                manager.switch("bowlers", force_reload=False)

        manager.subscribe(redirect)

        manager.switch("samsonite", force_reload=False)

        assert manager.current_key == "bowlers"
        assert manager.is_loading is False


class TestBranding:
    """Tests for branding side effects."""

    def test_branding_failure_does_not_fail_switch(self, make_manager, flaky_backend, context_probe):
        sink = MagicMock()
        sink.apply.side_effect = RuntimeError("no document")
        manager = make_manager(flaky_backend, branding=sink)

        state = manager.switch("bunge")

        assert state.tenant_key == "bunge"
        assert state.last_error is None
        context_probe.branding_failed.assert_called()

    def test_works_without_branding_sink(self, make_manager, flaky_backend):
        manager = make_manager(flaky_backend, branding=None)

        assert manager.switch("bunge").tenant_key == "bunge"


class TestClose:
    """Tests for teardown."""

    def test_close_is_idempotent(self, manager, context_probe):
        manager.initialize()

        manager.close()
        manager.close()

        context_probe.context_closed.assert_called_once_with(tenant_key="gcpl")
