"""Unit tests for TenantScopedCache."""

import pytest

from tenancy.application.services import TenantContextManager
from tenancy.application.tenant_scoped_cache import TenantScopedCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def context(registry, store, context_probe) -> TenantContextManager:
    return TenantContextManager(registry, store, probe=context_probe)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


class TestTenantScopedCache:
    """Tests for tenant-aware cache invalidation."""

    def test_returns_value_for_same_tenant(self, context):
        cache: TenantScopedCache[str] = TenantScopedCache(context)
        cache.set("campaigns", "gcpl data")

        assert cache.get("campaigns") == "gcpl data"

    def test_missing_key_returns_none(self, context):
        assert TenantScopedCache(context).get("campaigns") is None

    def test_missing_key_returns_default(self, context):
        missing = object()
        assert TenantScopedCache(context).get("campaigns", missing) is missing

    def test_cached_none_is_distinct_from_miss(self, context):
        cache: TenantScopedCache[None] = TenantScopedCache(context)
        cache.set("goals", None)

        assert cache.get("goals", "miss") is None

    def test_value_for_superseded_state_is_dropped(self, context):
        cache: TenantScopedCache[str] = TenantScopedCache(context)
        captured = context.state
        context.switch("samsonite", force_reload=False)

        stored = cache.set("goals", "gcpl data", state=captured)

        assert stored is False
        assert cache.get("goals") is None

    def test_value_for_current_state_is_stored(self, context):
        cache: TenantScopedCache[str] = TenantScopedCache(context)

        assert cache.set("goals", "gcpl data", state=context.state) is True
        assert cache.get("goals") == "gcpl data"

    def test_switch_invalidates_entries(self, context):
        cache: TenantScopedCache[str] = TenantScopedCache(context)
        cache.set("campaigns", "gcpl data")

        context.switch("samsonite", force_reload=False)

        assert cache.get("campaigns") is None
        assert len(cache) == 0

    def test_refresh_invalidates_entries(self, context):
        cache: TenantScopedCache[str] = TenantScopedCache(context)
        cache.set("campaigns", "gcpl data")

        context.refresh()

        assert cache.get("campaigns") is None

    def test_entry_from_older_generation_is_stale(self, context):
        cache: TenantScopedCache[str] = TenantScopedCache(context)
        cache.set("campaigns", "gcpl data")
        # Bypass the change listener to check the generation tag alone
        cache._subscription.close()

        context.switch("samsonite", force_reload=False)
        context.switch("gcpl", force_reload=False)

        assert cache.get("campaigns") is None

    def test_entries_expire(self, context, clock: FakeClock):
        cache: TenantScopedCache[str] = TenantScopedCache(context, ttl_seconds=10, clock=clock)
        cache.set("campaigns", "gcpl data")

        clock.now += 9
        assert cache.get("campaigns") == "gcpl data"

        clock.now += 1
        assert cache.get("campaigns") is None

    def test_per_entry_ttl_overrides_default(self, context, clock: FakeClock):
        cache: TenantScopedCache[str] = TenantScopedCache(context, ttl_seconds=10, clock=clock)
        cache.set("campaigns", "gcpl data", ttl_seconds=1)

        clock.now += 1

        assert cache.get("campaigns") is None

    def test_without_ttl_entries_do_not_expire(self, context, clock: FakeClock):
        cache: TenantScopedCache[str] = TenantScopedCache(context, clock=clock)
        cache.set("campaigns", "gcpl data")

        clock.now += 1_000_000

        assert cache.get("campaigns") == "gcpl data"

    def test_close_stops_listening(self, context):
        cache: TenantScopedCache[str] = TenantScopedCache(context)
        cache.set("campaigns", "gcpl data")

        cache.close()

        assert len(cache) == 0
        assert cache._subscription.active is False
