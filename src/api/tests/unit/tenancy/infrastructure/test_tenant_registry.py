"""Unit tests for the static tenant registry."""

from unittest.mock import MagicMock

import pytest

from tenancy.domain.catalog import BOWLERS, GCPL, SAMSONITE, TENANT_CATALOG
from tenancy.domain.value_objects import Feature
from tenancy.infrastructure.tenant_registry import TenantRegistry, get_default_registry
from tenancy.ports.repositories import ITenantRegistry


class TestTenantRegistryConstruction:
    """Tests for registry construction."""

    def test_implements_protocol(self, registry: TenantRegistry):
        assert isinstance(registry, ITenantRegistry)

    def test_rejects_duplicate_keys(self):
        with pytest.raises(ValueError, match="Duplicate"):
            TenantRegistry([GCPL, GCPL], default_key="gcpl")

    def test_rejects_unregistered_default(self):
        with pytest.raises(ValueError, match="not registered"):
            TenantRegistry([GCPL], default_key="samsonite")

    def test_default_key_is_normalized(self):
        registry = TenantRegistry(TENANT_CATALOG, default_key=" GCPL ")
        assert registry.default_key == "gcpl"


class TestLookup:
    """Tests for lookup and key resolution."""

    def test_lookup_registered_key(self, registry: TenantRegistry):
        assert registry.lookup("samsonite") is SAMSONITE

    def test_lookup_is_case_insensitive(self, registry: TenantRegistry):
        assert registry.lookup("Samsonite") is SAMSONITE
        assert registry.lookup("  BOWLERS ") is BOWLERS

    def test_unknown_key_returns_default(self, registry: TenantRegistry):
        assert registry.lookup("acme") is GCPL

    @pytest.mark.parametrize("key", [None, "", "   "])
    def test_missing_key_returns_default(self, registry: TenantRegistry, key):
        assert registry.lookup(key) is GCPL

    def test_unknown_key_is_reported(
        self, registry: TenantRegistry, registry_probe: MagicMock
    ):
        registry.resolve_key("acme")

        registry_probe.unknown_tenant_substituted.assert_called_once_with(
            requested="acme", substituted="gcpl"
        )

    def test_none_is_not_reported(self, registry: TenantRegistry, registry_probe: MagicMock):
        registry.resolve_key(None)

        registry_probe.unknown_tenant_substituted.assert_not_called()

    def test_is_registered(self, registry: TenantRegistry):
        assert registry.is_registered("Bunge") is True
        assert registry.is_registered("acme") is False
        assert registry.is_registered(None) is False


class TestListing:
    """Tests for selector listing."""

    def test_list_preserves_declaration_order(self, registry: TenantRegistry):
        options = registry.list()

        assert [option.key for option in options] == ["gcpl", "samsonite", "bowlers", "bunge"]
        assert options[1].config is SAMSONITE

    def test_list_options_carry_label_and_value(self, registry: TenantRegistry):
        option = registry.list()[0]

        assert option.label == "GCPL Analytics"
        assert option.value == "GCPL"

    def test_keys(self, registry: TenantRegistry):
        assert registry.keys() == ["gcpl", "samsonite", "bowlers", "bunge"]


class TestHelpers:
    """Tests for per-tenant convenience accessors."""

    def test_branding(self, registry: TenantRegistry):
        assert registry.branding("samsonite") is SAMSONITE.branding

    def test_features(self, registry: TenantRegistry):
        assert registry.features("bowlers")["negativeKeywords"] is False

    def test_is_feature_enabled(self, registry: TenantRegistry):
        assert registry.is_feature_enabled("gcpl", Feature.NEGATIVE_KEYWORDS) is True
        assert registry.is_feature_enabled("bowlers", Feature.NEGATIVE_KEYWORDS) is False
        assert registry.is_feature_enabled("gcpl", "unknownFeature") is False

    def test_business_rules_and_ui(self, registry: TenantRegistry):
        assert registry.business_rules("bowlers") is BOWLERS.business_rules
        assert registry.ui("bowlers").max_date_range_days == 180


class TestGetDefaultRegistry:
    """Tests for the cached catalog registry."""

    def test_uses_requested_default(self):
        assert get_default_registry("samsonite").default_key == "samsonite"

    def test_unknown_default_falls_back_to_catalog_default(self):
        assert get_default_registry("acme").default_key == "gcpl"

    def test_is_cached(self):
        assert get_default_registry("gcpl") is get_default_registry("gcpl")
