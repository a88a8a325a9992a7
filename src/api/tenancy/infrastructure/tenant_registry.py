"""Static tenant registry.

Maps tenant keys to their immutable configuration records. Keys are
normalized before lookup, and unknown keys resolve to the default tenant
instead of failing.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from functools import lru_cache
from types import MappingProxyType

from tenancy.domain.catalog import DEFAULT_TENANT_KEY, TENANT_CATALOG
from tenancy.domain.value_objects import (
    Branding,
    BusinessRules,
    TenantConfig,
    TenantOption,
    UISettings,
    normalize_tenant_key,
)
from tenancy.infrastructure.observability import (
    DefaultTenantRegistryProbe,
    TenantRegistryProbe,
)


class TenantRegistry:
    """In-memory registry over a fixed, ordered set of tenant configs.

    Implements the ITenantRegistry protocol.
    """

    def __init__(
        self,
        configs: Iterable[TenantConfig],
        default_key: str,
        probe: TenantRegistryProbe | None = None,
    ) -> None:
        """Initialize the registry.

        Args:
            configs: Tenant configurations in declaration (priority) order
            default_key: Key substituted for unknown keys

        Raises:
            ValueError: If keys are duplicated or default_key is not registered
        """
        by_key: dict[str, TenantConfig] = {}
        for config in configs:
            if config.key in by_key:
                raise ValueError(f"Duplicate tenant key: {config.key}")
            by_key[config.key] = config

        normalized_default = normalize_tenant_key(default_key)
        if normalized_default not in by_key:
            raise ValueError(f"Default tenant {default_key!r} is not registered")

        self._configs: Mapping[str, TenantConfig] = MappingProxyType(by_key)
        self._default_key = normalized_default
        self._probe = probe or DefaultTenantRegistryProbe()

    @property
    def default_key(self) -> str:
        return self._default_key

    def is_registered(self, key: str | None) -> bool:
        return normalize_tenant_key(key) in self._configs

    def resolve_key(self, key: str | None) -> str:
        """Return the normalized key if registered, else the default key."""
        normalized = normalize_tenant_key(key)
        if normalized in self._configs:
            return normalized
        if key is not None:
            self._probe.unknown_tenant_substituted(
                requested=key, substituted=self._default_key
            )
        return self._default_key

    def lookup(self, key: str | None) -> TenantConfig:
        """Return the configuration for key, or the default tenant's."""
        return self._configs[self.resolve_key(key)]

    def keys(self) -> list[str]:
        """Return registered keys in declaration order."""
        return list(self._configs)

    def list(self) -> Sequence[TenantOption]:
        """Return every tenant in declaration order for selector UIs."""
        return [TenantOption(key=key, config=config) for key, config in self._configs.items()]

    def branding(self, key: str | None) -> Branding:
        return self.lookup(key).branding

    def features(self, key: str | None) -> Mapping[str, bool]:
        return self.lookup(key).features

    def is_feature_enabled(self, key: str | None, feature: str) -> bool:
        return self.lookup(key).is_feature_enabled(feature)

    def business_rules(self, key: str | None) -> BusinessRules:
        return self.lookup(key).business_rules

    def ui(self, key: str | None) -> UISettings:
        return self.lookup(key).ui


@lru_cache
def get_default_registry(default_key: str = DEFAULT_TENANT_KEY) -> TenantRegistry:
    """Get the registry over the built-in tenant catalog (cached).

    Falls back to the catalog default when default_key is not registered.
    """
    if normalize_tenant_key(default_key) not in {config.key for config in TENANT_CATALOG}:
        default_key = DEFAULT_TENANT_KEY
    return TenantRegistry(TENANT_CATALOG, default_key=default_key)
