"""Domain probe for tenant registry lookups."""

from __future__ import annotations

from typing import Protocol

import structlog


class TenantRegistryProbe(Protocol):
    """Domain probe for tenant registry operations."""

    def unknown_tenant_substituted(self, requested: str, substituted: str) -> None:
        """Record that an unregistered key resolved to the default tenant."""
        ...


class DefaultTenantRegistryProbe:
    """Default implementation of TenantRegistryProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def unknown_tenant_substituted(self, requested: str, substituted: str) -> None:
        self._logger.info(
            "tenant_registry_unknown_tenant_substituted",
            requested=requested,
            substituted=substituted,
        )
