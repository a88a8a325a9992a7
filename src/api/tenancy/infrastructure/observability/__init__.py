"""Observability for tenancy infrastructure adapters."""

from tenancy.infrastructure.observability.api_probe import (
    ApiClientProbe,
    ApiRoutingProbe,
    DefaultApiClientProbe,
    DefaultApiRoutingProbe,
)
from tenancy.infrastructure.observability.registry_probe import (
    DefaultTenantRegistryProbe,
    TenantRegistryProbe,
)
from tenancy.infrastructure.observability.storage_probe import (
    DefaultSelectionStoreProbe,
    SelectionStoreProbe,
)

__all__ = [
    "ApiClientProbe",
    "ApiRoutingProbe",
    "DefaultApiClientProbe",
    "DefaultApiRoutingProbe",
    "DefaultSelectionStoreProbe",
    "DefaultTenantRegistryProbe",
    "SelectionStoreProbe",
    "TenantRegistryProbe",
]
