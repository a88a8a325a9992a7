"""Branding sink keeping the shell's document title and icon."""

from __future__ import annotations

from tenancy.domain.value_objects import TenantConfig


class InMemoryBrandingSink:
    """BrandingSink that records the title and favicon for the layout chrome."""

    def __init__(self) -> None:
        self.document_title: str | None = None
        self.favicon: str | None = None
        self.tenant_key: str | None = None

    def apply(self, config: TenantConfig) -> None:
        self.document_title = config.display_name
        self.favicon = config.branding.favicon
        self.tenant_key = config.key
