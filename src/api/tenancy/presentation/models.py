"""Pydantic models for tenancy API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from tenancy.domain.value_objects import (
    ActiveTenantState,
    Branding,
    Feature,
    TenantConfig,
    TenantOption,
)


def client_initials(name: str) -> str:
    """Avatar initials: first letter of each word, uppercased, at most two."""
    return "".join(word[:1] for word in name.split(" ")).upper()[:2]


class SwitchTenantRequest(BaseModel):
    """Request model for switching the active tenant."""

    tenant_key: str = Field(..., description="Key of the tenant to activate", min_length=1)
    force_reload: bool = Field(
        default=True, description="Schedule a full reload after the switch"
    )


class TenantOptionResponse(BaseModel):
    """Entry of the tenant switcher."""

    key: str = Field(..., description="Tenant key")
    value: str = Field(..., description="Short client name")
    label: str = Field(..., description="Display name")
    description: str = Field(..., description="One-line description")
    initials: str = Field(..., description="Avatar initials")
    primary_color: str = Field(..., description="Primary brand color")
    active: bool = Field(..., description="Whether this tenant is active")

    @classmethod
    def from_domain(cls, option: TenantOption, active_key: str) -> TenantOptionResponse:
        """Convert a registry TenantOption to an API response.

        Args:
            option: Selector entry from the registry
            active_key: Key of the tenant currently active

        Returns:
            TenantOptionResponse
        """
        return cls(
            key=option.key,
            value=option.value,
            label=option.label,
            description=option.config.description,
            initials=client_initials(option.label),
            primary_color=option.config.branding.primary_color,
            active=option.key == active_key,
        )


class BrandingResponse(BaseModel):
    """Branding tokens of a tenant."""

    logo: str
    favicon: str
    primary_color: str
    secondary_color: str
    accent_color: str

    @classmethod
    def from_domain(cls, branding: Branding) -> BrandingResponse:
        return cls(
            logo=branding.logo,
            favicon=branding.favicon,
            primary_color=branding.primary_color,
            secondary_color=branding.secondary_color,
            accent_color=branding.accent_color,
        )


class TenantContextResponse(BaseModel):
    """The active tenant and the state of the context."""

    tenant_key: str = Field(..., description="Active tenant key")
    name: str = Field(..., description="Short client name")
    display_name: str = Field(..., description="Display name")
    description: str
    default_brand: str
    brands: list[str]
    supported_platforms: list[str]
    default_platform: str
    branding: BrandingResponse
    features: dict[str, bool] = Field(..., description="Feature flags by name")
    is_loading: bool = Field(..., description="True while a switch is in flight")
    last_error: str | None = Field(
        default=None, description="Message from the last failed switch"
    )
    generation: int = Field(..., description="Bumped on every published change")

    @classmethod
    def from_domain(cls, state: ActiveTenantState) -> TenantContextResponse:
        """Convert an ActiveTenantState snapshot to an API response.

        Args:
            state: Snapshot from the tenant context manager

        Returns:
            TenantContextResponse
        """
        config: TenantConfig = state.config
        return cls(
            tenant_key=state.tenant_key,
            name=config.name,
            display_name=config.display_name,
            description=config.description,
            default_brand=config.default_brand,
            brands=list(config.brands),
            supported_platforms=list(config.supported_platforms),
            default_platform=config.business.default_platform,
            branding=BrandingResponse.from_domain(config.branding),
            features=dict(config.features),
            is_loading=state.is_loading,
            last_error=state.last_error,
            generation=state.generation,
        )


class FeatureResponse(BaseModel):
    """A feature flag of the active tenant."""

    name: str = Field(..., description="Feature flag name")
    label: str | None = Field(default=None, description="Label on the feature grid")
    enabled: bool

    @classmethod
    def from_flag(cls, name: str, enabled: bool) -> FeatureResponse:
        label = Feature(name).label if name in Feature._value2member_map_ else None
        return cls(name=name, label=label, enabled=enabled)


class ApiUrlResponse(BaseModel):
    """Absolute URL an endpoint resolves to for the active tenant."""

    endpoint: str
    url: str
    tenant_agnostic: bool


class BrandingStateResponse(BaseModel):
    """Document title and favicon last applied by the shell."""

    tenant_key: str | None
    document_title: str | None
    favicon: str | None


class LayoutChromeResponse(BaseModel):
    """Everything the layout header needs to render."""

    tenant_key: str
    display_name: str
    initials: str
    logo: str
    primary_color: str
    secondary_color: str
    default_brand: str
    is_loading: bool
    last_error: str | None = None

    @classmethod
    def from_domain(cls, state: ActiveTenantState) -> LayoutChromeResponse:
        config = state.config
        return cls(
            tenant_key=state.tenant_key,
            display_name=config.display_name,
            initials=client_initials(config.display_name),
            logo=config.branding.logo,
            primary_color=config.branding.primary_color,
            secondary_color=config.branding.secondary_color,
            default_brand=config.default_brand,
            is_loading=state.is_loading,
            last_error=state.last_error,
        )
