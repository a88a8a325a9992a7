"""Value objects for the tenancy domain.

Tenant configuration records are immutable once constructed. Switching
tenants only changes which record is current; it never mutates one.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType

from tenancy.domain.exceptions import InvalidTenantConfigError


def normalize_tenant_key(raw: str | None) -> str:
    """Normalize a tenant key for lookup and comparison.

    Keys are compared trimmed and lowercased. None normalizes to the
    empty string, which is never a registered key.
    """
    if raw is None:
        return ""
    return raw.strip().lower()


class Feature(StrEnum):
    """Closed set of feature flags recognized by the dashboard."""

    CAMPAIGNS = "campaigns"
    KEYWORDS = "keywords"
    PRODUCTS = "products"
    AD_GROUPS = "adGroups"
    SMART_CONTROL = "smartControl"
    NEGATIVE_KEYWORDS = "negativeKeywords"
    ANALYTICS = "analytics"
    PRODUCT_ANALYTICS = "productAnalytics"
    SEARCH_TERM_INSIGHTS = "searchTermInsights"
    BUDGET_MANAGEMENT = "budgetManagement"
    BID_MANAGEMENT = "bidManagement"
    PORTFOLIOS = "portfolios"
    GOALS = "goals"
    HISTORY = "history"

    @property
    def label(self) -> str:
        """Human-readable label shown on the dashboard feature grid."""
        return FEATURE_LABELS[self]


FEATURE_LABELS: Mapping[Feature, str] = MappingProxyType(
    {
        Feature.CAMPAIGNS: "Campaigns Management",
        Feature.KEYWORDS: "Keywords Management",
        Feature.PRODUCTS: "Products Management",
        Feature.AD_GROUPS: "Ad Groups Management",
        Feature.SMART_CONTROL: "Smart Control Rules",
        Feature.NEGATIVE_KEYWORDS: "Negative Keywords",
        Feature.ANALYTICS: "Analytics Dashboard",
        Feature.PRODUCT_ANALYTICS: "Product Analytics",
        Feature.SEARCH_TERM_INSIGHTS: "Search Term Insights",
        Feature.BUDGET_MANAGEMENT: "Budget Management",
        Feature.BID_MANAGEMENT: "Bid Management",
        Feature.PORTFOLIOS: "Portfolios Management",
        Feature.GOALS: "Goals Tracking",
        Feature.HISTORY: "History & Reports",
    }
)


@dataclass(frozen=True)
class Branding:
    """Branding tokens for a tenant.

    Paths and colors are opaque strings; nothing in the core interprets them.
    """

    logo: str
    favicon: str
    primary_color: str
    secondary_color: str
    accent_color: str


@dataclass(frozen=True)
class BusinessConfig:
    """Brand and platform defaults for a tenant.

    Raises:
        InvalidTenantConfigError: If no platform is supported or the default
            platform is not one of the supported platforms
    """

    default_brand: str
    supported_platforms: tuple[str, ...]
    default_platform: str

    def __post_init__(self) -> None:
        if not self.supported_platforms:
            raise InvalidTenantConfigError("supported_platforms must not be empty")
        if self.default_platform not in self.supported_platforms:
            raise InvalidTenantConfigError(
                f"default_platform {self.default_platform!r} is not one of "
                f"{list(self.supported_platforms)}"
            )


@dataclass(frozen=True)
class UISettings:
    show_brand_selector: bool
    show_platform_selector: bool
    default_date_range_days: int
    max_date_range_days: int
    refresh_interval_ms: int
    enable_auto_refresh: bool
    show_wallet_balance: bool
    enable_notifications: bool


@dataclass(frozen=True)
class ApiSettings:
    """Per-tenant HTTP behaviour for calls to the backend API."""

    timeout_ms: int
    retry_attempts: int
    retry_delay_ms: int
    enable_caching: bool
    cache_timeout_ms: int


@dataclass(frozen=True)
class DashboardLayout:
    default_widgets: tuple[str, ...]
    enable_customization: bool
    max_widgets: int


@dataclass(frozen=True)
class NotificationSettings:
    enable_budget_alerts: bool
    enable_performance_alerts: bool
    enable_system_alerts: bool
    budget_threshold_percent: int
    performance_threshold_percent: int


@dataclass(frozen=True)
class ExportSettings:
    enable_excel: bool
    enable_csv: bool
    enable_pdf: bool
    max_records: int


@dataclass(frozen=True)
class BusinessRules:
    """Bid and budget limits. Values are opaque to the core."""

    min_bid_amount: float
    max_bid_amount: float
    min_budget_amount: float
    max_budget_amount: float
    bid_increment_step: float
    budget_increment_step: float


@dataclass(frozen=True)
class TenantConfig:
    """Immutable configuration record for one tenant.

    Attributes:
        key: Stable lowercase identifier (also the API namespace segment)
        name: Short client name, e.g. "GCPL"
        display_name: Name shown in the layout chrome
        description: One-line description for selectors
        branding: Logo, favicon and color tokens
        business: Default brand and platform configuration
        brands: Brands available under this tenant, in display order
        features: Feature flags; unknown names resolve to disabled
        ui, api, dashboard, notifications, export, business_rules: Nested
            scalar settings consumed verbatim by the UI

    Raises:
        InvalidTenantConfigError: If the key is blank or not normalized
    """

    key: str
    name: str
    display_name: str
    description: str
    branding: Branding
    business: BusinessConfig
    brands: tuple[str, ...]
    features: Mapping[str, bool] = field(hash=False)
    ui: UISettings
    api: ApiSettings
    dashboard: DashboardLayout
    notifications: NotificationSettings
    export: ExportSettings
    business_rules: BusinessRules

    def __post_init__(self) -> None:
        if not self.key or normalize_tenant_key(self.key) != self.key:
            raise InvalidTenantConfigError(
                f"Tenant key must be non-empty, trimmed and lowercase: {self.key!r}"
            )
        # Freeze the flag mapping so the record cannot be mutated through it
        frozen = MappingProxyType({str(name): bool(on) for name, on in self.features.items()})
        object.__setattr__(self, "features", frozen)

    def is_feature_enabled(self, feature: str | Feature) -> bool:
        """Return the flag for a feature, False for unrecognized names."""
        return self.features.get(str(feature), False)

    @property
    def default_brand(self) -> str:
        return self.business.default_brand

    @property
    def supported_platforms(self) -> tuple[str, ...]:
        return self.business.supported_platforms


@dataclass(frozen=True)
class TenantOption:
    """Entry of the tenant selector: registry key with its configuration."""

    key: str
    config: TenantConfig

    @property
    def label(self) -> str:
        return self.config.display_name

    @property
    def value(self) -> str:
        return self.config.name


class SwitchPhase(StrEnum):
    """Phase of the tenant context state machine."""

    IDLE = "idle"
    SWITCHING = "switching"


class ChangeOrigin(StrEnum):
    """Where a published tenant change came from."""

    LOCAL = "local"
    EXTERNAL = "external"
    REFRESH = "refresh"


@dataclass(frozen=True)
class ActiveTenantState:
    """Snapshot of which tenant is active in this execution context.

    Attributes:
        tenant_key: Always a registered key
        config: Configuration for tenant_key
        is_loading: True only while a switch is in flight
        last_error: Message from the most recent failed switch, if any
        generation: Bumped every time a tenant change is published; caches
            tagged with an older generation are stale
    """

    tenant_key: str
    config: TenantConfig
    is_loading: bool = False
    last_error: str | None = None
    generation: int = 0


@dataclass(frozen=True)
class TenantChanged:
    """In-process broadcast payload: the new client and its configuration."""

    client: str
    config: TenantConfig
    origin: ChangeOrigin
    generation: int = field(default=0)
