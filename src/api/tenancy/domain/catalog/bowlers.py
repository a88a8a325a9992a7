"""Bowlers tenant configuration.

Bowlers runs a simplified dashboard: no negative keywords, a shorter
maximum date range and tighter bid limits than the other tenants.
"""

from tenancy.domain.value_objects import (
    ApiSettings,
    Branding,
    BusinessConfig,
    BusinessRules,
    DashboardLayout,
    ExportSettings,
    Feature,
    NotificationSettings,
    TenantConfig,
    UISettings,
)

BOWLERS = TenantConfig(
    key="bowlers",
    name="Bowlers",
    display_name="Bowlers Analytics",
    description="Bowlers - Sports Equipment Analytics Dashboard",
    branding=Branding(
        logo="/assets/logos/bowlers-logo.png",
        favicon="/assets/favicons/bowlers-favicon.ico",
        primary_color="#388e3c",
        secondary_color="#f57c00",
        accent_color="#2196f3",
    ),
    business=BusinessConfig(
        default_brand="Bowlers",
        supported_platforms=("Amazon", "Flipkart"),
        default_platform="Flipkart",
    ),
    brands=("Bowlers", "Cricket Pro", "Sports Elite"),
    features={
        **{feature.value: True for feature in Feature},
        Feature.NEGATIVE_KEYWORDS.value: False,
    },
    ui=UISettings(
        show_brand_selector=True,
        show_platform_selector=True,
        default_date_range_days=30,
        max_date_range_days=180,
        refresh_interval_ms=600_000,
        enable_auto_refresh=True,
        show_wallet_balance=True,
        enable_notifications=True,
    ),
    api=ApiSettings(
        timeout_ms=25_000,
        retry_attempts=2,
        retry_delay_ms=1_500,
        enable_caching=True,
        cache_timeout_ms=600_000,
    ),
    dashboard=DashboardLayout(
        default_widgets=("campaigns", "keywords", "products", "performance"),
        enable_customization=False,
        max_widgets=6,
    ),
    notifications=NotificationSettings(
        enable_budget_alerts=True,
        enable_performance_alerts=True,
        enable_system_alerts=False,
        budget_threshold_percent=90,
        performance_threshold_percent=-25,
    ),
    export=ExportSettings(
        enable_excel=True,
        enable_csv=True,
        enable_pdf=False,
        max_records=5_000,
    ),
    business_rules=BusinessRules(
        min_bid_amount=0.15,
        max_bid_amount=25.00,
        min_budget_amount=15.00,
        max_budget_amount=2_500.00,
        bid_increment_step=0.05,
        budget_increment_step=15.00,
    ),
)
