"""Bunge tenant configuration."""

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

BUNGE = TenantConfig(
    key="bunge",
    name="Bunge",
    display_name="Bunge Analytics",
    description="Bunge - Agricultural Products Analytics Dashboard",
    branding=Branding(
        logo="/assets/logos/bunge-logo.png",
        favicon="/assets/favicons/bunge-favicon.ico",
        primary_color="#f57c00",
        secondary_color="#388e3c",
        accent_color="#9c27b0",
    ),
    business=BusinessConfig(
        default_brand="Bunge",
        supported_platforms=("Amazon", "Flipkart"),
        default_platform="Flipkart",
    ),
    brands=("Bunge", "Dalda", "Nutrela", "Fortune"),
    features={feature.value: True for feature in Feature},
    ui=UISettings(
        show_brand_selector=True,
        show_platform_selector=True,
        default_date_range_days=30,
        max_date_range_days=365,
        refresh_interval_ms=300_000,
        enable_auto_refresh=True,
        show_wallet_balance=True,
        enable_notifications=True,
    ),
    api=ApiSettings(
        timeout_ms=35_000,
        retry_attempts=3,
        retry_delay_ms=2_000,
        enable_caching=True,
        cache_timeout_ms=300_000,
    ),
    dashboard=DashboardLayout(
        default_widgets=("campaigns", "keywords", "products", "performance", "analytics"),
        enable_customization=True,
        max_widgets=10,
    ),
    notifications=NotificationSettings(
        enable_budget_alerts=True,
        enable_performance_alerts=True,
        enable_system_alerts=True,
        budget_threshold_percent=75,
        performance_threshold_percent=-30,
    ),
    export=ExportSettings(
        enable_excel=True,
        enable_csv=True,
        enable_pdf=True,
        max_records=15_000,
    ),
    business_rules=BusinessRules(
        min_bid_amount=0.08,
        max_bid_amount=75.00,
        min_budget_amount=8.00,
        max_budget_amount=8_000.00,
        bid_increment_step=0.02,
        budget_increment_step=8.00,
    ),
)
