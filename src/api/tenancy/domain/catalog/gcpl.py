"""GCPL tenant configuration."""

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

GCPL = TenantConfig(
    key="gcpl",
    name="GCPL",
    display_name="GCPL Analytics",
    description="Godrej Consumer Products Limited - Analytics Dashboard",
    branding=Branding(
        logo="/assets/logos/gcpl-logo.png",
        favicon="/assets/favicons/gcpl-favicon.ico",
        primary_color="#1976d2",
        secondary_color="#dc004e",
        accent_color="#ff9800",
    ),
    business=BusinessConfig(
        default_brand="Cinthol Grocery",
        supported_platforms=("Flipkart", "Amazon"),
        default_platform="Flipkart",
    ),
    brands=("Cinthol Grocery", "Godrej Expert", "Good Knight", "Hit", "Protekt"),
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
        timeout_ms=30_000,
        retry_attempts=3,
        retry_delay_ms=1_000,
        enable_caching=True,
        cache_timeout_ms=300_000,
    ),
    dashboard=DashboardLayout(
        default_widgets=("campaigns", "keywords", "products", "performance"),
        enable_customization=True,
        max_widgets=8,
    ),
    notifications=NotificationSettings(
        enable_budget_alerts=True,
        enable_performance_alerts=True,
        enable_system_alerts=True,
        budget_threshold_percent=80,
        performance_threshold_percent=-20,
    ),
    export=ExportSettings(
        enable_excel=True,
        enable_csv=True,
        enable_pdf=True,
        max_records=10_000,
    ),
    business_rules=BusinessRules(
        min_bid_amount=0.10,
        max_bid_amount=100.00,
        min_budget_amount=10.00,
        max_budget_amount=10_000.00,
        bid_increment_step=0.05,
        budget_increment_step=10.00,
    ),
)
