"""Samsonite tenant configuration."""

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

SAMSONITE = TenantConfig(
    key="samsonite",
    name="Samsonite",
    display_name="Samsonite Analytics",
    description="Samsonite - Premium Luggage Analytics Dashboard",
    branding=Branding(
        logo="/assets/logos/samsonite-logo.png",
        favicon="/assets/favicons/samsonite-favicon.ico",
        primary_color="#d32f2f",
        secondary_color="#1976d2",
        accent_color="#ff5722",
    ),
    business=BusinessConfig(
        default_brand="Samsonite",
        supported_platforms=("Amazon", "Flipkart"),
        default_platform="Flipkart",
    ),
    brands=("Samsonite", "American Tourister", "Delsey", "Tumi"),
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
        budget_threshold_percent=85,
        performance_threshold_percent=-15,
    ),
    export=ExportSettings(
        enable_excel=True,
        enable_csv=True,
        enable_pdf=True,
        max_records=10_000,
    ),
    business_rules=BusinessRules(
        min_bid_amount=0.20,
        max_bid_amount=50.00,
        min_budget_amount=20.00,
        max_budget_amount=5_000.00,
        bid_increment_step=0.10,
        budget_increment_step=20.00,
    ),
)
