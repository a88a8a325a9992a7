"""Tenant-aware API URL construction.

Tenant-scoped endpoints live under ``{base}/{tenant_key}/{endpoint}``.
A fixed set of tenant-agnostic endpoints always lives under
``{base}/app/{endpoint}`` whichever tenant is active.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any
from urllib.parse import urlencode

from tenancy.domain.value_objects import normalize_tenant_key

SHARED_NAMESPACE = "app"


class ApiEndpoint(StrEnum):
    """Known backend endpoint names."""

    # Authentication
    LOGIN = "login"
    REGISTER = "register"

    # Wallet & balance
    WALLET_BALANCE = "wallet_balance"

    # Performance overview
    CAMPAIGNS = "campaign"
    CAMPAIGN_GRAPH = "campaign_graph"
    CAMPAIGN_PLAY_PAUSE = "campaign-play-pause"
    ADGROUPS = "adgroups"
    TOGGLE_AD_GROUP = "toggle_ad_group"
    UPDATE_AD_GROUP_NAME = "update_ad_group_name"
    KEYWORDS = "keyword"
    KEYWORD_GRAPH = "keyword_graph"
    TOGGLE_KEYWORD = "toggle_keyword_or_target_state"
    PRODUCTS = "product"
    PORTFOLIOS = "portfolios"
    UPDATE_BID = "update_bid"
    BUDGET_CHANGE = "budget-change"

    # Smart control
    DISPLAY_RULES = "displayrules"
    UPDATE_RULE = "update-rule"
    PLAY_PAUSE_RULE = "play-pause-rule"
    DELETE_RULE = "delete-rule"

    # Negative keywords
    NEGATIVE_KEYWORD = "negative_keyword"
    ADD_NEGATIVE_KEYWORD = "add_negative_keyword"
    DELETE_NEGATIVE_KEYWORD = "delete_negative_keyword"

    # Analytics
    PRODUCT_ANALYTICS = "product-analytics"
    SEARCH_TERM_INSIGHTS = "keyword-search-term-page"

    HISTORY = "history"

    # Tenant-agnostic
    GOALS_ADD = "goals-add"
    ACHIEVED_GOALS_COUNT = "achieved-goals-count"
    DISPLAY_GOALS = "display-goals"
    AMAZON_PRODUCT_PLAY_PAUSE = "amazon-product-play-pause"


TENANT_AGNOSTIC_ENDPOINTS: frozenset[str] = frozenset(
    {
        ApiEndpoint.GOALS_ADD.value,
        ApiEndpoint.ACHIEVED_GOALS_COUNT.value,
        ApiEndpoint.DISPLAY_GOALS.value,
        ApiEndpoint.AMAZON_PRODUCT_PLAY_PAUSE.value,
    }
)


def _strip_leading_separator(endpoint: str) -> str:
    return endpoint[1:] if endpoint.startswith("/") else endpoint


class ApiUrlBuilder:
    """Builds absolute request URLs for the active tenant.

    The builder is pure: the same inputs always produce the same URL.

    Example:
        builder = ApiUrlBuilder("https://api.example.com")
        builder.build_url("keyword", "Samsonite")
        # "https://api.example.com/samsonite/keyword"
        builder.build_url("goals-add", "samsonite", {"brand": "Tumi"})
        # "https://api.example.com/app/goals-add?brand=Tumi"
    """

    def __init__(self, base_url: str) -> None:
        """Initialize the builder.

        Args:
            base_url: Absolute base URL; a trailing separator is ignored
        """
        self._base_url = base_url.rstrip("/")

    @property
    def base_url(self) -> str:
        return self._base_url

    def is_tenant_agnostic(self, endpoint: str) -> bool:
        """Return True if the endpoint routes under the shared namespace."""
        return _strip_leading_separator(str(endpoint)) in TENANT_AGNOSTIC_ENDPOINTS

    def namespace_for(self, endpoint: str, active_key: str) -> str:
        """Return the namespace segment an endpoint routes under."""
        if self.is_tenant_agnostic(endpoint):
            return SHARED_NAMESPACE
        return normalize_tenant_key(active_key)

    def build_url(
        self,
        endpoint: str,
        active_key: str,
        params: Mapping[str, Any] | None = None,
    ) -> str:
        """Build the absolute URL for an endpoint.

        Args:
            endpoint: Endpoint name; a leading "/" is stripped
            active_key: Key of the active tenant (normalized here)
            params: Optional query parameters; empty or None adds no "?"

        Returns:
            Absolute URL string
        """
        clean_endpoint = _strip_leading_separator(str(endpoint))
        namespace = self.namespace_for(clean_endpoint, active_key)
        url = f"{self._base_url}/{namespace}/{clean_endpoint}"

        if params:
            url += f"?{urlencode(params, doseq=True)}"

        return url

    # Auth endpoints are served outside any tenant namespace

    def csrf_token_url(self) -> str:
        return f"{self._base_url}/csrfToken/"

    def login_url(self) -> str:
        return f"{self._base_url}/login/"

    def register_url(self) -> str:
        return f"{self._base_url}/{SHARED_NAMESPACE}/register/"
