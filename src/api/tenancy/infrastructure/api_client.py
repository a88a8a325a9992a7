"""HTTP client for tenant-scoped backend calls.

Every call is routed through the URL builder for the tenant that is
active at the time of the call, and uses that tenant's API settings
(timeout, retries, response caching).
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from typing import TYPE_CHECKING, Any

import httpx

from tenancy.domain.api_routing import ApiUrlBuilder
from tenancy.infrastructure.observability import ApiClientProbe, DefaultApiClientProbe

if TYPE_CHECKING:
    from tenancy.application.services import TenantContextManager
    from tenancy.application.tenant_scoped_cache import TenantScopedCache

_MISS = object()


class TenantApiClient:
    """Async API client bound to a tenant context.

    Transport errors are retried ``api.retry_attempts`` times after the
    first attempt, waiting ``api.retry_delay_ms`` between attempts. HTTP
    error statuses are returned to the caller unchanged; get_json() raises
    httpx.HTTPStatusError for them.
    """

    def __init__(
        self,
        context: TenantContextManager,
        url_builder: ApiUrlBuilder,
        *,
        http_client: httpx.AsyncClient | None = None,
        token_provider: Callable[[], str | None] | None = None,
        cache: TenantScopedCache[Any] | None = None,
        probe: ApiClientProbe | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize the client.

        Args:
            context: Tenant context deciding the namespace and API settings
            url_builder: Builder for absolute request URLs
            http_client: Optional httpx client (created and owned if omitted)
            token_provider: Returns the bearer token to send, if any
            cache: Optional tenant-scoped cache for GET JSON responses
            probe: Optional domain probe for observability
            sleep: Awaitable used between retries
        """
        self._context = context
        self._url_builder = url_builder
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient()
        self._token_provider = token_provider
        self._cache = cache
        self._probe = probe or DefaultApiClientProbe()
        self._sleep = sleep

    def url_for(self, endpoint: str, params: Mapping[str, Any] | None = None) -> str:
        """Build the URL of an endpoint for the active tenant."""
        return self._url_builder.build_url(endpoint, self._context.current_key, params)

    def _headers(self, extra: Mapping[str, str] | None) -> dict[str, str]:
        headers = {"Content-Type": "application/json", **(extra or {})}
        token = self._token_provider() if self._token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        """Send a request for the active tenant.

        Raises:
            httpx.TransportError: If every attempt failed at the transport level
        """
        state = self._context.state
        api_settings = state.config.api
        url = self.url_for(endpoint, params)
        attempts = 1 + max(api_settings.retry_attempts, 0)

        attempt = 1
        while True:
            try:
                self._probe.request_sent(state.tenant_key, method.upper(), url)
                return await self._http.request(
                    method.upper(),
                    url,
                    json=json,
                    headers=self._headers(headers),
                    timeout=api_settings.timeout_ms / 1000,
                )
            except httpx.TransportError as e:
                if attempt >= attempts:
                    self._probe.request_failed(url, e)
                    raise
                self._probe.request_retried(url, attempt, e)
                await self._sleep(api_settings.retry_delay_ms / 1000)
                attempt += 1

    async def get_json(
        self,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """GET an endpoint and decode the JSON body.

        Responses are cached per tenant when the tenant enables caching.

        Raises:
            httpx.HTTPStatusError: If the response status is 4xx or 5xx
        """
        state = self._context.state
        api_settings = state.config.api
        url = self.url_for(endpoint, params)
        use_cache = self._cache is not None and api_settings.enable_caching

        if use_cache:
            cached = self._cache.get(url, _MISS)
            if cached is not _MISS:
                self._probe.cache_hit(state.tenant_key, url)
                return cached

        response = await self.request("GET", endpoint, params=params)
        response.raise_for_status()
        payload = response.json()

        if use_cache:
            self._cache.set(
                url,
                payload,
                ttl_seconds=api_settings.cache_timeout_ms / 1000,
                state=state,
            )
        return payload

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._http.aclose()
