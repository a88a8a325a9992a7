"""Domain probes for API routing and the tenant API client."""

from __future__ import annotations

from typing import Protocol

import structlog


class ApiRoutingProbe(Protocol):
    """Domain probe for API routing configuration."""

    def base_url_missing(self, fallback: str) -> None:
        """Record that no base URL was configured and a fallback is used."""
        ...


class DefaultApiRoutingProbe:
    """Default implementation of ApiRoutingProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def base_url_missing(self, fallback: str) -> None:
        self._logger.warning(
            "api_base_url_missing",
            fallback=fallback,
            message="DASHBOARD_API_BASE_URL is not set; using fallback base URL",
        )


class ApiClientProbe(Protocol):
    """Domain probe for tenant-scoped API calls."""

    def request_sent(self, tenant_key: str, method: str, url: str) -> None:
        """Record that a request was sent for the active tenant."""
        ...

    def cache_hit(self, tenant_key: str, url: str) -> None:
        """Record that a cached response was served."""
        ...

    def request_retried(self, url: str, attempt: int, error: Exception) -> None:
        """Record that a request is retried after a transport error."""
        ...

    def request_failed(self, url: str, error: Exception) -> None:
        """Record that a request failed after all attempts."""
        ...


class DefaultApiClientProbe:
    """Default implementation of ApiClientProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def request_sent(self, tenant_key: str, method: str, url: str) -> None:
        self._logger.info(
            "tenant_api_request_sent",
            tenant_key=tenant_key,
            method=method,
            url=url,
        )

    def cache_hit(self, tenant_key: str, url: str) -> None:
        self._logger.debug("tenant_api_cache_hit", tenant_key=tenant_key, url=url)

    def request_retried(self, url: str, attempt: int, error: Exception) -> None:
        self._logger.warning(
            "tenant_api_request_retried",
            url=url,
            attempt=attempt,
            error=str(error),
        )

    def request_failed(self, url: str, error: Exception) -> None:
        self._logger.error(
            "tenant_api_request_failed",
            url=url,
            error=str(error),
            error_type=type(error).__name__,
        )
