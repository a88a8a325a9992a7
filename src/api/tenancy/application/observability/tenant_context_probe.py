"""Domain probe for the tenant context manager.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events of the tenant context lifecycle: initialization,
switches, cross-context changes and reloads.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantContextProbe(Protocol):
    """Domain probe for tenant context operations."""

    def context_initialized(self, tenant_key: str, persisted: str | None) -> None:
        """Record that the active tenant was resolved at startup."""
        ...

    def initial_read_failed(self, error: Exception) -> None:
        """Record that the persisted selection was unreadable at startup."""
        ...

    def switch_requested(self, from_key: str, requested: str) -> None:
        """Record that a switch to another tenant was requested."""
        ...

    def switch_noop(self, tenant_key: str) -> None:
        """Record that a switch targeted the already-active tenant."""
        ...

    def switch_succeeded(self, from_key: str, to_key: str, display_name: str) -> None:
        """Record that a switch was published."""
        ...

    def switch_failed(self, from_key: str, requested: str, error: Exception) -> None:
        """Record that a switch failed and the previous tenant was kept."""
        ...

    def external_change_applied(self, from_key: str, to_key: str) -> None:
        """Record that another context's switch was applied here."""
        ...

    def external_change_ignored(self, tenant_key: str) -> None:
        """Record that a change notification matched the current tenant."""
        ...

    def context_refreshed(self, tenant_key: str) -> None:
        """Record that the context was re-synced from persistence."""
        ...

    def reload_scheduled(self, tenant_key: str, delay_seconds: float) -> None:
        """Record that a full reload was scheduled."""
        ...

    def reload_performed(self, tenant_key: str) -> None:
        """Record that a scheduled reload ran."""
        ...

    def branding_failed(self, tenant_key: str, error: Exception) -> None:
        """Record that applying tenant branding failed."""
        ...

    def listener_failed(self, tenant_key: str, error: Exception) -> None:
        """Record that a change listener raised."""
        ...

    def error_cleared(self, tenant_key: str) -> None:
        """Record that the advisory error was cleared by a consumer."""
        ...

    def context_closed(self, tenant_key: str | None) -> None:
        """Record that the context released its listeners."""
        ...

    def with_context(self, context: ObservationContext) -> TenantContextProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantContextProbe:
    """Default implementation of TenantContextProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultTenantContextProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantContextProbe(logger=self._logger, context=context)

    def context_initialized(self, tenant_key: str, persisted: str | None) -> None:
        self._logger.info(
            "tenant_context_initialized",
            tenant_key=tenant_key,
            persisted=persisted,
            **self._get_context_kwargs(),
        )

    def initial_read_failed(self, error: Exception) -> None:
        self._logger.warning(
            "tenant_context_initial_read_failed",
            error=str(error),
            message="Falling back to the default tenant",
            **self._get_context_kwargs(),
        )

    def switch_requested(self, from_key: str, requested: str) -> None:
        self._logger.debug(
            "tenant_switch_requested",
            from_key=from_key,
            requested=requested,
            **self._get_context_kwargs(),
        )

    def switch_noop(self, tenant_key: str) -> None:
        self._logger.debug(
            "tenant_switch_noop",
            tenant_key=tenant_key,
            **self._get_context_kwargs(),
        )

    def switch_succeeded(self, from_key: str, to_key: str, display_name: str) -> None:
        self._logger.info(
            "tenant_switch_succeeded",
            from_key=from_key,
            to_key=to_key,
            display_name=display_name,
            **self._get_context_kwargs(),
        )

    def switch_failed(self, from_key: str, requested: str, error: Exception) -> None:
        self._logger.error(
            "tenant_switch_failed",
            from_key=from_key,
            requested=requested,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def external_change_applied(self, from_key: str, to_key: str) -> None:
        self._logger.info(
            "tenant_external_change_applied",
            from_key=from_key,
            to_key=to_key,
            **self._get_context_kwargs(),
        )

    def external_change_ignored(self, tenant_key: str) -> None:
        self._logger.debug(
            "tenant_external_change_ignored",
            tenant_key=tenant_key,
            **self._get_context_kwargs(),
        )

    def context_refreshed(self, tenant_key: str) -> None:
        self._logger.info(
            "tenant_context_refreshed",
            tenant_key=tenant_key,
            **self._get_context_kwargs(),
        )

    def reload_scheduled(self, tenant_key: str, delay_seconds: float) -> None:
        self._logger.debug(
            "tenant_reload_scheduled",
            tenant_key=tenant_key,
            delay_seconds=delay_seconds,
            **self._get_context_kwargs(),
        )

    def reload_performed(self, tenant_key: str) -> None:
        self._logger.info(
            "tenant_reload_performed",
            tenant_key=tenant_key,
            **self._get_context_kwargs(),
        )

    def branding_failed(self, tenant_key: str, error: Exception) -> None:
        self._logger.warning(
            "tenant_branding_failed",
            tenant_key=tenant_key,
            error=str(error),
            **self._get_context_kwargs(),
        )

    def listener_failed(self, tenant_key: str, error: Exception) -> None:
        self._logger.error(
            "tenant_change_listener_failed",
            tenant_key=tenant_key,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def error_cleared(self, tenant_key: str) -> None:
        self._logger.debug(
            "tenant_context_error_cleared",
            tenant_key=tenant_key,
            **self._get_context_kwargs(),
        )

    def context_closed(self, tenant_key: str | None) -> None:
        self._logger.info(
            "tenant_context_closed",
            tenant_key=tenant_key,
            **self._get_context_kwargs(),
        )
