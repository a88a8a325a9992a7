"""Domain probe for the selected-tenant store.

Following Domain-Oriented Observability patterns, this probe captures
persistence failures and cross-context change notifications without
cluttering the adapter with logging calls.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class SelectionStoreProbe(Protocol):
    """Domain probe for selected-tenant persistence."""

    def selection_read_failed(self, error: Exception) -> None:
        """Record that the persisted selection could not be read."""
        ...

    def selection_written(self, tenant_key: str) -> None:
        """Record that the selection was persisted."""
        ...

    def selection_write_failed(self, tenant_key: str, error: Exception) -> None:
        """Record that the selection could not be persisted."""
        ...

    def external_change_observed(self, new_value: str | None, origin: str | None) -> None:
        """Record that another execution context changed the selection."""
        ...

    def external_poll_failed(self, error: Exception) -> None:
        """Record that polling a durable store for changes failed."""
        ...

    def with_context(self, context: ObservationContext) -> SelectionStoreProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultSelectionStoreProbe:
    """Default implementation of SelectionStoreProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultSelectionStoreProbe:
        """Create a new probe with observation context bound."""
        return DefaultSelectionStoreProbe(logger=self._logger, context=context)

    def selection_read_failed(self, error: Exception) -> None:
        self._logger.error(
            "selected_tenant_read_failed",
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def selection_written(self, tenant_key: str) -> None:
        self._logger.debug(
            "selected_tenant_written",
            tenant_key=tenant_key,
            **self._get_context_kwargs(),
        )

    def selection_write_failed(self, tenant_key: str, error: Exception) -> None:
        self._logger.error(
            "selected_tenant_write_failed",
            tenant_key=tenant_key,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def external_change_observed(self, new_value: str | None, origin: str | None) -> None:
        self._logger.debug(
            "selected_tenant_external_change_observed",
            new_value=new_value,
            origin=origin,
            **self._get_context_kwargs(),
        )

    def external_poll_failed(self, error: Exception) -> None:
        self._logger.warning(
            "selected_tenant_poll_failed",
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
