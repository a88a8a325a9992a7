"""Metadata attached to every probe event.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Correlation fields merged into probe events.

    The tenant key is deliberately absent: it changes in the middle of a
    switch, so probes pass it with each event instead.

    Attributes:
        request_id: Identifier of the HTTP request or operation, if any.
        execution_context_id: Identifier of the shell process that owns
            the tenant context. Two processes sharing one selection store
            have different ids.
        extra: Free-form fields, e.g. the route that triggered a switch.
    """

    request_id: str | None = None
    execution_context_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Fields to log, without unset ones."""
        fields = {
            "request_id": self.request_id,
            "execution_context_id": self.execution_context_id,
        }
        result = {key: value for key, value in fields.items() if value is not None}
        result.update(self.extra)
        return result

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Copy of this context with more free-form fields."""
        return replace(self, extra={**self.extra, **kwargs})
