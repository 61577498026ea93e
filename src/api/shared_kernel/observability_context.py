"""Observation context for domain-oriented observability.

Observation contexts carry request metadata into every probe event, so
the events emitted by services and stores while handling one request can
be correlated.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable request metadata merged into probe events.

    Domain identifiers (namespace, group, principal) are passed to each
    probe method explicitly and are deliberately absent here, so a bound
    context never collides with an event's own fields.

    Attributes:
        request_id: Unique identifier for the current request/operation.
        method: HTTP method of the request (if applicable).
        path: Request path (if applicable).
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(request_id="req-123", method="POST")
        probe = DefaultAuthorizationProbe().with_context(context)
    """

    request_id: str | None = None
    method: str | None = None
    path: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.method is not None:
            result["method"] = self.method
        if self.path is not None:
            result["path"] = self.path
        result.update(self.extra)
        return result

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        return replace(self, extra={**self.extra, **kwargs})
