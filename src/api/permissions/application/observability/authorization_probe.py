"""Protocol for authorization decision observability.

Decisions are never persisted; these events are the only record of why a
principal was allowed or denied.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AuthorizationProbe(Protocol):
    """Domain probe for authorization decisions."""

    def authorized_as_admin(self, namespace: str, principal: str) -> None:
        """Record that a principal was allowed through the server_admins override."""
        ...

    def authorized_by_group(self, namespace: str, principal: str, group: str) -> None:
        """Record that a principal was allowed by a candidate group."""
        ...

    def authorization_denied(
        self, namespace: str, principal: str, candidate_groups: list[str]
    ) -> None:
        """Record that no candidate group matched."""
        ...

    def authorization_failed(self, namespace: str, principal: str, error: str) -> None:
        """Record that the decision could not be made because the store failed."""
        ...

    def with_context(self, context: ObservationContext) -> AuthorizationProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAuthorizationProbe:
    """Default implementation of AuthorizationProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAuthorizationProbe:
        """Create a new probe with observation context bound."""
        return DefaultAuthorizationProbe(logger=self._logger, context=context)

    def authorized_as_admin(self, namespace: str, principal: str) -> None:
        """Record that a principal was allowed through the server_admins override."""
        self._logger.info(
            "authorized_as_admin",
            namespace=namespace,
            principal=principal,
            **self._get_context_kwargs(),
        )

    def authorized_by_group(self, namespace: str, principal: str, group: str) -> None:
        """Record that a principal was allowed by a candidate group."""
        self._logger.debug(
            "authorized_by_group",
            namespace=namespace,
            principal=principal,
            group=group,
            **self._get_context_kwargs(),
        )

    def authorization_denied(
        self, namespace: str, principal: str, candidate_groups: list[str]
    ) -> None:
        """Record that no candidate group matched."""
        self._logger.info(
            "authorization_denied",
            namespace=namespace,
            principal=principal,
            candidate_groups=candidate_groups,
            **self._get_context_kwargs(),
        )

    def authorization_failed(self, namespace: str, principal: str, error: str) -> None:
        """Record that the decision could not be made because the store failed."""
        self._logger.error(
            "authorization_failed",
            namespace=namespace,
            principal=principal,
            error=error,
            **self._get_context_kwargs(),
        )
