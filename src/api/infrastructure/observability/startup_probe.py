"""Domain probe for application startup and lifecycle events.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events during application initialization and shutdown:
opening the permission store and checking the bootstrap group.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class StartupProbe(Protocol):
    """Domain probe for application startup operations."""

    def permission_store_opened(self, backend: str, target: str) -> None:
        """Record that the permission store was constructed."""
        ...

    def permission_store_closed(self, backend: str) -> None:
        """Record that the permission store released its connections."""
        ...

    def server_admins_bootstrapped(self, namespace: str) -> None:
        """Record that the server_admins group was created at startup."""
        ...

    def server_admins_already_exists(self, namespace: str) -> None:
        """Record that the server_admins group already existed."""
        ...

    def server_admins_has_no_members(self, namespace: str) -> None:
        """Record that the namespace has no administrators (misconfiguration)."""
        ...

    def server_admins_members_found(self, namespace: str, member_count: int) -> None:
        """Record how many administrators the namespace has."""
        ...

    def bootstrap_failed(self, namespace: str, error: Exception) -> None:
        """Record that the bootstrap check could not complete."""
        ...

    def with_context(self, context: ObservationContext) -> StartupProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultStartupProbe:
    """Default implementation of StartupProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultStartupProbe:
        """Create a new probe with observation context bound."""
        return DefaultStartupProbe(logger=self._logger, context=context)

    def permission_store_opened(self, backend: str, target: str) -> None:
        """Record that the permission store was constructed."""
        self._logger.info(
            "permission_store_opened",
            backend=backend,
            target=target,
            **self._get_context_kwargs(),
        )

    def permission_store_closed(self, backend: str) -> None:
        """Record that the permission store released its connections."""
        self._logger.info(
            "permission_store_closed",
            backend=backend,
            **self._get_context_kwargs(),
        )

    def server_admins_bootstrapped(self, namespace: str) -> None:
        """Record that the server_admins group was created at startup."""
        self._logger.info(
            "server_admins_bootstrapped",
            namespace=namespace,
            **self._get_context_kwargs(),
        )

    def server_admins_already_exists(self, namespace: str) -> None:
        """Record that the server_admins group already existed."""
        self._logger.info(
            "server_admins_already_exists",
            namespace=namespace,
            **self._get_context_kwargs(),
        )

    def server_admins_has_no_members(self, namespace: str) -> None:
        """Record that the namespace has no administrators (misconfiguration)."""
        self._logger.warning(
            "server_admins_has_no_members",
            namespace=namespace,
            hint="seed administrators with scripts/seed_server_admins.py",
            **self._get_context_kwargs(),
        )

    def server_admins_members_found(self, namespace: str, member_count: int) -> None:
        """Record how many administrators the namespace has."""
        self._logger.info(
            "server_admins_members_found",
            namespace=namespace,
            member_count=member_count,
            **self._get_context_kwargs(),
        )

    def bootstrap_failed(self, namespace: str, error: Exception) -> None:
        """Record that the bootstrap check could not complete."""
        self._logger.error(
            "bootstrap_failed",
            namespace=namespace,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
