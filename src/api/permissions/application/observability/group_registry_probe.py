"""Protocol for group registry observability.

Defines the interface for domain probes that capture application-level
domain events for permission group administration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class GroupRegistryProbe(Protocol):
    """Domain probe for group registry operations."""

    def group_created(self, namespace: str, name: str) -> None:
        """Record that a permission group was created."""
        ...

    def group_creation_failed(self, namespace: str, name: str, error: str) -> None:
        """Record that permission group creation failed."""
        ...

    def group_deleted(self, namespace: str, name: str) -> None:
        """Record that a permission group was deleted."""
        ...

    def group_deletion_failed(self, namespace: str, name: str, error: str) -> None:
        """Record that permission group deletion failed."""
        ...

    def reserved_group_rejected(
        self, namespace: str, name: str, operation: str
    ) -> None:
        """Record that an operation on the reserved group was refused."""
        ...

    def groups_listed(self, namespace: str, count: int) -> None:
        """Record that the groups of a namespace were listed."""
        ...

    def no_groups_configured(self, namespace: str) -> None:
        """Record that a namespace has no permission groups."""
        ...

    def with_context(self, context: ObservationContext) -> GroupRegistryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultGroupRegistryProbe:
    """Default implementation of GroupRegistryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultGroupRegistryProbe:
        """Create a new probe with observation context bound."""
        return DefaultGroupRegistryProbe(logger=self._logger, context=context)

    def group_created(self, namespace: str, name: str) -> None:
        """Record that a permission group was created."""
        self._logger.info(
            "group_created",
            namespace=namespace,
            group=name,
            **self._get_context_kwargs(),
        )

    def group_creation_failed(self, namespace: str, name: str, error: str) -> None:
        """Record that permission group creation failed."""
        self._logger.warning(
            "group_creation_failed",
            namespace=namespace,
            group=name,
            error=error,
            **self._get_context_kwargs(),
        )

    def group_deleted(self, namespace: str, name: str) -> None:
        """Record that a permission group was deleted."""
        self._logger.info(
            "group_deleted",
            namespace=namespace,
            group=name,
            **self._get_context_kwargs(),
        )

    def group_deletion_failed(self, namespace: str, name: str, error: str) -> None:
        """Record that permission group deletion failed."""
        self._logger.warning(
            "group_deletion_failed",
            namespace=namespace,
            group=name,
            error=error,
            **self._get_context_kwargs(),
        )

    def reserved_group_rejected(
        self, namespace: str, name: str, operation: str
    ) -> None:
        """Record that an operation on the reserved group was refused."""
        self._logger.warning(
            "reserved_group_rejected",
            namespace=namespace,
            group=name,
            operation=operation,
            **self._get_context_kwargs(),
        )

    def groups_listed(self, namespace: str, count: int) -> None:
        """Record that the groups of a namespace were listed."""
        self._logger.debug(
            "groups_listed",
            namespace=namespace,
            count=count,
            **self._get_context_kwargs(),
        )

    def no_groups_configured(self, namespace: str) -> None:
        """Record that a namespace has no permission groups."""
        self._logger.info(
            "no_groups_configured",
            namespace=namespace,
            **self._get_context_kwargs(),
        )
