"""Domain probe for permission store operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events emitted by both store implementations, so a
relational and a key-value deployment produce the same event stream.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class PermissionStoreProbe(Protocol):
    """Domain probe for permission store operations."""

    def group_created(self, namespace: str, name: str) -> None:
        """Record that a group record was persisted."""
        ...

    def group_deleted(self, namespace: str, name: str) -> None:
        """Record that a group record was removed."""
        ...

    def duplicate_group(self, namespace: str, name: str) -> None:
        """Record that a group insert collided with an existing name."""
        ...

    def group_not_found(self, namespace: str, name: str) -> None:
        """Record that an operation referenced a missing group."""
        ...

    def member_added(self, namespace: str, group: str, principal: str) -> None:
        """Record that a principal was added to a member set."""
        ...

    def member_removed(self, namespace: str, group: str, principal: str) -> None:
        """Record that a principal was removed from a member set."""
        ...

    def store_operation_failed(
        self, operation: str, namespace: str | None, error: Exception
    ) -> None:
        """Record that the backing store raised a driver error."""
        ...

    def with_context(self, context: ObservationContext) -> PermissionStoreProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultPermissionStoreProbe:
    """Default implementation of PermissionStoreProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultPermissionStoreProbe:
        """Create a new probe with observation context bound."""
        return DefaultPermissionStoreProbe(logger=self._logger, context=context)

    def group_created(self, namespace: str, name: str) -> None:
        """Record that a group record was persisted."""
        self._logger.info(
            "permission_group_created",
            namespace=namespace,
            group=name,
            **self._get_context_kwargs(),
        )

    def group_deleted(self, namespace: str, name: str) -> None:
        """Record that a group record was removed."""
        self._logger.info(
            "permission_group_deleted",
            namespace=namespace,
            group=name,
            **self._get_context_kwargs(),
        )

    def duplicate_group(self, namespace: str, name: str) -> None:
        """Record that a group insert collided with an existing name."""
        self._logger.warning(
            "duplicate_permission_group",
            namespace=namespace,
            group=name,
            **self._get_context_kwargs(),
        )

    def group_not_found(self, namespace: str, name: str) -> None:
        """Record that an operation referenced a missing group."""
        self._logger.debug(
            "permission_group_not_found",
            namespace=namespace,
            group=name,
            **self._get_context_kwargs(),
        )

    def member_added(self, namespace: str, group: str, principal: str) -> None:
        """Record that a principal was added to a member set."""
        self._logger.info(
            "permission_member_added",
            namespace=namespace,
            group=group,
            principal=principal,
            **self._get_context_kwargs(),
        )

    def member_removed(self, namespace: str, group: str, principal: str) -> None:
        """Record that a principal was removed from a member set."""
        self._logger.info(
            "permission_member_removed",
            namespace=namespace,
            group=group,
            principal=principal,
            **self._get_context_kwargs(),
        )

    def store_operation_failed(
        self, operation: str, namespace: str | None, error: Exception
    ) -> None:
        """Record that the backing store raised a driver error."""
        self._logger.error(
            "permission_store_operation_failed",
            operation=operation,
            namespace=namespace,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
