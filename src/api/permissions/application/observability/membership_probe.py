"""Protocol for membership observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class MembershipProbe(Protocol):
    """Domain probe for group membership operations."""

    def member_added(self, namespace: str, group: str, principal: str) -> None:
        """Record that a principal was added to a group."""
        ...

    def member_addition_failed(
        self, namespace: str, group: str, principal: str, error: str
    ) -> None:
        """Record that adding a principal to a group failed."""
        ...

    def member_removed(self, namespace: str, group: str, principal: str) -> None:
        """Record that a principal was removed from a group."""
        ...

    def member_removal_failed(
        self, namespace: str, group: str, principal: str, error: str
    ) -> None:
        """Record that removing a principal from a group failed."""
        ...

    def reserved_group_rejected(
        self, namespace: str, group: str, operation: str
    ) -> None:
        """Record that a membership change on the reserved group was refused."""
        ...

    def members_listed(self, namespace: str, group: str, count: int) -> None:
        """Record that a group's members were listed."""
        ...

    def principal_groups_listed(
        self, namespace: str, principal: str, count: int
    ) -> None:
        """Record that a principal's groups were listed."""
        ...

    def with_context(self, context: ObservationContext) -> MembershipProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultMembershipProbe:
    """Default implementation of MembershipProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultMembershipProbe:
        """Create a new probe with observation context bound."""
        return DefaultMembershipProbe(logger=self._logger, context=context)

    def member_added(self, namespace: str, group: str, principal: str) -> None:
        self._logger.info(
            "member_added",
            namespace=namespace,
            group=group,
            principal=principal,
            **self._get_context_kwargs(),
        )

    def member_addition_failed(
        self, namespace: str, group: str, principal: str, error: str
    ) -> None:
        self._logger.warning(
            "member_addition_failed",
            namespace=namespace,
            group=group,
            principal=principal,
            error=error,
            **self._get_context_kwargs(),
        )

    def member_removed(self, namespace: str, group: str, principal: str) -> None:
        self._logger.info(
            "member_removed",
            namespace=namespace,
            group=group,
            principal=principal,
            **self._get_context_kwargs(),
        )

    def member_removal_failed(
        self, namespace: str, group: str, principal: str, error: str
    ) -> None:
        self._logger.warning(
            "member_removal_failed",
            namespace=namespace,
            group=group,
            principal=principal,
            error=error,
            **self._get_context_kwargs(),
        )

    def reserved_group_rejected(
        self, namespace: str, group: str, operation: str
    ) -> None:
        self._logger.warning(
            "reserved_group_rejected",
            namespace=namespace,
            group=group,
            operation=operation,
            **self._get_context_kwargs(),
        )

    def members_listed(self, namespace: str, group: str, count: int) -> None:
        self._logger.debug(
            "members_listed",
            namespace=namespace,
            group=group,
            count=count,
            **self._get_context_kwargs(),
        )

    def principal_groups_listed(
        self, namespace: str, principal: str, count: int
    ) -> None:
        self._logger.debug(
            "principal_groups_listed",
            namespace=namespace,
            principal=principal,
            count=count,
            **self._get_context_kwargs(),
        )
