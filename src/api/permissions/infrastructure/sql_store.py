"""Relational implementation of IPermissionStore.

Groups live in the ``permissions`` table and member sets in the
``permission_membership`` join table. Each public method is one logical
store operation running in its own session; the engine's connection pool
is the only state shared between concurrent calls.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import delete, func, select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_sessionmaker
from permissions.domain.value_objects import PermissionGroup
from permissions.infrastructure.models import (
    PermissionMembershipModel,
    PermissionModel,
)
from permissions.infrastructure.observability import (
    DefaultPermissionStoreProbe,
    PermissionStoreProbe,
)
from permissions.ports.exceptions import (
    DuplicateGroupError,
    GroupNotEmptyError,
    GroupNotFoundError,
    NotAMemberError,
    StoreUnavailableError,
)
from permissions.ports.repositories import IPermissionStore


class SqlPermissionStore(IPermissionStore):
    """Permission store backed by an async SQLAlchemy engine.

    Every statement filters on the namespace column, so no query can see
    rows belonging to another namespace. Absence is detected from empty
    result sets and affected-row counts and reported as domain errors.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        probe: PermissionStoreProbe | None = None,
        sessionmaker: async_sessionmaker[AsyncSession] | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            engine: Async engine owning the connection pool
            probe: Optional domain probe for observability
            sessionmaker: Optional session factory (defaults to one bound to engine)
        """
        self._engine = engine
        self._sessionmaker = sessionmaker or create_sessionmaker(engine)
        self._probe = probe or DefaultPermissionStoreProbe()

    @contextmanager
    def _store_errors(self, operation: str, namespace: str | None) -> Iterator[None]:
        """Translate driver failures into StoreUnavailableError."""
        try:
            yield
        except (SQLAlchemyError, OSError) as e:
            self._probe.store_operation_failed(operation, namespace, e)
            raise StoreUnavailableError(operation, namespace) from e

    @staticmethod
    def _to_domain(model: PermissionModel) -> PermissionGroup:
        return PermissionGroup(
            namespace=model.namespace,
            name=model.name,
            description=model.description,
        )

    async def _find_group(
        self, session: AsyncSession, namespace: str, name: str
    ) -> PermissionModel | None:
        stmt = select(PermissionModel).where(
            PermissionModel.namespace == namespace,
            PermissionModel.name == name,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def _require_group(
        self, session: AsyncSession, namespace: str, name: str
    ) -> PermissionModel:
        model = await self._find_group(session, namespace, name)
        if model is None:
            self._probe.group_not_found(namespace, name)
            raise GroupNotFoundError(name, namespace)
        return model

    async def group_exists(self, namespace: str, name: str) -> bool:
        with self._store_errors("group_exists", namespace):
            async with self._sessionmaker() as session:
                return await self._find_group(session, namespace, name) is not None

    async def get_group(self, namespace: str, name: str) -> PermissionGroup | None:
        with self._store_errors("get_group", namespace):
            async with self._sessionmaker() as session:
                model = await self._find_group(session, namespace, name)
                return self._to_domain(model) if model is not None else None

    async def create_group(
        self, namespace: str, name: str, description: str
    ) -> PermissionGroup:
        """Insert a group row; the (namespace, name) unique constraint detects duplicates."""
        with self._store_errors("create_group", namespace):
            try:
                async with self._sessionmaker() as session:
                    async with session.begin():
                        model = PermissionModel(
                            namespace=namespace,
                            name=name,
                            description=description,
                        )
                        session.add(model)
                        # Flush to surface the unique violation inside the transaction
                        await session.flush()
            except IntegrityError as e:
                self._probe.duplicate_group(namespace, name)
                raise DuplicateGroupError(name, namespace) from e

        self._probe.group_created(namespace, name)
        return PermissionGroup(namespace=namespace, name=name, description=description)

    async def delete_group(self, namespace: str, name: str) -> PermissionGroup:
        """Delete an empty group row.

        The member count is checked in the same transaction as the delete.
        The RESTRICT foreign key rejects the delete if a member is inserted
        concurrently after the count.
        """
        with self._store_errors("delete_group", namespace):
            try:
                async with self._sessionmaker() as session:
                    async with session.begin():
                        model = await self._require_group(session, namespace, name)
                        count_stmt = select(func.count()).where(
                            PermissionMembershipModel.permission_id == model.id
                        )
                        member_count = (await session.execute(count_stmt)).scalar_one()
                        if member_count > 0:
                            raise GroupNotEmptyError(name, namespace, member_count)
                        deleted = self._to_domain(model)
                        await session.delete(model)
            except IntegrityError as e:
                raise GroupNotEmptyError(name, namespace) from e

        self._probe.group_deleted(namespace, name)
        return deleted

    async def list_groups(self, namespace: str) -> list[PermissionGroup]:
        with self._store_errors("list_groups", namespace):
            async with self._sessionmaker() as session:
                stmt = (
                    select(PermissionModel)
                    .where(PermissionModel.namespace == namespace)
                    .order_by(PermissionModel.name)
                )
                result = await session.execute(stmt)
                return [self._to_domain(m) for m in result.scalars().all()]

    async def add_member(self, namespace: str, group: str, principal: str) -> None:
        """Insert a membership row unless one already exists.

        A unique-constraint collision means a concurrent caller added the
        same principal first, which satisfies the idempotent contract. A
        foreign key collision means the group vanished underneath us.
        """
        with self._store_errors("add_member", namespace):
            try:
                async with self._sessionmaker() as session:
                    async with session.begin():
                        model = await self._require_group(session, namespace, group)
                        existing = await session.execute(
                            select(PermissionMembershipModel.id).where(
                                PermissionMembershipModel.permission_id == model.id,
                                PermissionMembershipModel.user_id == principal,
                            )
                        )
                        if existing.first() is not None:
                            return
                        session.add(
                            PermissionMembershipModel(
                                namespace=namespace,
                                permission_id=model.id,
                                user_id=principal,
                            )
                        )
            except IntegrityError as e:
                if await self.is_member(namespace, group, principal):
                    return
                raise GroupNotFoundError(group, namespace) from e

        self._probe.member_added(namespace, group, principal)

    async def remove_member(self, namespace: str, group: str, principal: str) -> None:
        with self._store_errors("remove_member", namespace):
            async with self._sessionmaker() as session:
                async with session.begin():
                    model = await self._require_group(session, namespace, group)
                    result = await session.execute(
                        delete(PermissionMembershipModel).where(
                            PermissionMembershipModel.namespace == namespace,
                            PermissionMembershipModel.permission_id == model.id,
                            PermissionMembershipModel.user_id == principal,
                        )
                    )
                    if result.rowcount == 0:
                        raise NotAMemberError(group, namespace, principal)

        self._probe.member_removed(namespace, group, principal)

    async def is_member(self, namespace: str, group: str, principal: str) -> bool:
        with self._store_errors("is_member", namespace):
            async with self._sessionmaker() as session:
                stmt = (
                    select(PermissionMembershipModel.id)
                    .join(
                        PermissionModel,
                        PermissionModel.id == PermissionMembershipModel.permission_id,
                    )
                    .where(
                        PermissionModel.namespace == namespace,
                        PermissionModel.name == group,
                        PermissionMembershipModel.user_id == principal,
                    )
                    .limit(1)
                )
                result = await session.execute(stmt)
                return result.first() is not None

    async def list_members(self, namespace: str, group: str) -> list[str]:
        with self._store_errors("list_members", namespace):
            async with self._sessionmaker() as session:
                model = await self._require_group(session, namespace, group)
                stmt = (
                    select(PermissionMembershipModel.user_id)
                    .where(PermissionMembershipModel.permission_id == model.id)
                    .order_by(PermissionMembershipModel.user_id)
                )
                result = await session.execute(stmt)
                return list(result.scalars().all())

    async def list_groups_for_principal(
        self, namespace: str, principal: str
    ) -> list[str]:
        with self._store_errors("list_groups_for_principal", namespace):
            async with self._sessionmaker() as session:
                stmt = (
                    select(PermissionModel.name)
                    .join(
                        PermissionMembershipModel,
                        PermissionMembershipModel.permission_id == PermissionModel.id,
                    )
                    .where(
                        PermissionModel.namespace == namespace,
                        PermissionMembershipModel.user_id == principal,
                    )
                    .order_by(PermissionModel.name)
                )
                result = await session.execute(stmt)
                return list(result.scalars().all())

    async def ping(self) -> bool:
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except (SQLAlchemyError, OSError) as e:
            self._probe.store_operation_failed("ping", None, e)
            return False

    async def close(self) -> None:
        await self._engine.dispose()
