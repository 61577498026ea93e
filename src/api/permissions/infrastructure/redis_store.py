"""Key-value implementation of IPermissionStore on Redis.

Layout per namespace:

    {prefix}:{namespace}:groups                 hash   name -> description
    {prefix}:{namespace}:group:{name}:members   set    principal ids

Namespace and group name are percent-encoded before they are placed in a
key, so a `:` inside either can never reach another namespace's keys.

The groups hash is the authoritative record of which groups exist; a
member set without a hash field is never consulted.
"""

from __future__ import annotations

from urllib.parse import quote

from redis.asyncio import Redis
from redis.exceptions import RedisError, WatchError

from permissions.domain.value_objects import PermissionGroup
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


def _key_part(value: str) -> str:
    """Encode one identifier for use as a single key segment."""
    return quote(value, safe="")


class RedisPermissionStore(IPermissionStore):
    """Permission store backed by an async Redis client."""

    def __init__(
        self,
        client: Redis,
        key_prefix: str = "perms",
        probe: PermissionStoreProbe | None = None,
    ) -> None:
        self._client = client
        self._prefix = key_prefix
        self._probe = probe or DefaultPermissionStoreProbe()

    def _groups_key(self, namespace: str) -> str:
        return f"{self._prefix}:{_key_part(namespace)}:groups"

    def _members_key(self, namespace: str, name: str) -> str:
        return (
            f"{self._prefix}:{_key_part(namespace)}:group:{_key_part(name)}:members"
        )

    def _unavailable(
        self, operation: str, namespace: str | None, error: RedisError
    ) -> StoreUnavailableError:
        self._probe.store_operation_failed(operation, namespace, error)
        return StoreUnavailableError(operation, namespace)

    async def _require_group(self, namespace: str, name: str) -> None:
        if not await self._client.hexists(self._groups_key(namespace), name):
            self._probe.group_not_found(namespace, name)
            raise GroupNotFoundError(name, namespace)

    async def group_exists(self, namespace: str, name: str) -> bool:
        try:
            return bool(await self._client.hexists(self._groups_key(namespace), name))
        except RedisError as e:
            raise self._unavailable("group_exists", namespace, e) from e

    async def get_group(self, namespace: str, name: str) -> PermissionGroup | None:
        try:
            description = await self._client.hget(self._groups_key(namespace), name)
        except RedisError as e:
            raise self._unavailable("get_group", namespace, e) from e
        if description is None:
            return None
        return PermissionGroup(namespace=namespace, name=name, description=description)

    async def create_group(
        self, namespace: str, name: str, description: str
    ) -> PermissionGroup:
        """Create a group with HSETNX so concurrent creators cannot both win."""
        try:
            created = await self._client.hsetnx(
                self._groups_key(namespace), name, description
            )
        except RedisError as e:
            raise self._unavailable("create_group", namespace, e) from e

        if not created:
            self._probe.duplicate_group(namespace, name)
            raise DuplicateGroupError(name, namespace)

        self._probe.group_created(namespace, name)
        return PermissionGroup(namespace=namespace, name=name, description=description)

    async def delete_group(self, namespace: str, name: str) -> PermissionGroup:
        """Delete an empty group.

        The member set is WATCHed while it is counted, so a member added
        between the count and the MULTI/EXEC aborts the delete instead of
        orphaning the set.
        """
        groups_key = self._groups_key(namespace)
        members_key = self._members_key(namespace, name)
        try:
            async with self._client.pipeline(transaction=True) as pipe:
                await pipe.watch(members_key, groups_key)
                description = await pipe.hget(groups_key, name)
                if description is None:
                    self._probe.group_not_found(namespace, name)
                    raise GroupNotFoundError(name, namespace)
                member_count = await pipe.scard(members_key)
                if member_count > 0:
                    raise GroupNotEmptyError(name, namespace, member_count)
                pipe.multi()
                pipe.hdel(groups_key, name)
                pipe.delete(members_key)
                await pipe.execute()
        except WatchError as e:
            raise GroupNotEmptyError(name, namespace) from e
        except RedisError as e:
            raise self._unavailable("delete_group", namespace, e) from e

        self._probe.group_deleted(namespace, name)
        return PermissionGroup(namespace=namespace, name=name, description=description)

    async def list_groups(self, namespace: str) -> list[PermissionGroup]:
        try:
            entries = await self._client.hgetall(self._groups_key(namespace))
        except RedisError as e:
            raise self._unavailable("list_groups", namespace, e) from e
        return [
            PermissionGroup(namespace=namespace, name=name, description=description)
            for name, description in sorted(entries.items())
        ]

    async def add_member(self, namespace: str, group: str, principal: str) -> None:
        try:
            await self._require_group(namespace, group)
            added = await self._client.sadd(
                self._members_key(namespace, group), principal
            )
        except RedisError as e:
            raise self._unavailable("add_member", namespace, e) from e

        if added:
            self._probe.member_added(namespace, group, principal)

    async def remove_member(self, namespace: str, group: str, principal: str) -> None:
        try:
            await self._require_group(namespace, group)
            removed = await self._client.srem(
                self._members_key(namespace, group), principal
            )
        except RedisError as e:
            raise self._unavailable("remove_member", namespace, e) from e

        if not removed:
            raise NotAMemberError(group, namespace, principal)
        self._probe.member_removed(namespace, group, principal)

    async def is_member(self, namespace: str, group: str, principal: str) -> bool:
        try:
            if not await self._client.hexists(self._groups_key(namespace), group):
                return False
            return bool(
                await self._client.sismember(
                    self._members_key(namespace, group), principal
                )
            )
        except RedisError as e:
            raise self._unavailable("is_member", namespace, e) from e

    async def list_members(self, namespace: str, group: str) -> list[str]:
        try:
            await self._require_group(namespace, group)
            members = await self._client.smembers(self._members_key(namespace, group))
        except RedisError as e:
            raise self._unavailable("list_members", namespace, e) from e
        return sorted(members)

    async def list_groups_for_principal(
        self, namespace: str, principal: str
    ) -> list[str]:
        """Test the principal against every group's set in one round trip."""
        try:
            names = sorted(await self._client.hkeys(self._groups_key(namespace)))
            if not names:
                return []
            async with self._client.pipeline(transaction=False) as pipe:
                for name in names:
                    pipe.sismember(self._members_key(namespace, name), principal)
                results = await pipe.execute()
        except RedisError as e:
            raise self._unavailable("list_groups_for_principal", namespace, e) from e
        return [name for name, member in zip(names, results) if member]

    async def ping(self) -> bool:
        try:
            return bool(await self._client.ping())
        except (RedisError, OSError) as e:
            self._probe.store_operation_failed("ping", None, e)
            return False

    async def close(self) -> None:
        await self._client.aclose()
