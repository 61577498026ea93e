"""Unit tests for RedisPermissionStore against a mocked asyncio client.

The tests pin the key layout and the commands used for each operation, and
the translation of absence and driver errors into domain errors.
"""

from unittest.mock import AsyncMock, MagicMock, call

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import WatchError

from permissions.domain.value_objects import PermissionGroup
from permissions.infrastructure.redis_store import RedisPermissionStore
from permissions.ports.exceptions import (
    DuplicateGroupError,
    GroupNotEmptyError,
    GroupNotFoundError,
    NotAMemberError,
    StoreUnavailableError,
)

GROUPS_KEY = "perms:alpha:groups"
OFFICERS_KEY = "perms:alpha:group:officers:members"


@pytest.fixture
def mock_pipeline() -> MagicMock:
    """Pipeline usable as an async context manager."""
    pipe = MagicMock()
    pipe.__aenter__ = AsyncMock(return_value=pipe)
    pipe.__aexit__ = AsyncMock(return_value=False)
    pipe.watch = AsyncMock()
    pipe.hget = AsyncMock(return_value="Ship officers")
    pipe.scard = AsyncMock(return_value=0)
    pipe.execute = AsyncMock(return_value=[1, 0])
    return pipe


@pytest.fixture
def mock_client(mock_pipeline) -> AsyncMock:
    client = AsyncMock()
    client.pipeline = MagicMock(return_value=mock_pipeline)
    return client


@pytest.fixture
def redis_store(mock_client, mock_store_probe) -> RedisPermissionStore:
    return RedisPermissionStore(
        client=mock_client, key_prefix="perms", probe=mock_store_probe
    )


class TestGroups:
    @pytest.mark.asyncio
    async def test_create_uses_hsetnx(self, redis_store, mock_client, mock_store_probe):
        mock_client.hsetnx.return_value = 1

        group = await redis_store.create_group("alpha", "officers", "Ship officers")

        assert group == PermissionGroup("alpha", "officers", "Ship officers")
        mock_client.hsetnx.assert_awaited_once_with(
            GROUPS_KEY, "officers", "Ship officers"
        )
        mock_store_probe.group_created.assert_called_once_with("alpha", "officers")

    @pytest.mark.asyncio
    async def test_create_existing_is_duplicate(self, redis_store, mock_client):
        mock_client.hsetnx.return_value = 0

        with pytest.raises(DuplicateGroupError):
            await redis_store.create_group("alpha", "officers", "d")

    @pytest.mark.asyncio
    async def test_get_group(self, redis_store, mock_client):
        mock_client.hget.return_value = "Ship officers"

        group = await redis_store.get_group("alpha", "officers")

        assert group == PermissionGroup("alpha", "officers", "Ship officers")
        mock_client.hget.assert_awaited_once_with(GROUPS_KEY, "officers")

    @pytest.mark.asyncio
    async def test_get_missing_group(self, redis_store, mock_client):
        mock_client.hget.return_value = None

        assert await redis_store.get_group("alpha", "ghosts") is None

    @pytest.mark.asyncio
    async def test_group_exists(self, redis_store, mock_client):
        mock_client.hexists.return_value = True

        assert await redis_store.group_exists("alpha", "officers") is True
        mock_client.hexists.assert_awaited_once_with(GROUPS_KEY, "officers")

    @pytest.mark.asyncio
    async def test_list_groups_sorted(self, redis_store, mock_client):
        mock_client.hgetall.return_value = {"pilots": "P", "crew": "C"}

        groups = await redis_store.list_groups("alpha")

        assert groups == [
            PermissionGroup("alpha", "crew", "C"),
            PermissionGroup("alpha", "pilots", "P"),
        ]

    @pytest.mark.asyncio
    async def test_list_groups_empty_namespace(self, redis_store, mock_client):
        mock_client.hgetall.return_value = {}

        assert await redis_store.list_groups("beta") == []


class TestDeleteGroup:
    @pytest.mark.asyncio
    async def test_deletes_hash_field_and_set_atomically(
        self, redis_store, mock_client, mock_pipeline
    ):
        deleted = await redis_store.delete_group("alpha", "officers")

        assert deleted == PermissionGroup("alpha", "officers", "Ship officers")
        mock_client.pipeline.assert_called_once_with(transaction=True)
        mock_pipeline.watch.assert_awaited_once_with(OFFICERS_KEY, GROUPS_KEY)
        mock_pipeline.multi.assert_called_once()
        mock_pipeline.hdel.assert_called_once_with(GROUPS_KEY, "officers")
        mock_pipeline.delete.assert_called_once_with(OFFICERS_KEY)
        mock_pipeline.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_group(self, redis_store, mock_pipeline):
        mock_pipeline.hget.return_value = None

        with pytest.raises(GroupNotFoundError):
            await redis_store.delete_group("alpha", "ghosts")

        mock_pipeline.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_group_with_members_is_refused(self, redis_store, mock_pipeline):
        mock_pipeline.scard.return_value = 2

        with pytest.raises(GroupNotEmptyError) as exc_info:
            await redis_store.delete_group("alpha", "officers")

        assert exc_info.value.member_count == 2
        mock_pipeline.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_concurrent_member_add_aborts_delete(self, redis_store, mock_pipeline):
        mock_pipeline.execute.side_effect = WatchError("watched key changed")

        with pytest.raises(GroupNotEmptyError):
            await redis_store.delete_group("alpha", "officers")


class TestMembership:
    @pytest.mark.asyncio
    async def test_add_member(self, redis_store, mock_client, mock_store_probe):
        mock_client.hexists.return_value = True
        mock_client.sadd.return_value = 1

        await redis_store.add_member("alpha", "officers", "42")

        mock_client.sadd.assert_awaited_once_with(OFFICERS_KEY, "42")
        mock_store_probe.member_added.assert_called_once_with("alpha", "officers", "42")

    @pytest.mark.asyncio
    async def test_add_existing_member_is_silent(
        self, redis_store, mock_client, mock_store_probe
    ):
        mock_client.hexists.return_value = True
        mock_client.sadd.return_value = 0

        await redis_store.add_member("alpha", "officers", "42")

        mock_store_probe.member_added.assert_not_called()

    @pytest.mark.asyncio
    async def test_add_member_to_missing_group(self, redis_store, mock_client):
        mock_client.hexists.return_value = False

        with pytest.raises(GroupNotFoundError):
            await redis_store.add_member("alpha", "ghosts", "42")

        mock_client.sadd.assert_not_called()

    @pytest.mark.asyncio
    async def test_remove_member(self, redis_store, mock_client):
        mock_client.hexists.return_value = True
        mock_client.srem.return_value = 1

        await redis_store.remove_member("alpha", "officers", "42")

        mock_client.srem.assert_awaited_once_with(OFFICERS_KEY, "42")

    @pytest.mark.asyncio
    async def test_remove_non_member(self, redis_store, mock_client):
        mock_client.hexists.return_value = True
        mock_client.srem.return_value = 0

        with pytest.raises(NotAMemberError):
            await redis_store.remove_member("alpha", "officers", "7")

    @pytest.mark.asyncio
    async def test_is_member_of_unknown_group_is_false(self, redis_store, mock_client):
        mock_client.hexists.return_value = False

        assert await redis_store.is_member("alpha", "ghosts", "42") is False
        mock_client.sismember.assert_not_called()

    @pytest.mark.asyncio
    async def test_is_member(self, redis_store, mock_client):
        mock_client.hexists.return_value = True
        mock_client.sismember.return_value = 1

        assert await redis_store.is_member("alpha", "officers", "42") is True
        mock_client.sismember.assert_awaited_once_with(OFFICERS_KEY, "42")

    @pytest.mark.asyncio
    async def test_list_members_sorted(self, redis_store, mock_client):
        mock_client.hexists.return_value = True
        mock_client.smembers.return_value = {"43", "42"}

        assert await redis_store.list_members("alpha", "officers") == ["42", "43"]

    @pytest.mark.asyncio
    async def test_list_members_of_missing_group(self, redis_store, mock_client):
        mock_client.hexists.return_value = False

        with pytest.raises(GroupNotFoundError):
            await redis_store.list_members("alpha", "ghosts")

    @pytest.mark.asyncio
    async def test_list_groups_for_principal(
        self, redis_store, mock_client, mock_pipeline
    ):
        mock_client.hkeys.return_value = ["officers", "crew"]
        mock_pipeline.execute.return_value = [1, 0]

        groups = await redis_store.list_groups_for_principal("alpha", "42")

        assert groups == ["crew"]
        mock_client.pipeline.assert_called_once_with(transaction=False)
        assert mock_pipeline.sismember.call_args_list == [
            call("perms:alpha:group:crew:members", "42"),
            call(OFFICERS_KEY, "42"),
        ]

    @pytest.mark.asyncio
    async def test_list_groups_for_principal_empty_namespace(
        self, redis_store, mock_client
    ):
        mock_client.hkeys.return_value = []

        assert await redis_store.list_groups_for_principal("beta", "42") == []
        mock_client.pipeline.assert_not_called()


class TestKeyLayout:
    """Namespace and group name never bleed into each other's key segments."""

    @pytest.mark.parametrize(
        ("first", "second"),
        [
            (("x", "y:group:server_admins"), ("x:group:y", "server_admins")),
            (("a:b", "c"), ("a", "b:c")),
            (("alpha", "officers%3A"), ("alpha", "officers:")),
        ],
    )
    def test_distinct_pairs_get_distinct_member_keys(self, redis_store, first, second):
        assert redis_store._members_key(*first) != redis_store._members_key(*second)

    def test_distinct_namespaces_get_distinct_group_hashes(self, redis_store):
        assert redis_store._groups_key("x") != redis_store._groups_key("x:groups")
        assert redis_store._groups_key("x:groups") != redis_store._groups_key(
            "x%3Agroups"
        )

    def test_plain_names_are_unchanged(self, redis_store):
        assert redis_store._groups_key("alpha") == GROUPS_KEY
        assert redis_store._members_key("alpha", "officers") == OFFICERS_KEY

    @pytest.mark.asyncio
    async def test_colon_in_group_name_is_encoded(self, redis_store, mock_client):
        mock_client.hexists.return_value = True
        mock_client.sadd.return_value = 1

        await redis_store.add_member("x", "y:group:server_admins", "666")

        mock_client.hexists.assert_awaited_once_with(
            "perms:x:groups", "y:group:server_admins"
        )
        mock_client.sadd.assert_awaited_once_with(
            "perms:x:group:y%3Agroup%3Aserver_admins:members", "666"
        )

    @pytest.mark.asyncio
    async def test_member_added_in_one_namespace_is_invisible_in_another(
        self, redis_store, mock_client
    ):
        """Writes land in an in-memory keyspace shared by both namespaces."""
        hashes: dict[str, dict[str, str]] = {}
        sets: dict[str, set[str]] = {}

        async def hsetnx(key, field, value):
            fields = hashes.setdefault(key, {})
            if field in fields:
                return 0
            fields[field] = value
            return 1

        async def hexists(key, field):
            return field in hashes.get(key, {})

        async def sadd(key, member):
            members = sets.setdefault(key, set())
            added = member not in members
            members.add(member)
            return int(added)

        async def sismember(key, member):
            return member in sets.get(key, set())

        async def smembers(key):
            return set(sets.get(key, set()))

        mock_client.hsetnx.side_effect = hsetnx
        mock_client.hexists.side_effect = hexists
        mock_client.sadd.side_effect = sadd
        mock_client.sismember.side_effect = sismember
        mock_client.smembers.side_effect = smembers

        await redis_store.create_group("x:group:y", "server_admins")
        await redis_store.create_group("x", "y:group:server_admins")
        await redis_store.add_member("x", "y:group:server_admins", "666")

        assert await redis_store.is_member("x", "y:group:server_admins", "666") is True
        assert await redis_store.is_member("x:group:y", "server_admins", "666") is False
        assert await redis_store.list_members("x:group:y", "server_admins") == []


class TestStoreFailures:
    @pytest.mark.asyncio
    async def test_redis_error_becomes_store_unavailable(
        self, redis_store, mock_client, mock_store_probe
    ):
        mock_client.hexists.side_effect = RedisConnectionError("connection refused")

        with pytest.raises(StoreUnavailableError) as exc_info:
            await redis_store.is_member("alpha", "officers", "42")

        assert exc_info.value.operation == "is_member"
        assert isinstance(exc_info.value.__cause__, RedisConnectionError)
        mock_store_probe.store_operation_failed.assert_called_once()

    @pytest.mark.asyncio
    async def test_ping(self, redis_store, mock_client):
        mock_client.ping.return_value = True

        assert await redis_store.ping() is True

    @pytest.mark.asyncio
    async def test_ping_failure(self, redis_store, mock_client):
        mock_client.ping.side_effect = RedisConnectionError("connection refused")

        assert await redis_store.ping() is False

    @pytest.mark.asyncio
    async def test_close(self, redis_store, mock_client):
        await redis_store.close()

        mock_client.aclose.assert_awaited_once()
