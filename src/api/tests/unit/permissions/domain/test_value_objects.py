"""Unit tests for permissions domain value objects."""

import dataclasses

import pytest

from permissions.domain.value_objects import (
    SERVER_ADMINS,
    SERVER_ADMINS_DESCRIPTION,
    PermissionGroup,
    is_reserved_group,
)


class TestReservedGroup:
    """Tests for the reserved bootstrap group name."""

    def test_server_admins_constants(self):
        assert SERVER_ADMINS == "server_admins"
        assert SERVER_ADMINS_DESCRIPTION == "Server Admins"

    def test_server_admins_is_reserved(self):
        assert is_reserved_group("server_admins") is True

    @pytest.mark.parametrize("name", ["officers", "Server_Admins", "server_admins ", ""])
    def test_other_names_are_not_reserved(self, name):
        """Only the exact reserved name is reserved."""
        assert is_reserved_group(name) is False


class TestPermissionGroup:
    """Tests for the PermissionGroup value object."""

    def test_description_defaults_to_empty(self):
        group = PermissionGroup(namespace="alpha", name="officers")
        assert group.description == ""

    def test_is_immutable(self):
        group = PermissionGroup(namespace="alpha", name="officers", description="d")
        with pytest.raises(dataclasses.FrozenInstanceError):
            group.name = "other"  # type: ignore[misc]

    def test_equality_by_value(self):
        assert PermissionGroup("alpha", "g", "d") == PermissionGroup("alpha", "g", "d")
        assert PermissionGroup("alpha", "g", "d") != PermissionGroup("beta", "g", "d")

    def test_is_reserved_property(self):
        assert PermissionGroup("alpha", SERVER_ADMINS).is_reserved is True
        assert PermissionGroup("alpha", "officers").is_reserved is False
