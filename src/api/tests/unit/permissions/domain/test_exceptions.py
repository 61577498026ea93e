"""Unit tests for permissions domain exceptions.

Administrative errors must name the offending group and principal so the
transport can report them.
"""

from permissions.ports.exceptions import (
    DuplicateGroupError,
    GroupNotEmptyError,
    GroupNotFoundError,
    NoPermissionsConfiguredError,
    NotAMemberError,
    PermissionsError,
    ReservedGroupNameError,
    StoreUnavailableError,
)


class TestExceptionHierarchy:
    def test_all_errors_derive_from_permissions_error(self):
        errors = [
            ReservedGroupNameError("server_admins"),
            DuplicateGroupError("g", "alpha"),
            GroupNotFoundError("g", "alpha"),
            GroupNotEmptyError("g", "alpha", 2),
            NotAMemberError("g", "alpha", "42"),
            NoPermissionsConfiguredError("beta"),
            StoreUnavailableError("list_groups", "alpha"),
        ]
        for error in errors:
            assert isinstance(error, PermissionsError)


class TestExceptionMessages:
    def test_reserved_names_group(self):
        error = ReservedGroupNameError("server_admins", "alpha")
        assert "server_admins" in str(error)
        assert error.group == "server_admins"
        assert error.namespace == "alpha"

    def test_duplicate_names_group(self):
        error = DuplicateGroupError("officers", "alpha")
        assert "officers" in str(error)
        assert error.group == "officers"

    def test_not_found_names_group(self):
        error = GroupNotFoundError("officers", "alpha")
        assert "officers" in str(error)

    def test_not_empty_reports_member_count(self):
        error = GroupNotEmptyError("officers", "alpha", 3)
        assert "3 member(s)" in str(error)
        assert error.member_count == 3

    def test_not_empty_without_count(self):
        error = GroupNotEmptyError("officers", "alpha")
        assert "still has members" in str(error)
        assert error.member_count is None

    def test_not_a_member_names_principal_and_group(self):
        error = NotAMemberError("officers", "alpha", "7")
        assert "7" in str(error)
        assert "officers" in str(error)
        assert error.principal == "7"

    def test_no_permissions_configured_names_namespace(self):
        error = NoPermissionsConfiguredError("beta")
        assert "beta" in str(error)
        assert error.namespace == "beta"

    def test_store_unavailable_records_operation(self):
        error = StoreUnavailableError("add_member", "alpha")
        assert error.operation == "add_member"
        assert "add_member" in str(error)
