"""Unit tests for role defaults."""

import pytest

from tooldash.core.permissions.defaults import (
    DEFAULT_PERMISSIONS,
    RoleKind,
    coerce_role,
    get_default_permissions,
)
from tooldash.core.permissions.matrix import get_default_permission_matrix
from tooldash.core.permissions.vocabulary import Permission


pytestmark = pytest.mark.unit


class TestDefaultPermissions:
    """Tests for the static baseline table."""

    def test_system_admin_is_wildcard_manage(self):
        """system_admin should hold exactly {*, manage}."""
        assert DEFAULT_PERMISSIONS[RoleKind.SYSTEM_ADMIN] == (Permission("*", "manage"),)

    def test_admin_manages_operational_areas(self):
        """admin should manage every operational area and read dashboard/reports."""
        matrix = get_default_permission_matrix("admin")

        for resource in (
            "users",
            "equipment",
            "endmills",
            "inventory",
            "cam_sheets",
            "tool_changes",
            "endmill_disposals",
            "settings",
            "ai_insights",
        ):
            assert matrix[resource] == ["manage"]
        assert matrix["dashboard"] == ["read"]
        assert matrix["reports"] == ["read"]

    def test_user_defaults(self):
        """user should read floor data, record tool changes and use AI insights."""
        matrix = get_default_permission_matrix(RoleKind.USER)

        assert matrix["tool_changes"] == ["create", "read", "update"]
        assert matrix["ai_insights"] == ["use"]
        assert matrix["endmills"] == ["read"]
        assert "settings" not in matrix
        assert "users" not in matrix

    def test_table_is_read_only(self):
        """DEFAULT_PERMISSIONS should not be mutable at runtime."""
        with pytest.raises(TypeError):
            DEFAULT_PERMISSIONS[RoleKind.USER] = ()  # type: ignore[index]

    def test_matrix_action_lists_are_duplicate_free(self):
        """Every action list in a default matrix should be unique."""
        for kind in RoleKind:
            for actions in get_default_permission_matrix(kind).values():
                assert len(actions) == len(set(actions))

    def test_matrix_is_a_fresh_copy(self):
        """Mutating a returned matrix should not affect later calls."""
        matrix = get_default_permission_matrix("user")
        matrix["endmills"].append("delete")

        assert get_default_permission_matrix("user")["endmills"] == ["read"]


class TestCoerceRole:
    """Tests for role normalisation."""

    @pytest.mark.parametrize("value", ["user", RoleKind.USER])
    def test_known_role(self, value):
        """Strings and members should map to the same RoleKind."""
        assert coerce_role(value) is RoleKind.USER

    @pytest.mark.parametrize("value", ["operator", "", None, 3, ["admin"]])
    def test_unknown_role(self, value):
        """Unknown values should map to None."""
        assert coerce_role(value) is None

    def test_unknown_role_has_no_defaults(self):
        """An unknown role should have an empty baseline."""
        assert get_default_permissions("operator") == ()
        assert get_default_permission_matrix("operator") == {}
