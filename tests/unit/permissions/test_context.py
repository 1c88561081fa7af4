"""Unit tests for AuthContext."""

from uuid import uuid4

import pytest

from tooldash.core.permissions.context import AuthContext
from tooldash.core.permissions.defaults import RoleKind, get_default_permissions
from tooldash.core.permissions.vocabulary import Permission


pytestmark = pytest.mark.unit


def _context(role: RoleKind, **kwargs) -> AuthContext:
    return AuthContext(
        principal_id=uuid4(),
        profile_id=uuid4(),
        role_kind=role,
        role_baseline_permissions=get_default_permissions(role),
        **kwargs,
    )


class TestAuthContext:
    """Tests for per-request decisions on a resolved caller."""

    def test_uses_role_defaults(self):
        """Without custom permissions the role baseline decides."""
        context = _context(RoleKind.USER)

        assert context.has_permission("endmills", "read") is True
        assert context.has_permission("endmills", "delete") is False

    def test_custom_permissions_override(self):
        """Custom permissions should replace the baseline."""
        context = _context(
            RoleKind.USER,
            custom_permissions=(Permission("endmills", "delete"),),
        )

        assert context.has_permission("endmills", "delete") is True
        assert context.has_permission("endmills", "read") is False
        assert context.effective_matrix == {"endmills": ["delete"]}

    @pytest.mark.parametrize("role", list(RoleKind))
    def test_inactive_denies_everything(self, role):
        """An inactive caller should be denied even as system_admin."""
        context = _context(role, is_active=False)

        assert context.has_permission("dashboard", "read") is False

    def test_effective_permissions_fall_back_to_baseline(self):
        """effective_permissions should be the baseline when no override exists."""
        context = _context(RoleKind.ADMIN)

        assert context.effective_permissions == get_default_permissions("admin")

    def test_system_admin_effective_ignores_custom(self):
        """system_admin should report its baseline even when custom permissions exist."""
        context = _context(
            RoleKind.SYSTEM_ADMIN,
            custom_permissions=(Permission("endmills", "read"),),
        )

        assert context.effective_permissions == (Permission("*", "manage"),)
        assert context.effective_matrix == {"*": ["manage"]}
        assert context.has_permission("settings", "delete") is True

    def test_is_immutable(self):
        """AuthContext should be frozen."""
        context = _context(RoleKind.USER)

        with pytest.raises(AttributeError):
            context.role_kind = RoleKind.ADMIN  # type: ignore[misc]

    def test_actor(self):
        """actor should combine role and principal for log lines."""
        context = _context(RoleKind.ADMIN)

        assert context.actor == f"admin:{context.principal_id}"
