"""Role kinds and their baseline permissions.

``DEFAULT_PERMISSIONS`` is the static, process-wide table consulted by
the access decision whenever a principal carries no custom override.
It is wrapped in ``MappingProxyType`` and built from tuples, so it
cannot be mutated at runtime.
"""

from enum import StrEnum
from types import MappingProxyType
from typing import Any

from tooldash.core.permissions.vocabulary import Action, Permission, Resource


class RoleKind(StrEnum):
    """The three caller classes."""

    SYSTEM_ADMIN = "system_admin"
    ADMIN = "admin"
    USER = "user"


def _grant(resource: Resource, *actions: Action) -> tuple[Permission, ...]:
    return tuple(Permission(resource, action) for action in actions)


# ── System admin: everything ──
_SYSTEM_ADMIN_PERMS: tuple[Permission, ...] = _grant(Resource.ALL, Action.MANAGE)

# ── Admin: manages every operational area, reads dashboard and reports ──
_ADMIN_PERMS: tuple[Permission, ...] = (
    *_grant(Resource.USERS, Action.MANAGE),
    *_grant(Resource.EQUIPMENT, Action.MANAGE),
    *_grant(Resource.ENDMILLS, Action.MANAGE),
    *_grant(Resource.INVENTORY, Action.MANAGE),
    *_grant(Resource.CAM_SHEETS, Action.MANAGE),
    *_grant(Resource.TOOL_CHANGES, Action.MANAGE),
    *_grant(Resource.ENDMILL_DISPOSALS, Action.MANAGE),
    *_grant(Resource.SETTINGS, Action.MANAGE),
    *_grant(Resource.AI_INSIGHTS, Action.MANAGE),
    *_grant(Resource.DASHBOARD, Action.READ),
    *_grant(Resource.REPORTS, Action.READ),
)

# ── User: read-only floor access, records tool changes, uses AI insights ──
_USER_PERMS: tuple[Permission, ...] = (
    *_grant(Resource.DASHBOARD, Action.READ),
    *_grant(Resource.EQUIPMENT, Action.READ),
    *_grant(Resource.ENDMILLS, Action.READ),
    *_grant(Resource.INVENTORY, Action.READ),
    *_grant(Resource.CAM_SHEETS, Action.READ),
    *_grant(Resource.TOOL_CHANGES, Action.CREATE, Action.READ, Action.UPDATE),
    *_grant(Resource.ENDMILL_DISPOSALS, Action.READ),
    *_grant(Resource.REPORTS, Action.READ),
    *_grant(Resource.AI_INSIGHTS, Action.USE),
)


DEFAULT_PERMISSIONS: MappingProxyType[RoleKind, tuple[Permission, ...]] = (
    MappingProxyType(
        {
            RoleKind.SYSTEM_ADMIN: _SYSTEM_ADMIN_PERMS,
            RoleKind.ADMIN: _ADMIN_PERMS,
            RoleKind.USER: _USER_PERMS,
        }
    )
)


def coerce_role(role: Any) -> RoleKind | None:
    """Map a raw role value onto ``RoleKind``; ``None`` when unknown."""
    try:
        return RoleKind(role)
    except (TypeError, ValueError):
        return None


def get_default_permissions(role: Any) -> tuple[Permission, ...]:
    """Return the baseline list for ``role``; empty for an unknown role."""
    kind = coerce_role(role)
    if kind is None:
        return ()
    return DEFAULT_PERMISSIONS[kind]

