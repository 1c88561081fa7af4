"""Access decision logic.

``has_permission`` is the single function that answers "may this role
perform this action on this resource". It is pure and total: any input
produces a boolean, unknown roles or resources simply never match.
"""

from collections.abc import Sequence
from types import MappingProxyType
from typing import Any

from tooldash.core.permissions.defaults import (
    DEFAULT_PERMISSIONS,
    RoleKind,
    coerce_role,
)
from tooldash.core.permissions.vocabulary import (
    Action,
    Permission,
    Resource,
    value_of,
)


# Page path -> the single permission required to open it
PAGE_PERMISSIONS: MappingProxyType[str, Permission] = MappingProxyType(
    {
        "/dashboard": Permission(Resource.DASHBOARD, Action.READ),
        "/equipment": Permission(Resource.EQUIPMENT, Action.READ),
        "/endmills": Permission(Resource.ENDMILLS, Action.READ),
        "/inventory": Permission(Resource.INVENTORY, Action.READ),
        "/cam-sheets": Permission(Resource.CAM_SHEETS, Action.READ),
        "/tool-changes": Permission(Resource.TOOL_CHANGES, Action.READ),
        "/endmill-disposals": Permission(Resource.ENDMILL_DISPOSALS, Action.READ),
        "/reports": Permission(Resource.REPORTS, Action.READ),
        "/settings": Permission(Resource.SETTINGS, Action.READ),
        "/users": Permission(Resource.USERS, Action.READ),
        "/ai-insights": Permission(Resource.AI_INSIGHTS, Action.USE),
    }
)


def _effective_permissions(
    kind: RoleKind | None,
    custom_permissions: Sequence[Permission] | None,
) -> Sequence[Any]:
    # Override wins: a non-empty custom list replaces the defaults entirely
    if (
        isinstance(custom_permissions, Sequence)
        and not isinstance(custom_permissions, str)
        and len(custom_permissions) > 0
    ):
        return custom_permissions
    if kind is None:
        return ()
    return DEFAULT_PERMISSIONS[kind]


def _grants(entry: Any, resource: Any, action: Any) -> bool:
    entry_resource = getattr(entry, "resource", None)
    entry_action = getattr(entry, "action", None)

    if entry_resource == Resource.ALL.value and entry_action == Action.MANAGE.value:
        return True
    if entry_resource != resource:
        return False
    return entry_action == Action.MANAGE.value or entry_action == action


def has_permission(
    role: Any,
    resource: Any,
    action: Any,
    custom_permissions: Sequence[Permission] | None = None,
) -> bool:
    """Decide whether ``role`` may perform ``action`` on ``resource``.

    Args:
        role: The caller's role kind
        resource: The resource being accessed (e.g. "endmills")
        action: The action being performed (e.g. "update")
        custom_permissions: Per-principal override list. When non-empty it
            replaces the role defaults; it is never merged with them.

    Returns:
        True if access is allowed

    Note:
        ``system_admin`` is allowed unconditionally, before any list is
        consulted, so custom permissions cannot restrict it.
    """
    kind = coerce_role(role)
    if kind is RoleKind.SYSTEM_ADMIN:
        return True

    resource = value_of(resource)
    action = value_of(action)

    return any(
        _grants(entry, resource, action)
        for entry in _effective_permissions(kind, custom_permissions)
    )


def can_access_page(
    role: Any,
    page_path: str,
    custom_permissions: Sequence[Permission] | None = None,
) -> bool:
    """Check whether ``role`` may open the dashboard page at ``page_path``.

    Paths missing from ``PAGE_PERMISSIONS`` are allowed.
    """
    required = PAGE_PERMISSIONS.get(page_path) if isinstance(page_path, str) else None
    if required is None:
        return True

    return has_permission(role, required.resource, required.action, custom_permissions)


def is_admin(role: Any) -> bool:
    """Check whether ``role`` is ``admin`` or ``system_admin``."""
    return coerce_role(role) in (RoleKind.ADMIN, RoleKind.SYSTEM_ADMIN)


def is_system_admin(role: Any) -> bool:
    """Check whether ``role`` is ``system_admin``."""
    return coerce_role(role) is RoleKind.SYSTEM_ADMIN
