"""Permission matrix utilities.

A permission matrix is the storage and wire shape of a permission set:
a mapping of resource name to the list of actions granted on it, e.g.
``{"endmills": ["read", "update"], "tool_changes": ["manage"]}``.

Everything here is pure. Input coming from the database or an HTTP
body is untrusted; ``parse_permissions_from_db`` is the single place
where it is decoded into ``Permission`` records, and anything that does
not fit the closed vocabulary is dropped rather than rejected.
"""

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from tooldash.core.permissions.defaults import (
    RoleKind,
    coerce_role,
    get_default_permissions,
)
from tooldash.core.permissions.vocabulary import (
    AVAILABLE_ACTIONS,
    AVAILABLE_RESOURCES,
    Action,
    Permission,
    value_of,
)


PermissionMatrix = dict[str, list[str]]

_ACTION_LISTS = (list, tuple, set, frozenset)

ROLE_LEVELS: MappingProxyType[RoleKind, int] = MappingProxyType(
    {
        RoleKind.USER: 1,
        RoleKind.ADMIN: 2,
        RoleKind.SYSTEM_ADMIN: 3,
    }
)


def parse_permissions_from_db(raw: Any) -> list[Permission]:
    """Decode a loosely-typed matrix into a flat permission list.

    Unknown resources, unknown actions, non-string entries and
    non-list action values are skipped. Anything that is not a mapping
    yields an empty list. Never raises.

    Args:
        raw: The stored matrix, typically decoded JSON

    Returns:
        De-duplicated permissions in input order
    """
    if not isinstance(raw, Mapping):
        return []

    permissions: list[Permission] = []
    seen: set[Permission] = set()

    for resource, actions in raw.items():
        if not isinstance(resource, str) or resource not in AVAILABLE_RESOURCES:
            continue
        if not isinstance(actions, _ACTION_LISTS):
            continue
        for action in actions:
            if not isinstance(action, str) or action not in AVAILABLE_ACTIONS:
                continue
            permission = Permission(resource, action)
            if permission not in seen:
                seen.add(permission)
                permissions.append(permission)

    return permissions


def permissions_to_matrix(permissions: Iterable[Permission]) -> PermissionMatrix:
    """Group a permission list into matrix shape.

    Each resource's action list is duplicate-free and keeps first-seen
    order.
    """
    matrix: PermissionMatrix = {}
    for permission in permissions:
        actions = matrix.setdefault(permission.resource, [])
        if permission.action not in actions:
            actions.append(permission.action)
    return matrix


def get_default_permission_matrix(role: Any) -> PermissionMatrix:
    """Return the role's baseline permissions in matrix shape."""
    return permissions_to_matrix(get_default_permissions(role))


def has_permission_in_matrix(matrix: Any, resource: Any, action: Any) -> bool:
    """Check a single resource/action against a matrix.

    ``manage`` on the resource satisfies any action; otherwise the
    action itself must be listed.
    """
    resource = value_of(resource)
    action = value_of(action)
    if not isinstance(matrix, Mapping) or not isinstance(resource, str):
        return False

    actions = matrix.get(resource)
    if not isinstance(actions, _ACTION_LISTS):
        return False

    return Action.MANAGE.value in actions or (
        isinstance(action, str) and action in actions
    )


def merge_permission_matrices(custom: Any, default: Any) -> PermissionMatrix:
    """Union two matrices per resource, default actions first.

    For administrative previews of what a principal would hold if
    custom grants were layered over the role baseline. Live access
    decisions never merge: a non-empty custom list replaces the
    defaults outright (see ``checker.has_permission``).
    """
    merged: PermissionMatrix = {}

    for source in (default, custom):
        if not isinstance(source, Mapping):
            continue
        for resource, actions in source.items():
            if not isinstance(resource, str) or not isinstance(actions, _ACTION_LISTS):
                continue
            bucket = merged.setdefault(resource, [])
            for action in actions:
                if isinstance(action, str) and action not in bucket:
                    bucket.append(action)

    return merged


def get_role_level(role: Any) -> int:
    """Rank a role kind: user 1, admin 2, system_admin 3, unknown 0."""
    kind = coerce_role(role)
    if kind is None:
        return 0
    return ROLE_LEVELS[kind]


def has_higher_role(role: Any, target_role: Any) -> bool:
    """Check whether ``role`` strictly outranks ``target_role``."""
    return get_role_level(role) > get_role_level(target_role)
