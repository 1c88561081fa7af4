"""Minimum role required per dashboard route.

Coarser than ``PAGE_PERMISSIONS``: a route is reachable only by roles
at or above its minimum level. Exact entries are matched first, then
the remaining entries by prefix, longest prefix first.
"""

from types import MappingProxyType
from typing import NamedTuple

from tooldash.core.permissions.defaults import RoleKind
from tooldash.core.permissions.matrix import get_role_level


class RouteRule(NamedTuple):
    min_role: RoleKind
    exact: bool = False


ROUTE_MIN_ROLES: MappingProxyType[str, RouteRule] = MappingProxyType(
    {
        "/dashboard": RouteRule(RoleKind.USER),
        "/equipment": RouteRule(RoleKind.USER),
        "/endmills": RouteRule(RoleKind.USER),
        "/inventory": RouteRule(RoleKind.USER),
        "/cam-sheets": RouteRule(RoleKind.USER),
        "/tool-changes": RouteRule(RoleKind.USER),
        "/endmill-disposals": RouteRule(RoleKind.USER),
        "/reports": RouteRule(RoleKind.USER),
        "/ai-insights": RouteRule(RoleKind.USER),
        "/settings": RouteRule(RoleKind.ADMIN),
        "/users": RouteRule(RoleKind.ADMIN),
        "/settings/system": RouteRule(RoleKind.SYSTEM_ADMIN, exact=True),
    }
)

_PREFIX_RULES = sorted(
    ((route, rule) for route, rule in ROUTE_MIN_ROLES.items() if not rule.exact),
    key=lambda item: len(item[0]),
    reverse=True,
)


def _matches_prefix(path: str, route: str) -> bool:
    return path == route or path.startswith(route.rstrip("/") + "/")


def get_required_role(path: str) -> RoleKind | None:
    """Return the minimum role for ``path``, or None if it is unprotected."""
    rule = ROUTE_MIN_ROLES.get(path)
    if rule is not None and rule.exact:
        return rule.min_role

    for route, prefix_rule in _PREFIX_RULES:
        if _matches_prefix(path, route):
            return prefix_rule.min_role

    return None


def meets_role_requirement(role: object, required: RoleKind | None) -> bool:
    """Check whether ``role`` is at or above ``required``."""
    if required is None:
        return True
    return get_role_level(role) >= get_role_level(required)
