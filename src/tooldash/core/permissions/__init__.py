"""Role-based access control: vocabulary, defaults, decisions and guards.

The FastAPI dependencies live in ``tooldash.core.permissions.dependencies``
and are not re-exported here, so the pure decision modules can be
imported without pulling in the web and database stack.
"""

from tooldash.core.permissions.checker import (
    PAGE_PERMISSIONS,
    can_access_page,
    has_permission,
    is_admin,
    is_system_admin,
)
from tooldash.core.permissions.context import AuthContext
from tooldash.core.permissions.defaults import (
    DEFAULT_PERMISSIONS,
    RoleKind,
    get_default_permissions,
)
from tooldash.core.permissions.matrix import (
    PermissionMatrix,
    get_default_permission_matrix,
    get_role_level,
    has_higher_role,
    has_permission_in_matrix,
    merge_permission_matrices,
    parse_permissions_from_db,
    permissions_to_matrix,
)
from tooldash.core.permissions.pages import get_required_role, meets_role_requirement
from tooldash.core.permissions.vocabulary import (
    AVAILABLE_ACTIONS,
    AVAILABLE_RESOURCES,
    RESOURCE_AVAILABLE_ACTIONS,
    Action,
    Permission,
    Resource,
    find_unsupported_permissions,
)


__all__ = [
    "AVAILABLE_ACTIONS",
    "AVAILABLE_RESOURCES",
    "DEFAULT_PERMISSIONS",
    "PAGE_PERMISSIONS",
    "RESOURCE_AVAILABLE_ACTIONS",
    "Action",
    "AuthContext",
    "Permission",
    "PermissionMatrix",
    "Resource",
    "RoleKind",
    "can_access_page",
    "find_unsupported_permissions",
    "get_default_permission_matrix",
    "get_default_permissions",
    "get_required_role",
    "get_role_level",
    "has_higher_role",
    "has_permission",
    "has_permission_in_matrix",
    "is_admin",
    "is_system_admin",
    "meets_role_requirement",
    "merge_permission_matrices",
    "parse_permissions_from_db",
    "permissions_to_matrix",
]
