"""Permission vocabulary.

Defines the closed set of resources and actions that permissions are
built from, and the advisory table of which actions make sense for
each resource.

A permission is a ``(resource, action)`` pair. ``manage`` on a resource
covers every action on that resource; ``manage`` on the wildcard
resource ``*`` covers everything. No other action implies another
(``update`` does not imply ``read``).
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum, StrEnum
from types import MappingProxyType
from typing import Any


class Resource(StrEnum):
    """Functional areas of the dashboard subject to access control."""

    ALL = "*"
    DASHBOARD = "dashboard"
    EQUIPMENT = "equipment"
    ENDMILLS = "endmills"
    INVENTORY = "inventory"
    CAM_SHEETS = "cam_sheets"
    TOOL_CHANGES = "tool_changes"
    ENDMILL_DISPOSALS = "endmill_disposals"
    REPORTS = "reports"
    SETTINGS = "settings"
    USERS = "users"
    AI_INSIGHTS = "ai_insights"


class Action(StrEnum):
    """Operation kinds performable on a resource."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    MANAGE = "manage"
    USE = "use"


@dataclass(frozen=True, slots=True)
class Permission:
    """A single grant of ``action`` on ``resource``.

    Both fields hold plain strings so permissions compare and hash the
    same whether they were built from enum members or decoded from
    stored JSON.
    """

    resource: str
    action: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "resource", value_of(self.resource))
        object.__setattr__(self, "action", value_of(self.action))

    @property
    def name(self) -> str:
        """Return the permission name as 'resource:action'."""
        return f"{self.resource}:{self.action}"


AVAILABLE_RESOURCES: tuple[str, ...] = tuple(r.value for r in Resource)
AVAILABLE_ACTIONS: tuple[str, ...] = tuple(a.value for a in Action)

_CRUD = (Action.CREATE, Action.READ, Action.UPDATE, Action.DELETE, Action.MANAGE)

RESOURCE_AVAILABLE_ACTIONS: MappingProxyType[Resource, tuple[Action, ...]] = (
    MappingProxyType(
        {
            Resource.ALL: (Action.MANAGE,),
            Resource.DASHBOARD: (Action.READ,),
            Resource.EQUIPMENT: _CRUD,
            Resource.ENDMILLS: _CRUD,
            Resource.INVENTORY: _CRUD,
            Resource.CAM_SHEETS: _CRUD,
            Resource.TOOL_CHANGES: _CRUD,
            Resource.ENDMILL_DISPOSALS: _CRUD,
            Resource.REPORTS: (Action.READ, Action.CREATE, Action.MANAGE),
            Resource.SETTINGS: (Action.READ, Action.UPDATE, Action.MANAGE),
            Resource.USERS: _CRUD,
            Resource.AI_INSIGHTS: (Action.READ, Action.USE, Action.MANAGE),
        }
    )
)


def value_of(member: Any) -> Any:
    """Return the raw value of an enum member, anything else unchanged."""
    return member.value if isinstance(member, Enum) else member


def is_supported(resource: str, action: str) -> bool:
    """Check a pair against ``RESOURCE_AVAILABLE_ACTIONS``.

    Advisory only: the access decision never calls this.
    """
    try:
        allowed = RESOURCE_AVAILABLE_ACTIONS[Resource(value_of(resource))]
    except (TypeError, ValueError):
        return False
    return value_of(action) in {a.value for a in allowed}


def find_unsupported_permissions(
    permissions: Iterable[Permission],
) -> list[Permission]:
    """Return the permissions whose action is not meaningful for the resource.

    Used by the permission-editing surface to warn about pairs such as
    ``dashboard:delete``. Order is preserved.
    """
    return [p for p in permissions if not is_supported(p.resource, p.action)]
