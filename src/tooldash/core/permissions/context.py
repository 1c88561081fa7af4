"""AuthContext: the resolved identity of one caller for one request.

Built fresh by ``AccessGuard.with_auth`` on every request and thrown
away afterwards; never persisted and never serialised back to the
client as-is.
"""

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from tooldash.core.permissions.checker import has_permission
from tooldash.core.permissions.defaults import RoleKind
from tooldash.core.permissions.matrix import PermissionMatrix, permissions_to_matrix
from tooldash.core.permissions.vocabulary import Permission


@dataclass(frozen=True)
class AuthContext:
    principal_id: UUID
    profile_id: UUID
    role_kind: RoleKind
    role_baseline_permissions: tuple[Permission, ...]
    custom_permissions: tuple[Permission, ...] = ()
    is_active: bool = True
    name: str | None = None
    email: str | None = None
    role_id: UUID | None = field(default=None, compare=False)

    def has_permission(self, resource: Any, action: Any) -> bool:
        """Decide access for this caller. Inactive callers are always denied."""
        if not self.is_active:
            return False
        return has_permission(
            self.role_kind, resource, action, list(self.custom_permissions)
        )

    @property
    def effective_permissions(self) -> tuple[Permission, ...]:
        """The list decisions are made against: custom if set, else baseline.

        system_admin never consults custom permissions, so it always
        reports its baseline.
        """
        if self.role_kind is RoleKind.SYSTEM_ADMIN:
            return self.role_baseline_permissions
        return self.custom_permissions or self.role_baseline_permissions

    @property
    def effective_matrix(self) -> PermissionMatrix:
        return permissions_to_matrix(self.effective_permissions)

    @property
    def actor(self) -> str:
        """Identity string for logging."""
        return f"{self.role_kind.value}:{self.principal_id}"
