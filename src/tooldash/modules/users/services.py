"""Permission administration service."""

from collections.abc import Mapping
from typing import Annotated, Any
from uuid import UUID

import structlog
from fastapi import Depends

from tooldash.core.errors import BadRequestError, ForbiddenError, NotFoundError
from tooldash.core.permissions import (
    AuthContext,
    RoleKind,
    find_unsupported_permissions,
    get_default_permission_matrix,
    get_default_permissions,
    has_higher_role,
    merge_permission_matrices,
    parse_permissions_from_db,
    permissions_to_matrix,
)
from tooldash.core.permissions.defaults import coerce_role
from tooldash.modules.users.models import UserProfile
from tooldash.modules.users.repos import ProfileRepo, RoleRepo
from tooldash.modules.users.schemas import (
    PermissionsPreviewResponse,
    PermissionWarning,
    RoleListResponse,
    RoleWithCountResponse,
    TemplateApplyResponse,
    UserPermissionsResponse,
)


logger = structlog.get_logger()


def _role_type(profile: UserProfile) -> str | None:
    return profile.role.type if profile.role is not None else None


class PermissionAdminService:
    """Administrative view and editing of per-profile permissions.

    Callers are expected to have passed ``with_admin_permission``
    already; this service adds the target-side checks (a system_admin
    profile, or one ranked above the caller, cannot be edited).
    """

    def __init__(self, profiles: ProfileRepo, roles: RoleRepo) -> None:
        self.profiles = profiles
        self.roles = roles

    async def _get_profile(self, profile_id: UUID) -> UserProfile:
        profile = await self.profiles.get_by_id(profile_id)
        if profile is None:
            raise NotFoundError(
                "User not found",
                resource="user_profile",
                resource_id=str(profile_id),
            )
        return profile

    def _ensure_can_manage(self, actor: AuthContext, target_role: str | None) -> None:
        if coerce_role(target_role) is RoleKind.SYSTEM_ADMIN:
            raise ForbiddenError(
                "Cannot modify system admin permissions",
                error_code="system_admin_protected",
            )
        if has_higher_role(target_role, actor.role_kind):
            raise ForbiddenError(
                "Cannot modify permissions of a higher role",
                error_code="target_outranks_actor",
            )

    def _describe(
        self,
        profile: UserProfile,
        warnings: list[PermissionWarning] | None = None,
    ) -> UserPermissionsResponse:
        role = profile.role
        custom = parse_permissions_from_db(profile.permissions)
        return UserPermissionsResponse(
            profile_id=profile.id,
            user_name=profile.name,
            role_id=role.id if role else None,
            role_name=role.name if role else None,
            role_type=role.type if role else None,
            default_permissions=get_default_permission_matrix(_role_type(profile)),
            custom_permissions=permissions_to_matrix(custom),
            warnings=warnings or [],
        )

    async def get_permissions(self, profile_id: UUID) -> UserPermissionsResponse:
        """Return a profile's role defaults and stored custom matrix.

        Raises:
            NotFoundError: If the profile does not exist
        """
        profile = await self._get_profile(profile_id)
        return self._describe(profile)

    async def update_permissions(
        self,
        actor: AuthContext,
        profile_id: UUID,
        permissions: Any,
    ) -> UserPermissionsResponse:
        """Replace a profile's custom permissions.

        The stored matrix is the parsed one, so unknown resources and
        actions never reach the database. An empty matrix clears the
        override and the profile falls back to its role defaults.

        Args:
            actor: The authenticated admin making the change
            profile_id: Target profile
            permissions: Untrusted matrix from the request body

        Returns:
            The target's permissions after the update, with warnings
            for pairs the dashboard has no use for

        Raises:
            BadRequestError: If ``permissions`` is not an object
            NotFoundError: If the profile does not exist
            ForbiddenError: If the target is a system_admin or outranks the actor
        """
        if not isinstance(permissions, Mapping):
            raise BadRequestError(
                "Invalid permissions data",
                error_code="invalid_permissions",
            )

        profile = await self._get_profile(profile_id)
        self._ensure_can_manage(actor, _role_type(profile))

        parsed = parse_permissions_from_db(permissions)
        matrix = permissions_to_matrix(parsed)
        profile = await self.profiles.update_permissions(profile, matrix or None)

        warnings = [
            PermissionWarning(resource=p.resource, action=p.action)
            for p in find_unsupported_permissions(parsed)
        ]

        logger.info(
            "permissions_updated",
            actor=actor.actor,
            profile_id=str(profile.id),
            resources=sorted(matrix),
            cleared=not matrix,
            warnings=len(warnings),
        )
        return self._describe(profile, warnings)

    async def preview_permissions(self, profile_id: UUID) -> PermissionsPreviewResponse:
        """Compare the union preview with the override-wins effective set.

        Raises:
            NotFoundError: If the profile does not exist
        """
        profile = await self._get_profile(profile_id)
        role_type = _role_type(profile)

        custom = parse_permissions_from_db(profile.permissions)
        defaults = get_default_permissions(role_type)
        custom_matrix = permissions_to_matrix(custom)
        default_matrix = permissions_to_matrix(defaults)

        effective = custom_matrix or default_matrix
        if coerce_role(role_type) is RoleKind.SYSTEM_ADMIN:
            effective = default_matrix

        return PermissionsPreviewResponse(
            profile_id=profile.id,
            role_type=role_type,
            merged=merge_permission_matrices(custom_matrix, default_matrix),
            effective=effective,
        )

    async def apply_template(
        self,
        actor: AuthContext,
        profile_id: UUID,
        template_role_id: UUID,
    ) -> TemplateApplyResponse:
        """Reassign a profile to the template role.

        The same target-side checks as ``update_permissions`` apply, and
        the template itself may not outrank the caller.

        Raises:
            NotFoundError: If the template role or the profile does not exist
            ForbiddenError: If the target is protected or the template outranks the actor
        """
        role = await self.roles.get_by_id(template_role_id)
        if role is None:
            raise NotFoundError(
                "Template role not found",
                resource="user_role",
                resource_id=str(template_role_id),
            )

        profile = await self._get_profile(profile_id)
        self._ensure_can_manage(actor, _role_type(profile))
        if has_higher_role(role.type, actor.role_kind):
            raise ForbiddenError(
                "Cannot assign a role higher than your own",
                error_code="template_outranks_actor",
            )

        profile = await self.profiles.assign_role(profile, role)

        logger.info(
            "role_template_applied",
            actor=actor.actor,
            profile_id=str(profile.id),
            role_id=str(role.id),
            role_type=role.type,
        )
        return TemplateApplyResponse(
            profile_id=profile.id,
            user_name=profile.name,
            role_id=role.id,
            role_name=role.name,
            role_type=role.type,
            permissions=get_default_permission_matrix(role.type),
        )

    async def list_roles(self) -> RoleListResponse:
        """List roles with the number of profiles assigned to each."""
        rows = await self.roles.list_with_user_counts()
        items = [
            RoleWithCountResponse(
                id=role.id,
                name=role.name,
                type=role.type,
                description=role.description,
                user_count=count,
            )
            for role, count in rows
        ]
        return RoleListResponse(items=items, total=len(items))


# Type alias for dependency injection
PermissionAdminSvc = Annotated[PermissionAdminService, Depends(PermissionAdminService)]
