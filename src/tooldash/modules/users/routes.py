"""Permission administration routes.

Every route here requires an admin or system_admin caller; the
service adds the checks on the target profile.
"""

from uuid import UUID

from tooldash.core.permissions.dependencies import AdminAuth
from tooldash.modules.users import roles_router, router
from tooldash.modules.users.schemas import (
    PermissionsPreviewResponse,
    PermissionsUpdate,
    RoleListResponse,
    TemplateApply,
    TemplateApplyResponse,
    UserPermissionsResponse,
)
from tooldash.modules.users.services import PermissionAdminSvc


# ============================================================
# Profile Permission Routes
# ============================================================


@router.get(
    "/{profile_id}/permissions",
    response_model=UserPermissionsResponse,
    summary="Get profile permissions",
    description="Returns the profile's role defaults and custom permission matrix.",
)
async def get_permissions(
    profile_id: UUID,
    service: PermissionAdminSvc,
    auth: AdminAuth,  # noqa: ARG001 - required for auth
) -> UserPermissionsResponse:
    """Get a profile's permissions."""
    return await service.get_permissions(profile_id)


@router.put(
    "/{profile_id}/permissions",
    response_model=UserPermissionsResponse,
    summary="Replace profile permissions",
    description=(
        "Replace the profile's custom permission matrix. An empty object "
        "clears the override. System admin profiles cannot be edited."
    ),
)
async def update_permissions(
    profile_id: UUID,
    data: PermissionsUpdate,
    service: PermissionAdminSvc,
    auth: AdminAuth,
) -> UserPermissionsResponse:
    """Replace a profile's custom permissions."""
    return await service.update_permissions(auth, profile_id, data.permissions)


@router.get(
    "/{profile_id}/permissions/preview",
    response_model=PermissionsPreviewResponse,
    summary="Preview profile permissions",
    description="Union of role defaults and custom grants next to the effective set.",
)
async def preview_permissions(
    profile_id: UUID,
    service: PermissionAdminSvc,
    auth: AdminAuth,  # noqa: ARG001 - required for auth
) -> PermissionsPreviewResponse:
    """Preview merged vs effective permissions."""
    return await service.preview_permissions(profile_id)


@router.post(
    "/{profile_id}/permissions/template",
    response_model=TemplateApplyResponse,
    summary="Apply role template",
    description="Assign the template role to the profile.",
)
async def apply_template(
    profile_id: UUID,
    data: TemplateApply,
    service: PermissionAdminSvc,
    auth: AdminAuth,
) -> TemplateApplyResponse:
    """Apply a role template to a profile."""
    return await service.apply_template(auth, profile_id, data.template_role_id)


# ============================================================
# Role Routes
# ============================================================


@roles_router.get(
    "",
    response_model=RoleListResponse,
    summary="List roles",
    description="List all roles with the number of profiles assigned to each.",
)
async def list_roles(
    service: PermissionAdminSvc,
    auth: AdminAuth,  # noqa: ARG001 - required for auth
) -> RoleListResponse:
    """List roles with user counts."""
    return await service.list_roles()
