"""Pydantic schemas for profile permission administration."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


# ============================================================
# Role Schemas
# ============================================================


class RoleResponse(BaseModel):
    """Schema for role in API responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    type: str
    description: str | None = None


class RoleWithCountResponse(RoleResponse):
    """Role plus the number of profiles assigned to it."""

    user_count: int = 0


class RoleListResponse(BaseModel):
    """Schema for the role listing."""

    items: list[RoleWithCountResponse]
    total: int


# ============================================================
# Permission Schemas
# ============================================================


class PermissionWarning(BaseModel):
    """A stored pair whose action is not meaningful for its resource."""

    resource: str
    action: str


class UserPermissionsResponse(BaseModel):
    """A profile's role and permission matrices."""

    profile_id: UUID
    user_name: str
    role_id: UUID | None = None
    role_name: str | None = None
    role_type: str | None = None
    default_permissions: dict[str, list[str]] = Field(default_factory=dict)
    custom_permissions: dict[str, list[str]] = Field(default_factory=dict)
    warnings: list[PermissionWarning] = Field(default_factory=list)


class PermissionsUpdate(BaseModel):
    """Request body for replacing a profile's custom permissions.

    ``permissions`` is kept loosely typed: anything that is not an
    object is rejected with 400 by the service, and unknown resources or
    actions inside an object are dropped rather than rejected.
    """

    permissions: Any = None


class PermissionsPreviewResponse(BaseModel):
    """Union preview next to what access decisions actually use."""

    profile_id: UUID
    role_type: str | None = None
    merged: dict[str, list[str]]
    effective: dict[str, list[str]]


class TemplateApply(BaseModel):
    """Request body for applying a role template to a profile."""

    template_role_id: UUID


class TemplateApplyResponse(BaseModel):
    """Result of applying a role template."""

    profile_id: UUID
    user_name: str
    role_id: UUID
    role_name: str
    role_type: str
    permissions: dict[str, list[str]]
    message: str = "Template applied successfully"
