"""Pydantic schemas for access queries."""

from uuid import UUID

from pydantic import BaseModel, Field


class MyAccessResponse(BaseModel):
    """The caller's role and permission matrices."""

    profile_id: UUID
    name: str | None = None
    email: str | None = None
    role: str
    is_admin: bool
    is_system_admin: bool
    permissions: dict[str, list[str]]
    custom_permissions: dict[str, list[str]] = Field(default_factory=dict)


class PageAccessResponse(BaseModel):
    """Whether the caller may open a dashboard page."""

    path: str
    allowed: bool
    required_role: str | None = None
