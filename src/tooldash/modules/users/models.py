"""User profile and role database models."""

from typing import Any
from uuid import UUID

from sqlalchemy import JSON, Boolean, ForeignKey, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tooldash.core.constants import (
    MAX_DEPARTMENT_LENGTH,
    MAX_DESCRIPTION_LENGTH,
    MAX_EMPLOYEE_ID_LENGTH,
    MAX_NAME_LENGTH,
    MAX_POSITION_LENGTH,
    MAX_ROLE_NAME_LENGTH,
    MAX_ROLE_TYPE_LENGTH,
)
from tooldash.core.database.base import Base, TimestampMixin, UUIDMixin


class UserRole(Base, UUIDMixin, TimestampMixin):
    """A named role a profile can be assigned to.

    Several rows may share a ``type``; the type alone decides the
    baseline permission set (see ``DEFAULT_PERMISSIONS``).

    Attributes:
        name: Display name, e.g. "Shift Lead"
        type: Role kind: "system_admin", "admin" or "user"
        description: Optional free text
    """

    __tablename__ = "user_roles"

    name: Mapped[str] = mapped_column(
        String(MAX_ROLE_NAME_LENGTH),
        nullable=False,
        unique=True,
    )
    type: Mapped[str] = mapped_column(
        String(MAX_ROLE_TYPE_LENGTH),
        nullable=False,
        index=True,
    )
    description: Mapped[str | None] = mapped_column(
        String(MAX_DESCRIPTION_LENGTH),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<UserRole(id={self.id}, name={self.name}, type={self.type})>"


class UserProfile(Base, UUIDMixin, TimestampMixin):
    """Dashboard profile attached to an identity-provider principal.

    Attributes:
        user_id: Principal ID from the identity provider (token ``sub``)
        name: Display name
        email: Contact email, informational only
        employee_id: Plant employee number
        department: Department name
        position: Job title
        role_id: Assigned role
        is_active: Whether the profile may use the dashboard
        permissions: Custom permission matrix; null or empty means none
    """

    __tablename__ = "user_profiles"

    user_id: Mapped[UUID] = mapped_column(
        nullable=False,
        unique=True,
        index=True,
    )
    name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    email: Mapped[str | None] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=True,
    )
    employee_id: Mapped[str | None] = mapped_column(
        String(MAX_EMPLOYEE_ID_LENGTH),
        nullable=True,
    )
    department: Mapped[str | None] = mapped_column(
        String(MAX_DEPARTMENT_LENGTH),
        nullable=True,
    )
    position: Mapped[str | None] = mapped_column(
        String(MAX_POSITION_LENGTH),
        nullable=True,
    )
    role_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("user_roles.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )
    permissions: Mapped[dict[str, Any] | None] = mapped_column(
        JSON(none_as_null=True).with_variant(JSONB(none_as_null=True), "postgresql"),
        nullable=True,
    )

    # Joined so the guard resolves profile and role in one query
    role: Mapped["UserRole | None"] = relationship(
        "UserRole",
        lazy="joined",
    )

    def __repr__(self) -> str:
        return f"<UserProfile(id={self.id}, user_id={self.user_id}, role_id={self.role_id})>"
