"""Enforcement boundary.

``AccessGuard`` turns an authenticated principal ID into an
``AuthContext`` and enforces one of three escalating requirements
before any protected handler runs:

    with_auth                  -> 401 / 404 / 403 (inactive) / 500 (lookup)
    with_permission            -> with_auth, then 403 if the decision denies
    with_admin_permission      -> with_auth, then 403 unless admin or above
    with_system_admin_permission -> with_auth, then 403 unless system_admin

Every call performs exactly one read against the profile store; nothing
is cached between calls. Failures are raised as ``AppException``
subclasses and rendered by the registered exception handlers, so they
reach the client as structured responses.
"""

from typing import Any, Protocol
from uuid import UUID

import structlog
from sqlalchemy.exc import SQLAlchemyError

from tooldash.core.errors import (
    AccountInactiveError,
    ForbiddenError,
    InsufficientPermissionError,
    InternalLookupError,
    ProfileNotFoundError,
    UnauthorizedError,
)
from tooldash.core.permissions.checker import is_admin, is_system_admin
from tooldash.core.permissions.context import AuthContext
from tooldash.core.permissions.defaults import coerce_role, get_default_permissions
from tooldash.core.permissions.matrix import parse_permissions_from_db


logger = structlog.get_logger()


class RoleRecord(Protocol):
    id: Any
    type: str


class ProfileRecord(Protocol):
    id: Any
    user_id: Any
    name: str | None
    email: str | None
    is_active: bool
    permissions: Any
    role: RoleRecord | None


class ProfileStore(Protocol):
    async def get_by_principal_id(self, principal_id: UUID) -> ProfileRecord | None: ...


class AccessGuard:
    """Resolves callers and enforces access requirements."""

    def __init__(self, profiles: ProfileStore) -> None:
        self.profiles = profiles

    async def with_auth(self, principal_id: UUID | None) -> AuthContext:
        """Resolve the caller's profile, role and custom permissions.

        Raises:
            UnauthorizedError: No authenticated principal
            ProfileNotFoundError: No profile, or no usable role, for the principal
            AccountInactiveError: The profile is disabled
            InternalLookupError: The profile store failed
        """
        if principal_id is None:
            raise UnauthorizedError()

        try:
            profile = await self.profiles.get_by_principal_id(principal_id)
        except (SQLAlchemyError, OSError) as exc:
            logger.exception("profile_lookup_failed", principal_id=str(principal_id))
            raise InternalLookupError(details={"error": str(exc)}) from exc

        if profile is None or profile.role is None:
            raise ProfileNotFoundError()

        role_kind = coerce_role(profile.role.type)
        if role_kind is None:
            logger.warning(
                "unknown_role_kind",
                principal_id=str(principal_id),
                role_type=profile.role.type,
            )
            raise ProfileNotFoundError()

        if not profile.is_active:
            raise AccountInactiveError()

        return AuthContext(
            principal_id=principal_id,
            profile_id=profile.id,
            role_kind=role_kind,
            role_baseline_permissions=get_default_permissions(role_kind),
            custom_permissions=tuple(parse_permissions_from_db(profile.permissions)),
            is_active=profile.is_active,
            name=profile.name,
            email=profile.email,
            role_id=profile.role.id,
        )

    async def with_permission(
        self,
        principal_id: UUID | None,
        resource: str,
        action: str,
    ) -> AuthContext:
        """Authenticate, then require ``action`` on ``resource``.

        Raises:
            InsufficientPermissionError: The access decision denied the caller
        """
        context = await self.with_auth(principal_id)

        if is_system_admin(context.role_kind):
            logger.info(
                "system_admin_bypass",
                principal_id=str(context.principal_id),
                resource=str(resource),
                action=str(action),
            )
            return context

        if not context.has_permission(resource, action):
            logger.warning(
                "access_denied",
                principal_id=str(context.principal_id),
                role=context.role_kind.value,
                resource=str(resource),
                action=str(action),
                custom=bool(context.custom_permissions),
            )
            raise InsufficientPermissionError()

        return context

    async def with_admin_permission(self, principal_id: UUID | None) -> AuthContext:
        """Authenticate, then require the admin or system_admin role."""
        context = await self.with_auth(principal_id)
        if not is_admin(context.role_kind):
            logger.warning(
                "admin_required",
                principal_id=str(context.principal_id),
                role=context.role_kind.value,
            )
            raise ForbiddenError(
                "Forbidden: Admin access required",
                error_code="admin_required",
            )
        return context

    async def with_system_admin_permission(
        self, principal_id: UUID | None
    ) -> AuthContext:
        """Authenticate, then require the system_admin role."""
        context = await self.with_auth(principal_id)
        if not is_system_admin(context.role_kind):
            logger.warning(
                "system_admin_required",
                principal_id=str(context.principal_id),
                role=context.role_kind.value,
            )
            raise ForbiddenError(
                "Forbidden: System admin access required",
                error_code="system_admin_required",
            )
        return context
