"""FastAPI dependencies that enforce access before a handler runs.

Usage:
    @router.put("/endmills/{endmill_id}")
    async def update_endmill(
        endmill_id: UUID,
        auth: Annotated[AuthContext, Depends(require_permission("endmills", "update"))],
    ):
        ...

    @router.get("/roles")
    async def list_roles(auth: AdminAuth):
        ...
"""

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends, Request

from tooldash.api.dependencies import DBSession
from tooldash.core.auth.dependencies import TokenDataDep
from tooldash.core.permissions.context import AuthContext
from tooldash.core.permissions.guards import AccessGuard
from tooldash.core.permissions.vocabulary import value_of


async def get_access_guard(db: DBSession) -> AccessGuard:
    """Build a guard backed by the profile repository for this request."""
    from tooldash.modules.users.repos import ProfileRepository  # noqa: PLC0415

    return AccessGuard(ProfileRepository(db))


AccessGuardDep = Annotated[AccessGuard, Depends(get_access_guard)]


def _remember(request: Request, context: AuthContext) -> AuthContext:
    # Read back by the request logging middleware
    request.state.auth = context
    return context


async def get_auth_context(
    request: Request,
    token_data: TokenDataDep,
    guard: AccessGuardDep,
) -> AuthContext:
    """Authenticated, active caller; no permission requirement."""
    return _remember(request, await guard.with_auth(token_data.principal_id))


def require_permission(
    resource: str, action: str
) -> Callable[..., Awaitable[AuthContext]]:
    """Dependency factory requiring ``action`` on ``resource``.

    Args:
        resource: The resource being accessed (e.g., "endmills")
        action: The action being performed (e.g., "update")

    Returns:
        A dependency resolving to the caller's AuthContext
    """
    resource = value_of(resource)
    action = value_of(action)

    async def _check(
        request: Request,
        token_data: TokenDataDep,
        guard: AccessGuardDep,
    ) -> AuthContext:
        context = await guard.with_permission(token_data.principal_id, resource, action)
        return _remember(request, context)

    return _check


async def require_admin(
    request: Request,
    token_data: TokenDataDep,
    guard: AccessGuardDep,
) -> AuthContext:
    """Caller must be admin or system_admin."""
    return _remember(request, await guard.with_admin_permission(token_data.principal_id))


async def require_system_admin(
    request: Request,
    token_data: TokenDataDep,
    guard: AccessGuardDep,
) -> AuthContext:
    """Caller must be system_admin."""
    context = await guard.with_system_admin_permission(token_data.principal_id)
    return _remember(request, context)


CurrentAuth = Annotated[AuthContext, Depends(get_auth_context)]
AdminAuth = Annotated[AuthContext, Depends(require_admin)]
SystemAdminAuth = Annotated[AuthContext, Depends(require_system_admin)]
