"""Access query routes.

Any authenticated, active profile may call these; they only ever
describe the caller's own access.
"""

from fastapi import Query

from tooldash.core.permissions import (
    can_access_page,
    get_required_role,
    is_admin,
    is_system_admin,
    meets_role_requirement,
    permissions_to_matrix,
)
from tooldash.core.permissions.dependencies import CurrentAuth
from tooldash.modules.access import router
from tooldash.modules.access.schemas import MyAccessResponse, PageAccessResponse


@router.get(
    "/me",
    response_model=MyAccessResponse,
    summary="Get my access",
    description="Returns the caller's role and effective permission matrix.",
)
async def get_my_access(auth: CurrentAuth) -> MyAccessResponse:
    """Describe the caller's access."""
    return MyAccessResponse(
        profile_id=auth.profile_id,
        name=auth.name,
        email=auth.email,
        role=auth.role_kind.value,
        is_admin=is_admin(auth.role_kind),
        is_system_admin=is_system_admin(auth.role_kind),
        permissions=auth.effective_matrix,
        custom_permissions=permissions_to_matrix(auth.custom_permissions),
    )


@router.get(
    "/pages",
    response_model=PageAccessResponse,
    summary="Check page access",
    description=(
        "Checks a dashboard path against both the page permission table "
        "and the route minimum-role table."
    ),
)
async def check_page_access(
    auth: CurrentAuth,
    path: str = Query(..., min_length=1, description="Dashboard path, e.g. /endmills"),
) -> PageAccessResponse:
    """Decide whether the caller may open ``path``."""
    required = get_required_role(path)
    allowed = can_access_page(
        auth.role_kind, path, list(auth.custom_permissions)
    ) and meets_role_requirement(auth.role_kind, required)
    return PageAccessResponse(
        path=path,
        allowed=allowed,
        required_role=required.value if required else None,
    )
