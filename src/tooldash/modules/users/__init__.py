"""User profile permission administration and role listing."""

from fastapi import APIRouter


router = APIRouter(prefix="/users", tags=["users"])
roles_router = APIRouter(prefix="/roles", tags=["roles"])

routers = [roles_router]

# Import routes to register them with the routers
from tooldash.modules.users import routes  # noqa: F401, E402
