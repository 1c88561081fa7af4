"""Caller-facing access queries: own permissions and page reachability."""

from fastapi import APIRouter


router = APIRouter(prefix="/access", tags=["access"])

# Import routes to register them (must be after router is defined)
from tooldash.modules.access import routes  # noqa: F401, E402
