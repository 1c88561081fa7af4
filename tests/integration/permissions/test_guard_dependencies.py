"""Integration tests for the permission dependencies on real routes.

A small router is mounted on the application so every guard can be
exercised through the HTTP stack against the test database.
"""

from typing import Annotated
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from fastapi import APIRouter, Depends
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from tooldash.core.auth.backend import create_access_token
from tooldash.core.permissions import AuthContext, RoleKind
from tooldash.core.permissions.dependencies import (
    AdminAuth,
    CurrentAuth,
    SystemAdminAuth,
    get_access_guard,
    require_permission,
)
from tooldash.core.permissions.guards import AccessGuard


pytestmark = pytest.mark.integration


guarded_router = APIRouter()


@guarded_router.get("/me")
async def whoami(auth: CurrentAuth):
    """Endpoint requiring only an active profile."""
    return {"role": auth.role_kind.value}


@guarded_router.post("/tool-changes")
async def record_tool_change(
    auth: Annotated[AuthContext, Depends(require_permission("tool_changes", "create"))],
):
    """Endpoint requiring tool_changes:create."""
    return {"status": "ok", "role": auth.role_kind.value}


@guarded_router.delete("/users/{user_id}")
async def delete_user(
    user_id: str,
    auth: Annotated[AuthContext, Depends(require_permission("users", "delete"))],
):
    """Endpoint requiring users:delete."""
    return {"status": "ok", "deleted": user_id}


@guarded_router.get("/admin")
async def admin_only(auth: AdminAuth):
    """Endpoint requiring admin or above."""
    return {"status": "ok"}


@guarded_router.get("/system")
async def system_only(auth: SystemAdminAuth):
    """Endpoint requiring system_admin."""
    return {"status": "ok"}


class TestGuardDependencies:
    """Tests for the guards mounted on routes."""

    @pytest.fixture
    async def guarded_client(self, app) -> AsyncClient:
        """Client for the app with the guarded router mounted."""
        app.include_router(guarded_router, prefix="/guarded")
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as client:
            yield client

    async def test_missing_token(self, guarded_client):
        """No bearer token should give 401."""
        response = await guarded_client.get("/guarded/me")

        assert response.status_code == 401
        assert response.json()["error_code"] == "missing_token"
        assert response.json()["status"] == 401

    async def test_invalid_token(self, guarded_client):
        """A malformed bearer token should give 401."""
        response = await guarded_client.get(
            "/guarded/me",
            headers={"Authorization": "Bearer not-a-jwt"},
        )

        assert response.status_code == 401
        assert response.json()["error_code"] == "invalid_token"

    async def test_profile_not_found(self, guarded_client):
        """A valid token without a profile should give 404."""
        token = create_access_token(uuid4())

        response = await guarded_client.get(
            "/guarded/me",
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 404
        assert response.json()["error"] == "User profile not found"

    async def test_inactive_profile(self, guarded_client, make_profile, roles, auth_headers):
        """An inactive profile should give 403 even for system_admin."""
        profile = await make_profile(roles[RoleKind.SYSTEM_ADMIN], is_active=False)

        response = await guarded_client.get("/guarded/me", headers=auth_headers(profile))

        assert response.status_code == 403
        assert response.json()["error_code"] == "account_inactive"

    async def test_active_profile(self, guarded_client, user_profile, auth_headers):
        """An active profile should reach the handler."""
        response = await guarded_client.get("/guarded/me", headers=auth_headers(user_profile))

        assert response.status_code == 200
        assert response.json() == {"role": "user"}

    async def test_permission_granted_by_defaults(self, guarded_client, user_profile, auth_headers):
        """user should record tool changes by default."""
        response = await guarded_client.post(
            "/guarded/tool-changes", headers=auth_headers(user_profile)
        )

        assert response.status_code == 200

    async def test_permission_denied(self, guarded_client, user_profile, auth_headers):
        """user should not delete users, and the reply should not say why."""
        response = await guarded_client.delete(
            "/guarded/users/42", headers=auth_headers(user_profile)
        )

        body = response.json()
        assert response.status_code == 403
        assert body["error"] == "Forbidden: Insufficient permissions"
        assert "details" not in body
        assert "users" not in response.text

    async def test_admin_manage_grants_delete(self, guarded_client, admin_profile, auth_headers):
        """admin should delete users through manage."""
        response = await guarded_client.delete(
            "/guarded/users/42", headers=auth_headers(admin_profile)
        )

        assert response.status_code == 200
        assert response.json()["deleted"] == "42"

    async def test_custom_permissions_override_defaults(
        self, guarded_client, make_profile, roles, auth_headers
    ):
        """A stored custom matrix should replace the admin defaults."""
        profile = await make_profile(
            roles[RoleKind.ADMIN],
            permissions={"reports": ["read"]},
        )

        response = await guarded_client.delete(
            "/guarded/users/42", headers=auth_headers(profile)
        )

        assert response.status_code == 403

    async def test_system_admin_bypass(
        self, guarded_client, make_profile, roles, auth_headers
    ):
        """system_admin should pass permission checks whatever is stored."""
        profile = await make_profile(
            roles[RoleKind.SYSTEM_ADMIN],
            permissions={"dashboard": ["read"]},
        )

        response = await guarded_client.delete(
            "/guarded/users/42", headers=auth_headers(profile)
        )

        assert response.status_code == 200

    async def test_admin_guard(
        self, guarded_client, user_profile, admin_profile, auth_headers
    ):
        """The admin guard should admit admin and refuse user."""
        allowed = await guarded_client.get("/guarded/admin", headers=auth_headers(admin_profile))
        refused = await guarded_client.get("/guarded/admin", headers=auth_headers(user_profile))

        assert allowed.status_code == 200
        assert refused.status_code == 403
        assert refused.json()["error_code"] == "admin_required"

    async def test_system_admin_guard(
        self, guarded_client, admin_profile, system_admin_profile, auth_headers
    ):
        """The system_admin guard should refuse admin."""
        allowed = await guarded_client.get(
            "/guarded/system", headers=auth_headers(system_admin_profile)
        )
        refused = await guarded_client.get("/guarded/system", headers=auth_headers(admin_profile))

        assert allowed.status_code == 200
        assert refused.status_code == 403
        assert refused.json()["error_code"] == "system_admin_required"

    async def test_lookup_failure(self, app, guarded_client, user_profile, auth_headers):
        """A failing profile store should give 500 with the detail attached."""
        store = AsyncMock()
        store.get_by_principal_id.side_effect = OperationalError(
            "SELECT", {}, Exception("database unavailable")
        )
        app.dependency_overrides[get_access_guard] = lambda: AccessGuard(store)

        response = await guarded_client.get("/guarded/me", headers=auth_headers(user_profile))

        body = response.json()
        assert response.status_code == 500
        assert body["error_code"] == "lookup_failed"
        assert "database unavailable" in body["details"]["error"]

    async def test_profile_without_role(self, guarded_client, make_profile, auth_headers):
        """A profile with no role attached should give 404."""
        orphan = await make_profile(None)

        response = await guarded_client.get("/guarded/me", headers=auth_headers(orphan))

        assert response.status_code == 404
