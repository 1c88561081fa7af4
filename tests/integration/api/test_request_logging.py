"""Integration tests for the request logging middleware."""

from unittest.mock import MagicMock

import pytest

from tooldash.core.logging import middleware


pytestmark = pytest.mark.integration


@pytest.fixture
def request_logger(monkeypatch) -> MagicMock:
    logger = MagicMock()
    monkeypatch.setattr(middleware, "logger", logger)
    return logger


def _logged(method: MagicMock, event: str) -> dict:
    calls = [call for call in method.call_args_list if call.args == (event,)]
    assert len(calls) == 1
    return calls[0].kwargs


class TestRequestLogging:
    """Tests for the per-request log line."""

    async def test_authorised_call_carries_profile_and_role(
        self, client, admin_profile, auth_headers, request_logger
    ):
        """A guarded call should log the profile and role it ran as."""
        response = await client.get(
            "/api/v1/access/me",
            headers={**auth_headers(admin_profile), "X-Request-ID": "req-123"},
        )

        fields = _logged(request_logger.info, "request_completed")
        assert response.status_code == 200
        assert fields["status_code"] == 200
        assert fields["profile_id"] == str(admin_profile.id)
        assert fields["role"] == "admin"
        assert fields["principal_id"] == str(admin_profile.user_id)
        assert fields["request_id"] == "req-123"

    async def test_missing_token_is_logged_as_denied(self, client, request_logger):
        """A 401 should be logged as a denial without a role."""
        response = await client.get("/api/v1/access/me")

        fields = _logged(request_logger.warning, "request_denied")
        assert response.status_code == 401
        assert fields["status_code"] == 401
        assert "role" not in fields

    async def test_forbidden_is_logged_as_denied(
        self, client, user_profile, auth_headers, request_logger
    ):
        """A 403 from an admin guard should be logged as a denial."""
        response = await client.get("/api/v1/roles", headers=auth_headers(user_profile))

        fields = _logged(request_logger.warning, "request_denied")
        assert response.status_code == 403
        assert fields["principal_id"] == str(user_profile.user_id)

    async def test_health_checks_are_not_logged(self, client, request_logger):
        """Liveness checks should not produce request log lines."""
        await client.get("/health/live")

        request_logger.info.assert_not_called()
        request_logger.warning.assert_not_called()
