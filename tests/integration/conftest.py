"""
Integration Test Fixtures.

The real application (routers, dependencies, exception handlers) over a
MemoryStorage provider, driven through httpx. The lifespan does not run
under ASGITransport, so the notification runtime is started here without a
Telegram channel.
"""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from habit_tracker.backend.core.config import get_app_config
from habit_tracker.backend.notifications.runtime import NotificationRuntime
from habit_tracker.backend.storage.provider import set_storage_provider

API = "/api/v1"
PASSWORD = "correct-horse"


@pytest.fixture
async def runtime(provider) -> AsyncGenerator[NotificationRuntime, None]:
    """Running dispatcher scheduler on the test event loop."""
    runtime = NotificationRuntime.build(provider, get_app_config().notifications)
    await runtime.start()
    yield runtime
    await runtime.shutdown()


@pytest.fixture
async def app(provider, runtime):
    set_storage_provider(provider)

    from habit_tracker.backend.main import create_app

    app = create_app()
    app.state.notification_runtime = runtime
    yield app
    set_storage_provider(None)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """
    Test client bound to the application.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client


# =============================================================================
# Authentication Helpers
# =============================================================================


async def register(client: AsyncClient, username: str) -> dict[str, Any]:
    """Register an account and return the token payload."""
    response = await client.post(
        f"{API}/auth/register",
        json={"username": username, "password": PASSWORD},
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
def register_user(client: AsyncClient):
    """
    Register through the API.

    Usage:
        data = await register_user("carol")
        headers = {"Authorization": f"Bearer {data['accessToken']}"}
    """

    async def _register(username: str) -> dict[str, Any]:
        return await register(client, username)

    return _register


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def admin_headers(client: AsyncClient) -> dict[str, str]:
    """First registered account, which is an admin."""
    data = await register(client, "root")
    assert data["user"]["isAdmin"] is True
    return bearer(data["accessToken"])


@pytest.fixture
async def alice(client: AsyncClient, admin_headers) -> dict[str, Any]:
    """A regular user: `{"id": ..., "headers": {...}}`."""
    data = await register(client, "alice")
    return {"id": data["user"]["id"], "headers": bearer(data["accessToken"])}


@pytest.fixture
async def bob(client: AsyncClient, admin_headers) -> dict[str, Any]:
    data = await register(client, "bob")
    return {"id": data["user"]["id"], "headers": bearer(data["accessToken"])}


# =============================================================================
# API Response Assertion Helpers
# =============================================================================


class ApiAssertions:
    """Helper class for API response assertions."""

    @staticmethod
    def assert_success(response: Any, expected_status: int = 200) -> dict[str, Any]:
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is True, f"Response not successful: {data}"
        return data

    @staticmethod
    def assert_error(
        response: Any,
        expected_status: int,
        expected_code: str | None = None,
    ) -> dict[str, Any]:
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is False, f"Response should be error: {data}"
        assert data.get("error") is not None, f"Missing error details: {data}"

        if expected_code:
            actual_code = data["error"].get("code")
            assert actual_code == expected_code, (
                f"Expected error code {expected_code}, got {actual_code}"
            )

        return data

    @staticmethod
    def assert_validation_error(response: Any, field: str | None = None) -> dict[str, Any]:
        """Assert a request validation error (422)."""
        data = ApiAssertions.assert_error(response, 422, "VAL_REQUEST_INVALID")

        if field:
            errors = data["error"].get("details", {}).get("validation_errors", [])
            fields = [e.get("field", "") for e in errors]
            assert any(field in f for f in fields), (
                f"Expected validation error for field '{field}', "
                f"got errors for: {fields}"
            )

        return data


@pytest.fixture
def api() -> ApiAssertions:
    """Provide API assertion helpers."""
    return ApiAssertions()
