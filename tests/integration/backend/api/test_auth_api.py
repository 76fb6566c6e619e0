"""
Integration tests for the auth endpoints.
"""

import pytest
from httpx import AsyncClient

API = "/api/v1"
PASSWORD = "correct-horse"


class TestRegister:

    @pytest.mark.asyncio
    async def test_register_returns_token_and_camel_case_user(self, client: AsyncClient, api):
        response = await client.post(
            f"{API}/auth/register",
            json={"username": "alice", "password": PASSWORD},
        )

        data = api.assert_success(response, 201)["data"]
        assert data["accessToken"]
        assert data["tokenType"] == "bearer"
        assert data["user"]["username"] == "alice"
        assert "isAdmin" in data["user"]
        assert "passwordHash" not in data["user"]

    @pytest.mark.asyncio
    async def test_first_account_is_admin(self, client: AsyncClient, register_user):
        first = await register_user("root")
        second = await register_user("alice")

        assert first["user"]["isAdmin"] is True
        assert second["user"]["isAdmin"] is False

    @pytest.mark.asyncio
    async def test_duplicate_username_conflicts(self, client: AsyncClient, api, register_user):
        await register_user("alice")

        response = await client.post(
            f"{API}/auth/register",
            json={"username": "alice", "password": PASSWORD},
        )

        api.assert_error(response, 409, "RES_CONFLICT")

    @pytest.mark.asyncio
    async def test_short_username_rejected(self, client: AsyncClient, api):
        response = await client.post(
            f"{API}/auth/register",
            json={"username": "al", "password": PASSWORD},
        )

        api.assert_validation_error(response, "username")


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_with_correct_password(self, client: AsyncClient, api, register_user):
        await register_user("alice")

        response = await client.post(
            f"{API}/auth/login",
            json={"username": "alice", "password": PASSWORD},
        )

        data = api.assert_success(response)["data"]
        assert data["user"]["username"] == "alice"

    @pytest.mark.asyncio
    async def test_wrong_password_unauthorized(self, client: AsyncClient, api, register_user):
        await register_user("alice")

        response = await client.post(
            f"{API}/auth/login",
            json={"username": "alice", "password": "wrong-horse"},
        )

        api.assert_error(response, 401, "AUTH_UNAUTHORIZED")

    @pytest.mark.asyncio
    async def test_unknown_user_unauthorized(self, client: AsyncClient, api):
        response = await client.post(
            f"{API}/auth/login",
            json={"username": "ghost", "password": PASSWORD},
        )

        api.assert_error(response, 401, "AUTH_UNAUTHORIZED")


class TestMe:

    @pytest.mark.asyncio
    async def test_me_returns_caller(self, client: AsyncClient, api, alice):
        response = await client.get(f"{API}/auth/me", headers=alice["headers"])

        data = api.assert_success(response)["data"]
        assert data["id"] == alice["id"]
        assert data["username"] == "alice"

    @pytest.mark.asyncio
    async def test_missing_token_unauthorized(self, client: AsyncClient, api):
        response = await client.get(f"{API}/auth/me")

        api.assert_error(response, 401, "AUTH_UNAUTHORIZED")

    @pytest.mark.asyncio
    async def test_garbage_token_unauthorized(self, client: AsyncClient, api):
        response = await client.get(
            f"{API}/auth/me",
            headers={"Authorization": "Bearer not-a-jwt"},
        )

        api.assert_error(response, 401, "AUTH_UNAUTHORIZED")


class TestPasswordLength:
    """Passwords are capped at bcrypt's 72-byte input limit."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("password", ["x" * 100, "é" * 40])
    async def test_register_rejects_long_password(self, client: AsyncClient, api, password):
        response = await client.post(
            f"{API}/auth/register",
            json={"username": "alice", "password": password},
        )

        api.assert_validation_error(response, "password")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("password", ["x" * 100, "é" * 40])
    async def test_login_rejects_long_password(self, client: AsyncClient, api, register_user, password):
        await register_user("alice")

        response = await client.post(
            f"{API}/auth/login",
            json={"username": "alice", "password": password},
        )

        api.assert_validation_error(response, "password")

    @pytest.mark.asyncio
    async def test_password_at_limit_accepted(self, client: AsyncClient, api):
        password = "x" * 72

        registered = await client.post(
            f"{API}/auth/register",
            json={"username": "alice", "password": password},
        )
        logged_in = await client.post(
            f"{API}/auth/login",
            json={"username": "alice", "password": password},
        )

        api.assert_success(registered, 201)
        api.assert_success(logged_in)
