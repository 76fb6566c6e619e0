"""
Integration tests for the admin endpoints.

The dispatcher under test is the runtime started by the integration
fixtures; its transport is swapped for a recording fake where delivery is
checked.
"""

import pytest
from httpx import AsyncClient

API = "/api/v1"
ROLE_UPGRADE_MESSAGE = "Your role has been upgraded to admin"


class TestAdminAccess:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method,path",
        [
            ("GET", "/admin/users"),
            ("GET", "/admin/stats"),
            ("GET", "/admin/notifications"),
            ("GET", "/admin/settings"),
            ("GET", "/admin/dispatcher"),
            ("POST", "/admin/dispatcher/run"),
        ],
    )
    async def test_regular_user_forbidden(self, client: AsyncClient, api, alice, method, path):
        response = await client.request(method, f"{API}{path}", headers=alice["headers"])

        api.assert_error(response, 403, "AUTHZ_FORBIDDEN")

    @pytest.mark.asyncio
    async def test_anonymous_unauthorized(self, client: AsyncClient, api):
        response = await client.get(f"{API}/admin/users")

        api.assert_error(response, 401, "AUTH_UNAUTHORIZED")


class TestUsers:

    @pytest.mark.asyncio
    async def test_list_users(self, client: AsyncClient, api, admin_headers, alice, bob):
        response = await client.get(f"{API}/admin/users", headers=admin_headers)

        usernames = {u["username"] for u in api.assert_success(response)["data"]}
        assert usernames == {"root", "alice", "bob"}

    @pytest.mark.asyncio
    async def test_role_change_queues_notification(self, client: AsyncClient, api, admin_headers, alice):
        response = await client.patch(
            f"{API}/admin/users/{alice['id']}",
            json={"isAdmin": True},
            headers=admin_headers,
        )

        assert api.assert_success(response)["data"]["isAdmin"] is True

        log = await client.get(f"{API}/admin/notifications", headers=admin_headers)
        role_changes = [n for n in log.json()["data"] if n["type"] == "role_change"]
        assert len(role_changes) == 1
        assert role_changes[0]["userId"] == alice["id"]
        assert role_changes[0]["message"] == ROLE_UPGRADE_MESSAGE
        assert role_changes[0]["sent"] is False

    @pytest.mark.asyncio
    async def test_promoted_user_gains_admin_access(self, client: AsyncClient, admin_headers, alice):
        await client.patch(
            f"{API}/admin/users/{alice['id']}",
            json={"isAdmin": True},
            headers=admin_headers,
        )

        response = await client.get(f"{API}/admin/users", headers=alice["headers"])

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_unknown_user_not_found(self, client: AsyncClient, api, admin_headers):
        response = await client.patch(
            f"{API}/admin/users/9999",
            json={"isAdmin": True},
            headers=admin_headers,
        )

        api.assert_error(response, 404, "RES_NOT_FOUND")


class TestSystemStats:

    @pytest.mark.asyncio
    async def test_counts(self, client: AsyncClient, api, admin_headers, alice):
        await client.post(f"{API}/habits", json={"name": "Read"}, headers=alice["headers"])
        await client.patch(
            f"{API}/admin/users/{alice['id']}",
            json={"isAdmin": False},
            headers=admin_headers,
        )

        response = await client.get(f"{API}/admin/stats", headers=admin_headers)

        data = api.assert_success(response)["data"]
        assert data["totalUsers"] == 2
        assert data["totalHabits"] == 1
        assert data["totalEntries"] == 0
        assert data["pendingNotifications"] == 1


class TestSettings:

    @pytest.mark.asyncio
    async def test_defaults(self, client: AsyncClient, api, admin_headers):
        response = await client.get(f"{API}/admin/settings", headers=admin_headers)

        data = api.assert_success(response)["data"]
        assert data["enableNotifications"] is True
        assert data["notificationInterval"] == 60

    @pytest.mark.asyncio
    async def test_interval_below_minimum_rejected(self, client: AsyncClient, api, admin_headers, runtime):
        response = await client.patch(
            f"{API}/admin/settings",
            json={"notificationInterval": 10},
            headers=admin_headers,
        )

        api.assert_error(response, 400, "VAL_VALIDATION_ERROR")
        current = await client.get(f"{API}/admin/settings", headers=admin_headers)
        assert current.json()["data"]["notificationInterval"] == 60
        assert runtime.scheduler.settings.interval_seconds == 60

    @pytest.mark.asyncio
    async def test_new_interval_rearms_dispatcher(self, client: AsyncClient, api, admin_headers, runtime):
        response = await client.patch(
            f"{API}/admin/settings",
            json={"notificationInterval": 30},
            headers=admin_headers,
        )

        assert api.assert_success(response)["data"]["notificationInterval"] == 30
        assert runtime.scheduler.settings.interval_seconds == 30
        assert runtime.state.value == "armed"

    @pytest.mark.asyncio
    async def test_disabling_stops_dispatcher(self, client: AsyncClient, api, admin_headers, runtime):
        response = await client.patch(
            f"{API}/admin/settings",
            json={"enableNotifications": False},
            headers=admin_headers,
        )

        data = api.assert_success(response)["data"]
        assert data["enableNotifications"] is False
        assert data["notificationInterval"] == 60
        assert runtime.state.value == "stopped"

        status = await client.get(f"{API}/admin/dispatcher", headers=admin_headers)
        assert status.json()["data"]["state"] == "stopped"


class TestDispatcher:

    @pytest.mark.asyncio
    async def test_status(self, client: AsyncClient, api, admin_headers):
        response = await client.get(f"{API}/admin/dispatcher", headers=admin_headers)

        data = api.assert_success(response)["data"]
        assert data["state"] == "armed"
        assert data["enabled"] is True
        assert data["intervalSeconds"] == 60
        assert data["nextRunTime"] is not None
        assert data["transport"] == "NullTransport"

    @pytest.mark.asyncio
    async def test_run_delivers_to_linked_user(
        self,
        client: AsyncClient,
        api,
        admin_headers,
        alice,
        runtime,
        memory_storage,
        transport_factory,
    ):
        await memory_storage.update_user(alice["id"], telegram_id="555")
        await client.patch(
            f"{API}/admin/users/{alice['id']}",
            json={"isAdmin": True},
            headers=admin_headers,
        )
        transport = transport_factory()
        runtime.dispatcher.transport = transport

        response = await client.post(f"{API}/admin/dispatcher/run", headers=admin_headers)

        report = api.assert_success(response)["data"]
        assert report["delivered"] == 1
        assert report["failed"] == 0
        assert report["results"][0]["outcome"] == "delivered"
        assert transport.calls == [("555", ROLE_UPGRADE_MESSAGE)]

        log = await client.get(f"{API}/admin/notifications", headers=admin_headers)
        assert [n["sent"] for n in log.json()["data"]] == [True]

    @pytest.mark.asyncio
    async def test_run_keeps_unlinked_user_pending(self, client: AsyncClient, api, admin_headers, alice):
        await client.patch(
            f"{API}/admin/users/{alice['id']}",
            json={"isAdmin": True},
            headers=admin_headers,
        )

        response = await client.post(f"{API}/admin/dispatcher/run", headers=admin_headers)

        report = api.assert_success(response)["data"]
        assert report["delivered"] == 0
        assert report["skipped"] == 1

        log = await client.get(f"{API}/admin/notifications", headers=admin_headers)
        assert [n["sent"] for n in log.json()["data"]] == [False]

    @pytest.mark.asyncio
    async def test_no_runtime_unavailable(self, client: AsyncClient, api, app, admin_headers):
        app.state.notification_runtime = None

        response = await client.post(f"{API}/admin/dispatcher/run", headers=admin_headers)

        api.assert_error(response, 503, "SYS_UNAVAILABLE")
