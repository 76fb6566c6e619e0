"""
Integration tests for the entries and timeline endpoints.
"""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from habit_tracker.backend.core.utils import current_week, utc_now

API = "/api/v1"


@pytest.fixture
async def habit(client: AsyncClient, alice) -> dict:
    response = await client.post(
        f"{API}/habits",
        json={"name": "Read"},
        headers=alice["headers"],
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestEntries:

    @pytest.mark.asyncio
    async def test_create_and_list(self, client: AsyncClient, api, alice, habit):
        response = await client.post(
            f"{API}/entries",
            json={"habitId": habit["id"], "note": "20 pages"},
            headers=alice["headers"],
        )

        entry = api.assert_success(response, 201)["data"]
        assert entry["habitId"] == habit["id"]
        assert entry["userId"] == alice["id"]
        assert entry["note"] == "20 pages"

        all_entries = await client.get(f"{API}/entries", headers=alice["headers"])
        per_habit = await client.get(f"{API}/entries/{habit['id']}", headers=alice["headers"])
        assert [e["id"] for e in all_entries.json()["data"]] == [entry["id"]]
        assert [e["id"] for e in per_habit.json()["data"]] == [entry["id"]]

    @pytest.mark.asyncio
    async def test_delete_entry(self, client: AsyncClient, api, alice, habit):
        created = await client.post(
            f"{API}/entries",
            json={"habitId": habit["id"]},
            headers=alice["headers"],
        )
        entry_id = created.json()["data"]["id"]

        response = await client.delete(f"{API}/entries/{entry_id}", headers=alice["headers"])

        assert response.status_code == 204
        again = await client.delete(f"{API}/entries/{entry_id}", headers=alice["headers"])
        api.assert_error(again, 404, "RES_NOT_FOUND")

    @pytest.mark.asyncio
    async def test_entry_for_other_users_habit_not_found(self, client: AsyncClient, api, bob, habit):
        response = await client.post(
            f"{API}/entries",
            json={"habitId": habit["id"]},
            headers=bob["headers"],
        )

        api.assert_error(response, 404, "RES_NOT_FOUND")


class TestToggle:

    @pytest.mark.asyncio
    async def test_toggle_twice_restores_empty_state(self, client: AsyncClient, api, alice, habit):
        day = utc_now().date().isoformat()
        body = {"habitId": habit["id"], "date": day}

        first = await client.post(f"{API}/entries/toggle", json=body, headers=alice["headers"])
        second = await client.post(f"{API}/entries/toggle", json=body, headers=alice["headers"])

        first_data = api.assert_success(first)["data"]
        second_data = api.assert_success(second)["data"]
        assert first_data["created"] is True
        assert first_data["entry"]["completedAt"].startswith(day)
        assert second_data["created"] is False
        assert second_data["entry"]["id"] == first_data["entry"]["id"]

        listing = await client.get(f"{API}/entries/{habit['id']}", headers=alice["headers"])
        assert listing.json()["data"] == []

    @pytest.mark.asyncio
    async def test_toggle_marks_timeline(self, client: AsyncClient, api, alice, habit):
        today = utc_now().date()
        await client.post(
            f"{API}/entries/toggle",
            json={"habitId": habit["id"], "date": today.isoformat()},
            headers=alice["headers"],
        )

        response = await client.get(f"{API}/stats/timeline", headers=alice["headers"])

        data = api.assert_success(response)["data"]
        week = current_week(today)
        assert data["weekStart"] == week[0].isoformat()
        assert len(data["habits"]) == 1
        days = {d["date"]: d["completed"] for d in data["habits"][0]["days"]}
        assert len(days) == 7
        assert days[today.isoformat()] is True
        other_day = today - timedelta(days=1) if today != week[0] else today + timedelta(days=1)
        assert days[other_day.isoformat()] is False
