"""
Unit Tests for AdminService.
"""

import pytest

from habit_tracker.backend.core.exceptions import NotFoundError
from habit_tracker.backend.services.admin import AdminService


class TestSetRole:

    @pytest.mark.asyncio
    async def test_role_change_updates_and_queues_notification(self, memory_storage, make_user):
        user = await make_user()

        updated = await AdminService(memory_storage).set_role(user.id, True)

        assert updated.is_admin is True
        pending = await memory_storage.get_pending_notifications()
        assert len(pending) == 1
        assert pending[0].user_id == user.id
        assert pending[0].type == "role_change"
        assert pending[0].message == "Your role has been upgraded to admin"

    @pytest.mark.asyncio
    async def test_unchanged_role_still_notifies(self, memory_storage, make_user):
        user = await make_user()

        await AdminService(memory_storage).set_role(user.id, False)

        assert len(await memory_storage.get_pending_notifications()) == 1

    @pytest.mark.asyncio
    async def test_unknown_user(self, memory_storage):
        with pytest.raises(NotFoundError, match="User not found"):
            await AdminService(memory_storage).set_role(404, True)

        assert await memory_storage.get_all_notifications() == []


class TestReadOnly:

    @pytest.mark.asyncio
    async def test_notifications_newest_first(self, memory_storage, make_user):
        user = await make_user()
        service = AdminService(memory_storage)
        await service.set_role(user.id, True)
        await service.set_role(user.id, False)

        messages = [n.message for n in await service.list_notifications()]

        assert messages == ["Your role has been changed to user", "Your role has been upgraded to admin"]

    @pytest.mark.asyncio
    async def test_system_stats(self, memory_storage, make_user):
        await make_user("alice")
        await make_user("bob")

        stats = await AdminService(memory_storage).system_stats()

        assert stats.total_users == 2
