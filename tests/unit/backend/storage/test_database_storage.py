"""
Unit Tests for the SQLAlchemy storage backend.

Runs the Storage contract against an in-memory SQLite database through
DatabaseStorageProvider, one unit of work per `session()` block.
"""

import pytest

from habit_tracker.backend.storage.provider import DatabaseStorageProvider

DEFAULTS = {"enable_notifications": True, "notification_interval": 60}


@pytest.fixture
def db_provider(db_session_factory) -> DatabaseStorageProvider:
    return DatabaseStorageProvider(db_session_factory, DEFAULTS)


async def _create_user(provider, username="alice", telegram_id=None):
    async with provider.session() as storage:
        return await storage.create_user(
            username=username,
            password_hash="h",
            is_admin=False,
            telegram_id=telegram_id,
        )


class TestDatabaseStorage:
    """Storage contract on the relational backend."""

    @pytest.mark.asyncio
    async def test_user_roundtrip_across_units_of_work(self, db_provider):
        """Committed users are visible to later sessions."""
        user = await _create_user(db_provider, telegram_id="12345")

        async with db_provider.session() as storage:
            by_name = await storage.get_user_by_username("alice")
            by_handle = await storage.get_user_by_telegram_id("12345")

        assert by_name.id == user.id
        assert by_handle.id == user.id

    @pytest.mark.asyncio
    async def test_failed_unit_of_work_rolls_back(self, db_provider):
        """An exception inside session() discards its writes."""
        with pytest.raises(RuntimeError):
            async with db_provider.session() as storage:
                await storage.create_user(username="ghost", password_hash="h")
                raise RuntimeError("boom")

        async with db_provider.session() as storage:
            assert await storage.get_user_by_username("ghost") is None

    @pytest.mark.asyncio
    async def test_pending_notifications_and_mark_sent(self, db_provider):
        user = await _create_user(db_provider)
        async with db_provider.session() as storage:
            first = await storage.create_notification(
                user_id=user.id, habit_id=0, type="role_change", message="one"
            )
            await storage.create_notification(
                user_id=user.id, habit_id=0, type="role_change", message="two"
            )

        async with db_provider.session() as storage:
            await storage.mark_notification_sent(first.id)
            await storage.mark_notification_sent(first.id)

        async with db_provider.session() as storage:
            pending = await storage.get_pending_notifications()
            stats = await storage.get_system_stats()

        assert [n.message for n in pending] == ["two"]
        assert stats.pending_notifications == 1
        assert stats.total_users == 1

    @pytest.mark.asyncio
    async def test_reminder_lookup(self, db_provider):
        user = await _create_user(db_provider)
        async with db_provider.session() as storage:
            await storage.create_habit(
                user_id=user.id, name="Stretch", frequency="daily",
                reminder=True, reminder_time="07:15",
            )
            await storage.create_habit(
                user_id=user.id, name="Read", frequency="daily",
                reminder=False, reminder_time="07:15",
            )

        async with db_provider.session() as storage:
            habits = await storage.get_habits_with_reminder_at("07:15")

        assert [h.name for h in habits] == ["Stretch"]

    @pytest.mark.asyncio
    async def test_settings_created_with_defaults_then_merged(self, db_provider):
        async with db_provider.session() as storage:
            settings = await storage.get_system_settings()
            assert settings.notification_interval == 60
            assert settings.enable_notifications is True

        async with db_provider.session() as storage:
            await storage.update_system_settings(
                notification_interval=30, telegram_bot_token=None
            )

        async with db_provider.session() as storage:
            settings = await storage.get_system_settings()

        assert settings.notification_interval == 30
        assert settings.telegram_bot_token is None
