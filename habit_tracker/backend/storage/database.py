"""
SQLAlchemy Storage Backend.

Implements the Storage contract on top of the per-entity repositories,
all sharing one AsyncSession. Transaction boundaries belong to the
provider that created the session.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from habit_tracker.backend.models import Entry, Habit, Notification, SystemSettings, User
from habit_tracker.backend.repositories.entry import EntryRepository
from habit_tracker.backend.repositories.habit import HabitRepository
from habit_tracker.backend.repositories.notification import NotificationRepository
from habit_tracker.backend.repositories.system_settings import SystemSettingsRepository
from habit_tracker.backend.repositories.user import UserRepository
from habit_tracker.backend.storage.base import Storage, SystemStats


class DatabaseStorage(Storage):
    """Storage backed by a relational database through SQLAlchemy."""

    def __init__(self, session: AsyncSession, settings_defaults: dict[str, Any]) -> None:
        self.session = session
        self._settings_defaults = settings_defaults
        self.users = UserRepository(session)
        self.habits = HabitRepository(session)
        self.entries = EntryRepository(session)
        self.notifications = NotificationRepository(session)
        self.settings = SystemSettingsRepository(session)

    async def get_user(self, user_id: int) -> User | None:
        return await self.users.get_by_id_or_none(user_id)

    async def get_user_by_username(self, username: str) -> User | None:
        return await self.users.get_by_username(username)

    async def get_user_by_telegram_id(self, telegram_id: str) -> User | None:
        return await self.users.get_by_telegram_id(telegram_id)

    async def create_user(self, **data: Any) -> User:
        return await self.users.create(**data)

    async def update_user(self, user_id: int, **changes: Any) -> User:
        return await self.users.update(user_id, **changes)

    async def get_all_users(self) -> list[User]:
        return await self.users.get_all()

    async def create_habit(self, **data: Any) -> Habit:
        return await self.habits.create(**data)

    async def get_habit(self, habit_id: int) -> Habit | None:
        return await self.habits.get_by_id_or_none(habit_id)

    async def get_user_habits(self, user_id: int) -> list[Habit]:
        return await self.habits.get_by_user(user_id)

    async def get_habits_with_reminder_at(self, reminder_time: str) -> list[Habit]:
        return await self.habits.get_with_reminder_at(reminder_time)

    async def update_habit(self, habit_id: int, **changes: Any) -> Habit:
        return await self.habits.update(habit_id, **changes)

    async def delete_habit(self, habit_id: int) -> None:
        await self.habits.delete(habit_id)

    async def create_entry(self, **data: Any) -> Entry:
        return await self.entries.create(**data)

    async def get_entry(self, entry_id: int) -> Entry | None:
        return await self.entries.get_by_id_or_none(entry_id)

    async def get_entries(self, habit_id: int) -> list[Entry]:
        return await self.entries.get_by_habit(habit_id)

    async def get_user_entries(self, user_id: int) -> list[Entry]:
        return await self.entries.get_by_user(user_id)

    async def delete_entry(self, entry_id: int) -> None:
        await self.entries.delete(entry_id)

    async def create_notification(self, **data: Any) -> Notification:
        data.setdefault("sent", False)
        return await self.notifications.create(**data)

    async def get_pending_notifications(self) -> list[Notification]:
        return await self.notifications.get_pending()

    async def mark_notification_sent(self, notification_id: int) -> None:
        await self.notifications.mark_sent(notification_id)

    async def get_all_notifications(self) -> list[Notification]:
        return await self.notifications.get_all_newest_first()

    async def get_system_stats(self) -> SystemStats:
        return SystemStats(
            total_users=await self.users.count(),
            total_habits=await self.habits.count(),
            total_entries=await self.entries.count(),
            pending_notifications=await self.notifications.count_pending(),
        )

    async def get_system_settings(self) -> SystemSettings:
        return await self.settings.get_or_create(**self._settings_defaults)

    async def update_system_settings(self, **changes: Any) -> SystemSettings:
        changes = {key: value for key, value in changes.items() if value is not None}
        return await self.settings.merge(self._settings_defaults, **changes)
