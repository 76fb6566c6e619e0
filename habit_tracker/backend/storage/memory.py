"""
In-Memory Storage Backend.

Keeps every record in process-local dicts. Records are plain (transient)
model instances, so callers see the same types as with the database
backend. One id counter is shared across all entity kinds.
"""

from itertools import count
from typing import Any

from habit_tracker.backend.core.exceptions import ConflictError, NotFoundError
from habit_tracker.backend.core.utils import utc_now
from habit_tracker.backend.models import Entry, Habit, Notification, SystemSettings, User
from habit_tracker.backend.models.notification import SYSTEM_HABIT_ID
from habit_tracker.backend.models.system_settings import SETTINGS_ROW_ID
from habit_tracker.backend.storage.base import Storage, SystemStats


def _apply(instance: Any, changes: dict[str, Any]) -> Any:
    for key, value in changes.items():
        if hasattr(instance, key):
            setattr(instance, key, value)
    return instance


class MemoryStorage(Storage):
    """Storage that lives for the lifetime of the process."""

    def __init__(self, settings_defaults: dict[str, Any]) -> None:
        self._ids = count(1)
        self._users: dict[int, User] = {}
        self._habits: dict[int, Habit] = {}
        self._entries: dict[int, Entry] = {}
        self._notifications: dict[int, Notification] = {}
        self._settings_defaults = settings_defaults
        self._settings: SystemSettings | None = None

    def _next_id(self) -> int:
        return next(self._ids)

    async def get_user(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    async def get_user_by_username(self, username: str) -> User | None:
        return next((u for u in self._users.values() if u.username == username), None)

    async def get_user_by_telegram_id(self, telegram_id: str) -> User | None:
        return next((u for u in self._users.values() if u.telegram_id == telegram_id), None)

    async def create_user(self, **data: Any) -> User:
        if await self.get_user_by_username(data["username"]) is not None:
            raise ConflictError("Username already taken")
        user = User(id=self._next_id(), is_admin=False, telegram_id=None)
        _apply(user, data)
        self._users[user.id] = user
        return user

    async def update_user(self, user_id: int, **changes: Any) -> User:
        user = self._users.get(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return _apply(user, changes)

    async def get_all_users(self) -> list[User]:
        return list(self._users.values())

    async def create_habit(self, **data: Any) -> Habit:
        habit = Habit(
            id=self._next_id(),
            description=None,
            target_count=1,
            reminder=False,
            reminder_time=None,
            created_at=utc_now(),
        )
        _apply(habit, data)
        self._habits[habit.id] = habit
        return habit

    async def get_habit(self, habit_id: int) -> Habit | None:
        return self._habits.get(habit_id)

    async def get_user_habits(self, user_id: int) -> list[Habit]:
        return [h for h in self._habits.values() if h.user_id == user_id]

    async def get_habits_with_reminder_at(self, reminder_time: str) -> list[Habit]:
        return [
            h for h in self._habits.values()
            if h.reminder and h.reminder_time == reminder_time
        ]

    async def update_habit(self, habit_id: int, **changes: Any) -> Habit:
        habit = self._habits.get(habit_id)
        if habit is None:
            raise NotFoundError("Habit not found")
        return _apply(habit, changes)

    async def delete_habit(self, habit_id: int) -> None:
        self._habits.pop(habit_id, None)

    async def create_entry(self, **data: Any) -> Entry:
        entry = Entry(id=self._next_id(), completed=False, note=None, completed_at=utc_now())
        _apply(entry, {key: value for key, value in data.items() if value is not None})
        self._entries[entry.id] = entry
        return entry

    async def get_entry(self, entry_id: int) -> Entry | None:
        return self._entries.get(entry_id)

    async def get_entries(self, habit_id: int) -> list[Entry]:
        return [e for e in self._entries.values() if e.habit_id == habit_id]

    async def get_user_entries(self, user_id: int) -> list[Entry]:
        return [e for e in self._entries.values() if e.user_id == user_id]

    async def delete_entry(self, entry_id: int) -> None:
        self._entries.pop(entry_id, None)

    async def create_notification(self, **data: Any) -> Notification:
        notification = Notification(
            id=self._next_id(),
            habit_id=SYSTEM_HABIT_ID,
            sent=False,
            created_at=utc_now(),
        )
        _apply(notification, data)
        self._notifications[notification.id] = notification
        return notification

    async def get_pending_notifications(self) -> list[Notification]:
        return [n for n in self._notifications.values() if not n.sent]

    async def mark_notification_sent(self, notification_id: int) -> None:
        notification = self._notifications.get(notification_id)
        if notification is not None:
            notification.sent = True

    async def get_all_notifications(self) -> list[Notification]:
        return sorted(self._notifications.values(), key=lambda n: n.id, reverse=True)

    async def get_system_stats(self) -> SystemStats:
        return SystemStats(
            total_users=len(self._users),
            total_habits=len(self._habits),
            total_entries=len(self._entries),
            pending_notifications=len(await self.get_pending_notifications()),
        )

    async def get_system_settings(self) -> SystemSettings:
        if self._settings is None:
            self._settings = SystemSettings(
                id=SETTINGS_ROW_ID,
                telegram_bot_token=None,
                updated_at=utc_now(),
                **self._settings_defaults,
            )
        return self._settings

    async def update_system_settings(self, **changes: Any) -> SystemSettings:
        settings = await self.get_system_settings()
        _apply(settings, {key: value for key, value in changes.items() if value is not None})
        settings.updated_at = utc_now()
        return settings
