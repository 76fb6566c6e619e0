"""
Storage Contract.

Abstract persistence interface shared by the SQLAlchemy and in-memory
backends. Every operation is async. Ownership of habits and entries is
enforced by callers, not by storage.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from habit_tracker.backend.models import Entry, Habit, Notification, SystemSettings, User


@dataclass(frozen=True)
class SystemStats:
    """Point-in-time record counts for the admin dashboard."""

    total_users: int
    total_habits: int
    total_entries: int
    pending_notifications: int


class Storage(ABC):
    """Persistent-entity contract for users, habits, entries, notifications, settings."""

    # Users

    @abstractmethod
    async def get_user(self, user_id: int) -> User | None:
        ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> User | None:
        ...

    @abstractmethod
    async def get_user_by_telegram_id(self, telegram_id: str) -> User | None:
        ...

    @abstractmethod
    async def create_user(self, **data: Any) -> User:
        ...

    @abstractmethod
    async def update_user(self, user_id: int, **changes: Any) -> User:
        """Raises NotFoundError if the user does not exist."""

    @abstractmethod
    async def get_all_users(self) -> list[User]:
        ...

    # Habits

    @abstractmethod
    async def create_habit(self, **data: Any) -> Habit:
        ...

    @abstractmethod
    async def get_habit(self, habit_id: int) -> Habit | None:
        ...

    @abstractmethod
    async def get_user_habits(self, user_id: int) -> list[Habit]:
        ...

    @abstractmethod
    async def get_habits_with_reminder_at(self, reminder_time: str) -> list[Habit]:
        ...

    @abstractmethod
    async def update_habit(self, habit_id: int, **changes: Any) -> Habit:
        """Raises NotFoundError if the habit does not exist."""

    @abstractmethod
    async def delete_habit(self, habit_id: int) -> None:
        """No-op if the habit does not exist."""

    # Entries

    @abstractmethod
    async def create_entry(self, **data: Any) -> Entry:
        ...

    @abstractmethod
    async def get_entry(self, entry_id: int) -> Entry | None:
        ...

    @abstractmethod
    async def get_entries(self, habit_id: int) -> list[Entry]:
        ...

    @abstractmethod
    async def get_user_entries(self, user_id: int) -> list[Entry]:
        ...

    @abstractmethod
    async def delete_entry(self, entry_id: int) -> None:
        """No-op if the entry does not exist."""

    # Notifications

    @abstractmethod
    async def create_notification(self, **data: Any) -> Notification:
        """Storage assigns id and created_at; `sent` defaults to False."""

    @abstractmethod
    async def get_pending_notifications(self) -> list[Notification]:
        ...

    @abstractmethod
    async def mark_notification_sent(self, notification_id: int) -> None:
        """Idempotent: no-op if absent or already sent."""

    @abstractmethod
    async def get_all_notifications(self) -> list[Notification]:
        ...

    # Admin

    @abstractmethod
    async def get_system_stats(self) -> SystemStats:
        ...

    @abstractmethod
    async def get_system_settings(self) -> SystemSettings:
        ...

    @abstractmethod
    async def update_system_settings(self, **changes: Any) -> SystemSettings:
        """Merge non-None values into the settings singleton."""
