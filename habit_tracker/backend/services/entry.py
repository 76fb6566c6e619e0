"""
Entry Service.

Completion entries for the caller's habits. Every entry is created with
the habit owner's user id, so an entry's user always matches its habit's
user. Newly completed entries may trigger an achievement notification.
"""

from datetime import date, datetime, time
from typing import Any

from habit_tracker.backend.core.exceptions import NotFoundError
from habit_tracker.backend.core.utils import day_bounds, to_naive_utc, utc_now
from habit_tracker.backend.models import Entry, Habit, User
from habit_tracker.backend.notifications.producer import NotificationProducer
from habit_tracker.backend.schemas.entry import EntryCreate
from habit_tracker.backend.storage.base import Storage
from habit_tracker.backend.services.base import BaseService
from habit_tracker.backend.services.habit import HabitService


class EntryService(BaseService):
    """Service for entry business logic."""

    def __init__(self, storage: Storage) -> None:
        super().__init__(storage)
        self.habits = HabitService(storage)
        self.producer = NotificationProducer(storage)

    async def list_entries(self, user: User) -> list[Entry]:
        return await self.storage.get_user_entries(user.id)

    async def list_habit_entries(self, user: User, habit_id: int) -> list[Entry]:
        await self.habits.get_owned_habit(user, habit_id)
        return await self.storage.get_entries(habit_id)

    async def create_entry(self, user: User, data: EntryCreate) -> Entry:
        """
        Log a completion for one of the caller's habits.

        Raises:
            NotFoundError: Habit absent or owned by another user
        """
        habit = await self.habits.get_owned_habit(user, data.habit_id)
        return await self._create(
            habit,
            completed=data.completed,
            note=data.note,
            completed_at=to_naive_utc(data.completed_at) if data.completed_at else utc_now(),
        )

    async def delete_entry(self, user: User, entry_id: int) -> None:
        entry = await self.storage.get_entry(entry_id)
        if entry is None or entry.user_id != user.id:
            raise NotFoundError("Entry not found")
        self._log_operation("Deleting entry", entry_id=entry_id)
        await self._execute_db_operation("delete_entry", self.storage.delete_entry(entry_id))

    async def toggle(self, user: User, habit_id: int, day: date) -> tuple[bool, Entry]:
        """
        Flip the habit's completion for `day`.

        Removes the day's entry if one exists, otherwise creates one, so
        toggling twice leaves the entries as they were.

        Returns:
            (created, entry) where entry is the new or the removed entry
        """
        habit = await self.habits.get_owned_habit(user, habit_id)
        start, end = day_bounds(day)
        existing = next(
            (e for e in await self.storage.get_entries(habit_id) if start <= e.completed_at < end),
            None,
        )

        if existing is not None:
            self._log_operation("Toggle removed entry", habit_id=habit_id, day=day.isoformat())
            await self._execute_db_operation("toggle_entry", self.storage.delete_entry(existing.id))
            return False, existing

        entry = await self._create(
            habit,
            completed=True,
            note=None,
            completed_at=datetime.combine(day, time.min),
        )
        return True, entry

    async def _create(self, habit: Habit, **values: Any) -> Entry:
        entry = await self._execute_db_operation(
            "create_entry",
            self.storage.create_entry(habit_id=habit.id, user_id=habit.user_id, **values),
        )
        self._log_operation("Entry created", habit_id=habit.id, entry_id=entry.id)
        await self.producer.check_achievement(habit, entry)
        return entry

