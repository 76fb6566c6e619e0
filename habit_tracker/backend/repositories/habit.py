"""
Habit Repository.

Data access layer for habits. Ownership is checked by the service layer,
not here.
"""

from sqlalchemy import select

from habit_tracker.backend.models.habit import Habit
from habit_tracker.backend.repositories.base import BaseRepository


class HabitRepository(BaseRepository[Habit]):
    """Repository for Habit model."""

    model = Habit

    async def get_by_user(self, user_id: int) -> list[Habit]:
        """Get all habits owned by a user, oldest first."""
        result = await self.session.execute(
            select(Habit)
            .where(Habit.user_id == user_id)
            .order_by(Habit.id)
        )
        return list(result.scalars().all())

    async def get_with_reminder_at(self, reminder_time: str) -> list[Habit]:
        """Get habits with reminders enabled for the given "HH:MM"."""
        result = await self.session.execute(
            select(Habit)
            .where(Habit.reminder == True)  # noqa: E712
            .where(Habit.reminder_time == reminder_time)
            .order_by(Habit.id)
        )
        return list(result.scalars().all())
