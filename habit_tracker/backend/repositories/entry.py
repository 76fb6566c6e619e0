"""
Entry Repository.

Data access layer for habit completion entries.
"""

from sqlalchemy import select

from habit_tracker.backend.models.entry import Entry
from habit_tracker.backend.repositories.base import BaseRepository


class EntryRepository(BaseRepository[Entry]):
    """Repository for Entry model."""

    model = Entry

    async def get_by_habit(self, habit_id: int) -> list[Entry]:
        """Get all entries for a habit in completion order."""
        result = await self.session.execute(
            select(Entry)
            .where(Entry.habit_id == habit_id)
            .order_by(Entry.completed_at, Entry.id)
        )
        return list(result.scalars().all())

    async def get_by_user(self, user_id: int) -> list[Entry]:
        """Get all entries logged by a user in completion order."""
        result = await self.session.execute(
            select(Entry)
            .where(Entry.user_id == user_id)
            .order_by(Entry.completed_at, Entry.id)
        )
        return list(result.scalars().all())
