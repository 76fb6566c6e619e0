"""
Habit Service.

CRUD over the caller's own habits. A habit owned by someone else is
reported as missing, never as forbidden.
"""

from habit_tracker.backend.core.exceptions import NotFoundError
from habit_tracker.backend.models import Habit, User
from habit_tracker.backend.schemas.habit import HabitCreate, HabitUpdate
from habit_tracker.backend.services.base import BaseService


# Fields a client may clear by sending null
CLEARABLE_FIELDS = frozenset({"description", "reminder_time"})


class HabitService(BaseService):
    """Service for habit business logic."""

    async def get_owned_habit(self, user: User, habit_id: int) -> Habit:
        """
        Raises:
            NotFoundError: Habit absent or owned by another user
        """
        habit = await self.storage.get_habit(habit_id)
        if habit is None or habit.user_id != user.id:
            raise NotFoundError("Habit not found")
        return habit

    async def list_habits(self, user: User) -> list[Habit]:
        return await self.storage.get_user_habits(user.id)

    async def create_habit(self, user: User, data: HabitCreate) -> Habit:
        self._log_operation("Creating habit", user_id=user.id, name=data.name)
        values = data.model_dump()
        values["frequency"] = data.frequency.value
        habit = await self._execute_db_operation(
            "create_habit",
            self.storage.create_habit(user_id=user.id, **values),
        )
        self._log_debug("Habit created", habit_id=habit.id)
        return habit

    async def update_habit(self, user: User, habit_id: int, data: HabitUpdate) -> Habit:
        """Update only the fields present in the request."""
        habit = await self.get_owned_habit(user, habit_id)
        changes = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key in CLEARABLE_FIELDS
        }
        if not changes:
            return habit

        if data.frequency is not None:
            changes["frequency"] = data.frequency.value

        self._log_operation("Updating habit", habit_id=habit_id, fields=list(changes))
        return await self._execute_db_operation(
            "update_habit",
            self.storage.update_habit(habit_id, **changes),
        )

    async def delete_habit(self, user: User, habit_id: int) -> None:
        """Delete a habit. Its entries are kept."""
        await self.get_owned_habit(user, habit_id)
        self._log_operation("Deleting habit", habit_id=habit_id)
        await self._execute_db_operation("delete_habit", self.storage.delete_habit(habit_id))
