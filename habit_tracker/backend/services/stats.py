"""
Stats Service.

Per-habit completion statistics and the current-week timeline.
"""

from dataclasses import dataclass
from datetime import date, datetime

from habit_tracker.backend.core.utils import current_week, utc_now
from habit_tracker.backend.models import User
from habit_tracker.backend.notifications.producer import entries_in_period
from habit_tracker.backend.services.base import BaseService
from habit_tracker.backend.services.habit import HabitService


@dataclass(frozen=True)
class HabitStats:
    habit_id: int
    name: str
    target_count: int
    total_entries: int
    period_completions: int
    completion_rate: float


@dataclass(frozen=True)
class HabitWeek:
    habit_id: int
    name: str
    days: list[tuple[date, bool]]


def completion_rate(entry_count: int, target_count: int) -> float:
    """Entries as a percentage of the target, capped at 100."""
    if target_count <= 0:
        return 0.0
    return min(100.0, entry_count / target_count * 100)


class StatsService(BaseService):
    """Read-only statistics over the caller's habits."""

    async def habit_stats(self, user: User, habit_id: int, now: datetime | None = None) -> HabitStats:
        habit = await HabitService(self.storage).get_owned_habit(user, habit_id)
        entries = await self.storage.get_entries(habit.id)
        return HabitStats(
            habit_id=habit.id,
            name=habit.name,
            target_count=habit.target_count,
            total_entries=len(entries),
            period_completions=entries_in_period(habit, entries, now or utc_now()),
            completion_rate=completion_rate(len(entries), habit.target_count),
        )

    async def week_timeline(self, user: User, today: date | None = None) -> tuple[date, list[HabitWeek]]:
        """
        Monday..Sunday of the current week with a completion flag per
        habit and day.
        """
        week = current_week(today or utc_now().date())
        habits = await self.storage.get_user_habits(user.id)
        entries = await self.storage.get_user_entries(user.id)

        done: dict[int, set[date]] = {}
        for entry in entries:
            done.setdefault(entry.habit_id, set()).add(entry.completed_at.date())

        timeline = [
            HabitWeek(
                habit_id=habit.id,
                name=habit.name,
                days=[(day, day in done.get(habit.id, set())) for day in week],
            )
            for habit in habits
        ]
        return week[0], timeline
