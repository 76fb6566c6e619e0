"""
Statistics Schemas.
"""

from datetime import date

from habit_tracker.backend.schemas.base import CamelModel


class SystemStatsResponse(CamelModel):
    total_users: int
    total_habits: int
    total_entries: int
    pending_notifications: int


class HabitStatsResponse(CamelModel):
    habit_id: int
    name: str
    target_count: int
    total_entries: int
    period_completions: int
    completion_rate: float


class TimelineDay(CamelModel):
    date: date
    completed: bool


class HabitTimeline(CamelModel):
    habit_id: int
    name: str
    days: list[TimelineDay]


class TimelineResponse(CamelModel):
    """Completion grid for the current week, Monday to Sunday."""

    week_start: date
    habits: list[HabitTimeline]
