"""
Habit Schemas.

Pydantic schemas for habit API request/response validation.
"""

from datetime import datetime

from pydantic import Field

from habit_tracker.backend.models.habit import Frequency
from habit_tracker.backend.schemas.base import CamelModel

REMINDER_TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class HabitCreate(CamelModel):
    """Schema for creating a new habit."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Habit name",
        examples=["Drink water"],
    )
    description: str | None = Field(default=None, max_length=2000)
    frequency: Frequency = Field(default=Frequency.DAILY)
    target_count: int = Field(default=1, ge=1, le=1000, description="Completions expected per period")
    reminder: bool = False
    reminder_time: str | None = Field(
        default=None,
        pattern=REMINDER_TIME_PATTERN,
        description="HH:MM in UTC",
        examples=["08:30"],
    )


class HabitUpdate(CamelModel):
    """Schema for updating a habit. Only provided fields change."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=2000)
    frequency: Frequency | None = None
    target_count: int | None = Field(default=None, ge=1, le=1000)
    reminder: bool | None = None
    reminder_time: str | None = Field(default=None, pattern=REMINDER_TIME_PATTERN)


class HabitResponse(CamelModel):
    """Schema for a habit in API responses."""

    id: int
    user_id: int
    name: str
    description: str | None
    frequency: str
    target_count: int
    reminder: bool
    reminder_time: str | None
    created_at: datetime
