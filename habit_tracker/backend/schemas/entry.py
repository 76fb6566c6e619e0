"""
Entry Schemas.
"""

from datetime import date, datetime

from pydantic import Field

from habit_tracker.backend.schemas.base import CamelModel


class EntryCreate(CamelModel):
    """Log a completion for a habit."""

    habit_id: int = Field(..., ge=1)
    completed: bool = True
    note: str | None = Field(default=None, max_length=2000)
    completed_at: datetime | None = Field(
        default=None,
        description="When the habit was completed (UTC); defaults to now",
    )


class EntryToggle(CamelModel):
    """Flip the completion of a habit on one calendar day."""

    habit_id: int = Field(..., ge=1)
    date: date


class EntryResponse(CamelModel):
    id: int
    habit_id: int
    user_id: int
    completed: bool
    note: str | None
    completed_at: datetime


class ToggleResponse(CamelModel):
    """Outcome of a toggle: the created entry, or the one that was removed."""

    created: bool
    entry: EntryResponse
