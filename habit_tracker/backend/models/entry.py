"""
Entry Model.

A single completion record for a habit. `user_id` duplicates the owning
habit's user for query convenience; the entry service keeps them equal.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from habit_tracker.backend.core.utils import utc_now
from habit_tracker.backend.models.base import Base, IntIdMixin


class Entry(IntIdMixin, Base):
    """Entry database model."""

    __tablename__ = "entries"

    # No foreign key: habits can be deleted without cascading to entries.
    habit_id: Mapped[int] = mapped_column(
        nullable=False,
        index=True,
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    completed: Mapped[bool] = mapped_column(
        default=False,
        nullable=False,
    )
    note: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    completed_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=utc_now,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Entry(id={self.id}, habit_id={self.habit_id}, completed_at={self.completed_at})>"
