"""
Habit Model.

A recurring goal owned by exactly one user.
"""

from enum import Enum

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from habit_tracker.backend.models.base import Base, CreatedAtMixin, IntIdMixin


class Frequency(str, Enum):
    """How often a habit's target count resets."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class Habit(IntIdMixin, CreatedAtMixin, Base):
    """
    Habit database model.

    `target_count` completions are expected per `frequency` period.
    `reminder_time` is an "HH:MM" string in UTC, only meaningful when
    `reminder` is set.
    """

    __tablename__ = "habits"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    frequency: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
    )
    target_count: Mapped[int] = mapped_column(
        default=1,
        nullable=False,
    )
    reminder: Mapped[bool] = mapped_column(
        default=False,
        nullable=False,
    )
    reminder_time: Mapped[str | None] = mapped_column(
        String(5),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Habit(id={self.id}, user_id={self.user_id}, name={self.name!r})>"
