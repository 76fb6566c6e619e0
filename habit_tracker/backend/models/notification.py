"""
Notification Model.

A message queued for delivery over the messaging transport. `sent` only
ever moves from False to True.
"""

from enum import Enum

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from habit_tracker.backend.models.base import Base, CreatedAtMixin, IntIdMixin

SYSTEM_HABIT_ID = 0
"""habit_id used by notifications that are not about a specific habit."""


class NotificationType(str, Enum):
    """Kinds of notifications the producers create."""

    REMINDER = "reminder"
    ACHIEVEMENT = "achievement"
    ROLE_CHANGE = "role_change"


class Notification(IntIdMixin, CreatedAtMixin, Base):
    """Notification database model."""

    __tablename__ = "notifications"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    habit_id: Mapped[int] = mapped_column(
        default=SYSTEM_HABIT_ID,
        nullable=False,
    )
    type: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
    )
    message: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    sent: Mapped[bool] = mapped_column(
        default=False,
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Notification(id={self.id}, user_id={self.user_id}, type={self.type!r}, sent={self.sent})>"
