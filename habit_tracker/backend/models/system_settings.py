"""
System Settings Model.

Single-row table holding the process-wide settings an administrator tunes.
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from habit_tracker.backend.core.utils import utc_now
from habit_tracker.backend.models.base import Base

SETTINGS_ROW_ID = 1
DEFAULT_NOTIFICATION_INTERVAL = 60
MIN_NOTIFICATION_INTERVAL = 30


class SystemSettings(Base):
    """System settings singleton row."""

    __tablename__ = "system_settings"

    id: Mapped[int] = mapped_column(
        primary_key=True,
        default=SETTINGS_ROW_ID,
    )
    telegram_bot_token: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    enable_notifications: Mapped[bool] = mapped_column(
        default=True,
        nullable=False,
    )
    notification_interval: Mapped[int] = mapped_column(
        default=DEFAULT_NOTIFICATION_INTERVAL,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<SystemSettings(enable_notifications={self.enable_notifications}, "
            f"notification_interval={self.notification_interval})>"
        )
