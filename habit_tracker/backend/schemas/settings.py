"""
System Settings Schemas.

Wire names are camelCase: telegramBotToken, enableNotifications,
notificationInterval.
"""

from datetime import datetime

from pydantic import Field

from habit_tracker.backend.schemas.base import CamelModel


class SettingsResponse(CamelModel):
    telegram_bot_token: str | None
    enable_notifications: bool
    notification_interval: int = Field(description="Dispatcher interval in seconds")
    updated_at: datetime


class SettingsUpdate(CamelModel):
    """
    Partial settings update; omitted or null fields keep their value.

    The interval minimum is checked by the settings service so the
    rejection carries a domain error message.
    """

    telegram_bot_token: str | None = Field(default=None, max_length=255)
    enable_notifications: bool | None = None
    notification_interval: int | None = Field(default=None, examples=[60])
