"""
Settings Service.

Reads and updates the SystemSettings singleton. A successful update
re-arms the notification dispatcher with the new interval and enable
flag, and restarts the Telegram bot when its token changed.
"""

from habit_tracker.backend.core.config import get_app_config
from habit_tracker.backend.core.exceptions import ValidationError
from habit_tracker.backend.models import SystemSettings
from habit_tracker.backend.notifications.runtime import NotificationRuntime
from habit_tracker.backend.schemas.settings import SettingsUpdate
from habit_tracker.backend.services.base import BaseService
from habit_tracker.backend.storage.base import Storage


class SettingsService(BaseService):
    """System settings with dispatcher reconfiguration."""

    def __init__(
        self,
        storage: Storage,
        runtime: NotificationRuntime | None = None,
        min_interval_seconds: int | None = None,
    ) -> None:
        super().__init__(storage)
        self.runtime = runtime
        if min_interval_seconds is None:
            min_interval_seconds = get_app_config().notifications.dispatcher.min_interval_seconds
        self.min_interval_seconds = min_interval_seconds

    async def get_settings(self) -> SystemSettings:
        return await self.storage.get_system_settings()

    def validate(self, data: SettingsUpdate) -> None:
        """
        Raises:
            ValidationError: Interval below the minimum
        """
        interval = data.notification_interval
        if interval is not None and interval < self.min_interval_seconds:
            raise ValidationError(
                f"Notification interval must be at least {self.min_interval_seconds} seconds",
                details={"notificationInterval": interval, "minimum": self.min_interval_seconds},
            )

    async def update_settings(self, data: SettingsUpdate) -> SystemSettings:
        """
        Validate, persist, then re-arm the dispatcher.

        Nothing is written when validation fails. Omitted or null fields
        keep their current value.
        """
        self.validate(data)

        previous_token = (await self.storage.get_system_settings()).telegram_bot_token
        settings = await self._execute_db_operation(
            "update_settings",
            self.storage.update_system_settings(**data.model_dump(exclude_none=True)),
        )
        token_changed = (
            data.telegram_bot_token is not None
            and data.telegram_bot_token != previous_token
        )
        self._log_operation(
            "System settings updated",
            enable_notifications=settings.enable_notifications,
            notification_interval=settings.notification_interval,
            token_changed=token_changed,
        )

        if self.runtime is not None:
            state = await self.runtime.apply_settings(settings, token_changed=token_changed)
            self._log_debug("Dispatcher reconfigured", state=state.value)
        return settings
