"""
Notification Runtime.

Wires storage, the messaging channel, the dispatcher and its scheduler for
the application lifespan. The admin settings handler calls
`apply_settings()` after persisting new settings.
"""

from collections.abc import Awaitable, Callable

from habit_tracker.backend.core.config import get_settings
from habit_tracker.backend.core.config_schema import NotificationsSchema
from habit_tracker.backend.core.logging import get_logger
from habit_tracker.backend.models import SystemSettings
from habit_tracker.backend.notifications.dispatcher import (
    DispatchReport,
    DispatchSettings,
    NotificationDispatcher,
)
from habit_tracker.backend.notifications.reminders import ReminderJob
from habit_tracker.backend.notifications.scheduler import DispatchScheduler, SchedulerState
from habit_tracker.backend.notifications.transport import NullTransport, TransportChannel
from habit_tracker.backend.storage.provider import StorageProvider

logger = get_logger(__name__)


def resolve_bot_token(settings: SystemSettings) -> str | None:
    """Token saved by an administrator wins over the one in config/.env."""
    return settings.telegram_bot_token or get_settings().telegram_bot_token or None


class NotificationRuntime:
    """Lifecycle owner of the notification pipeline."""

    def __init__(
        self,
        provider: StorageProvider,
        scheduler: DispatchScheduler,
        channel: TransportChannel | None = None,
        reminders: ReminderJob | None = None,
        reminders_job_id: str = "habit-reminders",
    ) -> None:
        self.provider = provider
        self.scheduler = scheduler
        self.channel = channel
        self.reminders = reminders
        self.reminders_job_id = reminders_job_id

    @classmethod
    def build(
        cls,
        provider: StorageProvider,
        config: NotificationsSchema,
        channel: TransportChannel | None = None,
    ) -> "NotificationRuntime":
        dispatcher = NotificationDispatcher(
            provider,
            NullTransport(),
            DispatchSettings(
                enabled=config.dispatcher.default_enabled,
                interval_seconds=config.dispatcher.default_interval_seconds,
            ),
        )
        scheduler = DispatchScheduler(
            dispatcher,
            job_id=config.dispatcher.job_id,
            misfire_grace_seconds=config.dispatcher.misfire_grace_seconds,
        )
        reminders = ReminderJob(provider) if config.reminders.enabled else None
        return cls(provider, scheduler, channel, reminders, config.reminders.job_id)

    @property
    def dispatcher(self) -> NotificationDispatcher:
        return self.scheduler.dispatcher

    @property
    def state(self) -> SchedulerState:
        return self.scheduler.state

    async def start(self) -> None:
        """Start the channel, arm the dispatcher and the reminder job."""
        if self.channel is not None:
            async with self.provider.session() as storage:
                settings = await storage.get_system_settings()
                token = resolve_bot_token(settings)
            await self._run_channel(self.channel.start, token)

        await self.scheduler.start()

        if self.reminders is not None:
            self.scheduler.add_minutely_job(self.reminders.run, self.reminders_job_id)

        logger.info("Notification runtime started", extra={"state": self.state.value})

    async def apply_settings(self, settings: SystemSettings, token_changed: bool = False) -> SchedulerState:
        """Re-arm the dispatcher (and restart the channel) after a settings update."""
        if token_changed and self.channel is not None:
            await self._run_channel(self.channel.restart, resolve_bot_token(settings))
        return self.scheduler.reconfigure(DispatchSettings.from_model(settings))

    async def _run_channel(self, action: Callable[[str | None], Awaitable[None]], token: str | None) -> None:
        """Start or restart the channel, then point the dispatcher at its transport."""
        try:
            await action(token)
        except Exception as e:
            # Delivery waits for a working token; the rest of the app keeps running
            logger.error(
                "Telegram bot start failed",
                extra={"error": str(e), "error_type": type(e).__name__},
                exc_info=True,
            )
        self.dispatcher.transport = self.channel.transport

    async def run_now(self) -> DispatchReport:
        """Run one dispatcher tick immediately."""
        return await self.dispatcher.run_once()

    async def shutdown(self) -> None:
        self.scheduler.shutdown()
        if self.channel is not None:
            await self.channel.stop()
        logger.info("Notification runtime stopped")
