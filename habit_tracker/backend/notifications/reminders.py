"""
Habit Reminder Job.

Runs every minute and queues a reminder notification for each habit whose
`reminder_time` ("HH:MM", UTC) matches the current minute. Delivery is left
to the dispatcher.
"""

from collections.abc import Callable
from datetime import datetime

from habit_tracker.backend.core.logging import get_logger, log_with_source
from habit_tracker.backend.core.utils import utc_now
from habit_tracker.backend.notifications.producer import NotificationProducer
from habit_tracker.backend.storage.provider import StorageProvider

logger = get_logger(__name__)


class ReminderJob:
    """Queues due habit reminders."""

    def __init__(
        self,
        provider: StorageProvider,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.provider = provider
        self._clock = clock

    async def run(self) -> int:
        """Queue reminders due this minute. Returns how many were queued."""
        reminder_time = self._clock().strftime("%H:%M")
        try:
            async with self.provider.session() as storage:
                habits = await storage.get_habits_with_reminder_at(reminder_time)
                producer = NotificationProducer(storage)
                for habit in habits:
                    await producer.notify_reminder(habit)
        except Exception as e:
            log_with_source(
                logger,
                "tasks",
                "error",
                "Reminder job failed",
                reminder_time=reminder_time,
                error=str(e),
                exc_info=True,
            )
            return 0

        if habits:
            log_with_source(
                logger,
                "tasks",
                "info",
                "Habit reminders queued",
                reminder_time=reminder_time,
                count=len(habits),
            )
        return len(habits)
