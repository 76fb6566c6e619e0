"""
Notification Producer.

Translates domain events into pending Notification rows. Every call writes
exactly one row; repeated events produce repeated notifications.
"""

from datetime import datetime, timedelta

from habit_tracker.backend.core.logging import get_logger
from habit_tracker.backend.core.utils import start_of_day
from habit_tracker.backend.models import Entry, Habit, Notification, NotificationType
from habit_tracker.backend.models.habit import Frequency
from habit_tracker.backend.models.notification import SYSTEM_HABIT_ID
from habit_tracker.backend.storage.base import Storage

logger = get_logger(__name__)


def period_start(frequency: str, moment: datetime) -> datetime:
    """Start of the daily/weekly/monthly period containing `moment`."""
    day = start_of_day(moment)
    if frequency == Frequency.WEEKLY.value:
        return day - timedelta(days=day.weekday())
    if frequency == Frequency.MONTHLY.value:
        return day.replace(day=1)
    return day


def entries_in_period(habit: Habit, entries: list[Entry], moment: datetime) -> int:
    """Number of completed entries in the habit's period containing `moment`."""
    start = period_start(habit.frequency, moment)
    return sum(
        1 for e in entries
        if e.completed and period_start(habit.frequency, e.completed_at) == start
    )


class NotificationProducer:
    """Creates notifications through the storage contract."""

    def __init__(self, storage: Storage) -> None:
        self.storage = storage

    async def notify_role_change(self, user_id: int, new_is_admin: bool) -> Notification:
        """Queue a role_change notification after an admin flipped `is_admin`."""
        role = "upgraded to admin" if new_is_admin else "changed to user"
        notification = await self.storage.create_notification(
            user_id=user_id,
            habit_id=SYSTEM_HABIT_ID,
            type=NotificationType.ROLE_CHANGE.value,
            message=f"Your role has been {role}",
            sent=False,
        )
        logger.info(
            "Role change notification queued",
            extra={"user_id": user_id, "is_admin": new_is_admin, "notification_id": notification.id},
        )
        return notification

    async def notify_achievement(self, habit: Habit, completed_count: int) -> Notification:
        """Queue an achievement notification for reaching the habit's target."""
        notification = await self.storage.create_notification(
            user_id=habit.user_id,
            habit_id=habit.id,
            type=NotificationType.ACHIEVEMENT.value,
            message=(
                f"Well done! You completed \"{habit.name}\" "
                f"{completed_count}/{habit.target_count} times this {_period_noun(habit.frequency)}."
            ),
            sent=False,
        )
        logger.info(
            "Achievement notification queued",
            extra={"user_id": habit.user_id, "habit_id": habit.id},
        )
        return notification

    async def notify_reminder(self, habit: Habit) -> Notification:
        """Queue a reminder notification for a habit with reminders on."""
        return await self.storage.create_notification(
            user_id=habit.user_id,
            habit_id=habit.id,
            type=NotificationType.REMINDER.value,
            message=f"Reminder: time for \"{habit.name}\".",
            sent=False,
        )

    async def check_achievement(self, habit: Habit, entry: Entry) -> Notification | None:
        """
        Queue an achievement if `entry` made the period count hit the target.

        Only the entry that reaches the target exactly triggers it, so
        logging beyond the target does not repeat the notification.
        """
        if not entry.completed:
            return None
        entries = await self.storage.get_entries(habit.id)
        completed = entries_in_period(habit, entries, entry.completed_at)
        if completed != habit.target_count:
            return None
        return await self.notify_achievement(habit, completed)


def _period_noun(frequency: str) -> str:
    return {
        Frequency.DAILY.value: "day",
        Frequency.WEEKLY.value: "week",
        Frequency.MONTHLY.value: "month",
    }.get(frequency, "period")
