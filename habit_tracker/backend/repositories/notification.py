"""
Notification Repository.

Data access layer for queued notifications.
"""

from sqlalchemy import func, select, update

from habit_tracker.backend.models.notification import Notification
from habit_tracker.backend.repositories.base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    """Repository for Notification model."""

    model = Notification

    async def get_pending(self) -> list[Notification]:
        """Get every notification that has not been delivered yet."""
        result = await self.session.execute(
            select(Notification)
            .where(Notification.sent == False)  # noqa: E712
            .order_by(Notification.id)
        )
        return list(result.scalars().all())

    async def get_all_newest_first(self) -> list[Notification]:
        """Get all notifications, most recent first."""
        result = await self.session.execute(
            select(Notification).order_by(Notification.id.desc())
        )
        return list(result.scalars().all())

    async def mark_sent(self, id: int) -> None:
        """
        Flip `sent` to True.

        Matches only unsent rows, so an absent or already-sent id is a no-op.
        """
        await self.session.execute(
            update(Notification)
            .where(Notification.id == id)
            .where(Notification.sent == False)  # noqa: E712
            .values(sent=True)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.flush()

    async def count_pending(self) -> int:
        """Get the number of undelivered notifications."""
        result = await self.session.execute(
            select(func.count())
            .select_from(Notification)
            .where(Notification.sent == False)  # noqa: E712
        )
        return result.scalar_one()
