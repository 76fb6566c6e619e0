"""
Admin Service.

User role management, system statistics and the notification log.
"""

from habit_tracker.backend.core.exceptions import NotFoundError
from habit_tracker.backend.models import Notification, User
from habit_tracker.backend.notifications.producer import NotificationProducer
from habit_tracker.backend.services.base import BaseService
from habit_tracker.backend.storage.base import SystemStats


class AdminService(BaseService):
    """Operations reserved for administrators."""

    async def list_users(self) -> list[User]:
        return await self.storage.get_all_users()

    async def set_role(self, user_id: int, is_admin: bool) -> User:
        """
        Change a user's admin flag and queue a role_change notification.

        The notification is queued on every call, even when the flag does
        not actually change.

        Raises:
            NotFoundError: Unknown user id
        """
        if await self.storage.get_user(user_id) is None:
            raise NotFoundError("User not found")

        user = await self._execute_db_operation(
            "set_role",
            self.storage.update_user(user_id, is_admin=is_admin),
        )
        self._log_operation("User role changed", user_id=user_id, is_admin=is_admin)

        await NotificationProducer(self.storage).notify_role_change(user_id, is_admin)
        return user

    async def system_stats(self) -> SystemStats:
        return await self.storage.get_system_stats()

    async def list_notifications(self) -> list[Notification]:
        """All notifications, newest first."""
        return await self.storage.get_all_notifications()
