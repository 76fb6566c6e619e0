"""
User Repository.

Data access layer for users.
"""

from sqlalchemy import select

from habit_tracker.backend.models.user import User
from habit_tracker.backend.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User model."""

    model = User

    async def get_by_username(self, username: str) -> User | None:
        """Get a user by exact username."""
        result = await self.session.execute(
            select(User).where(User.username == username)
        )
        return result.scalar_one_or_none()

    async def get_by_telegram_id(self, telegram_id: str) -> User | None:
        """Get the user linked to a Telegram chat, if any."""
        result = await self.session.execute(
            select(User).where(User.telegram_id == telegram_id)
        )
        return result.scalars().first()
