"""
User Schemas.

The password hash never leaves the backend.
"""

from pydantic import Field

from habit_tracker.backend.schemas.base import CamelModel


class UserResponse(CamelModel):
    """User in API responses."""

    id: int
    username: str
    is_admin: bool
    telegram_id: str | None = Field(default=None, description="Linked Telegram chat id")


class AdminUserUpdate(CamelModel):
    """Role change requested by an administrator."""

    is_admin: bool = Field(description="New admin flag", examples=[True])
