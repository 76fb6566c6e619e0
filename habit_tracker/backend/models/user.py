"""
User Model.

Registered account. `telegram_id` is the external handle used by the
notification dispatcher; it stays NULL until the user links their chat.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from habit_tracker.backend.models.base import Base, IntIdMixin


class User(IntIdMixin, Base):
    """User database model."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        String(64),
        unique=True,
        nullable=False,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    is_admin: Mapped[bool] = mapped_column(
        default=False,
        nullable=False,
    )
    telegram_id: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username!r})>"
