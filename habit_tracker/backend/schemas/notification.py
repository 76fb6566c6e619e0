"""
Notification Schemas.
"""

from datetime import datetime

from habit_tracker.backend.schemas.base import CamelModel


class NotificationResponse(CamelModel):
    id: int
    user_id: int
    habit_id: int
    type: str
    message: str
    sent: bool
    created_at: datetime
