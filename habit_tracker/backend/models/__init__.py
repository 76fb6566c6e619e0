# Import all models so Base.metadata knows every table
from habit_tracker.backend.models.base import Base
from habit_tracker.backend.models.entry import Entry
from habit_tracker.backend.models.habit import Frequency, Habit
from habit_tracker.backend.models.notification import Notification, NotificationType
from habit_tracker.backend.models.system_settings import SystemSettings
from habit_tracker.backend.models.user import User

__all__ = [
    "Base",
    "Entry",
    "Frequency",
    "Habit",
    "Notification",
    "NotificationType",
    "SystemSettings",
    "User",
]
