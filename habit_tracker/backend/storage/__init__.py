"""
Storage Package.

Backend-agnostic persistence contract used by services, the notification
pipeline, and the Telegram linking flow.

    Storage           - abstract async contract
    DatabaseStorage   - SQLAlchemy backend (one AsyncSession per unit of work)
    MemoryStorage     - in-process dict backend
    StorageProvider   - hands out a Storage per unit of work

Usage:
    provider = get_storage_provider()
    async with provider.session() as storage:
        user = await storage.get_user(1)
"""

from habit_tracker.backend.storage.base import Storage, SystemStats
from habit_tracker.backend.storage.database import DatabaseStorage
from habit_tracker.backend.storage.memory import MemoryStorage
from habit_tracker.backend.storage.provider import (
    DatabaseStorageProvider,
    MemoryStorageProvider,
    StorageProvider,
    create_storage_provider,
    get_storage_provider,
    set_storage_provider,
)

__all__ = [
    "DatabaseStorage",
    "DatabaseStorageProvider",
    "MemoryStorage",
    "MemoryStorageProvider",
    "Storage",
    "StorageProvider",
    "SystemStats",
    "create_storage_provider",
    "get_storage_provider",
    "set_storage_provider",
]
