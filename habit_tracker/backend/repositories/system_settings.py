"""
System Settings Repository.

Reads and writes the single settings row, creating it with defaults on
first access.
"""

from typing import Any

from habit_tracker.backend.models.system_settings import SETTINGS_ROW_ID, SystemSettings
from habit_tracker.backend.repositories.base import BaseRepository


class SystemSettingsRepository(BaseRepository[SystemSettings]):
    """Repository for the SystemSettings singleton."""

    model = SystemSettings

    async def get_or_create(self, **defaults: Any) -> SystemSettings:
        """Return the settings row, inserting it with `defaults` if missing."""
        instance = await self.get_by_id_or_none(SETTINGS_ROW_ID)
        if instance is None:
            instance = await self.create(id=SETTINGS_ROW_ID, **defaults)
        return instance

    async def merge(self, defaults: dict[str, Any], **changes: Any) -> SystemSettings:
        """Apply `changes` to the settings row and return it."""
        await self.get_or_create(**defaults)
        return await self.update(SETTINGS_ROW_ID, **changes)
