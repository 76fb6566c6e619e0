"""
Unit Tests for SettingsService.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from habit_tracker.backend.core.exceptions import ValidationError
from habit_tracker.backend.notifications.scheduler import SchedulerState
from habit_tracker.backend.schemas.settings import SettingsUpdate
from habit_tracker.backend.services.settings import SettingsService


@pytest.fixture
def runtime() -> MagicMock:
    runtime = MagicMock()
    runtime.apply_settings = AsyncMock(return_value=SchedulerState.ARMED)
    return runtime


class TestValidation:

    @pytest.mark.asyncio
    async def test_interval_below_minimum_rejected_without_mutation(self, memory_storage, runtime):
        service = SettingsService(memory_storage, runtime, min_interval_seconds=30)

        with pytest.raises(ValidationError, match="at least 30 seconds"):
            await service.update_settings(
                SettingsUpdate(notificationInterval=10, enableNotifications=False)
            )

        settings = await memory_storage.get_system_settings()
        assert settings.notification_interval == 60
        assert settings.enable_notifications is True
        runtime.apply_settings.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_minimum_itself_is_accepted(self, memory_storage, runtime):
        service = SettingsService(memory_storage, runtime, min_interval_seconds=30)

        settings = await service.update_settings(SettingsUpdate(notificationInterval=30))

        assert settings.notification_interval == 30

    @pytest.mark.asyncio
    async def test_minimum_comes_from_config(self, memory_storage):
        assert SettingsService(memory_storage).min_interval_seconds == 30


class TestUpdate:

    @pytest.mark.asyncio
    async def test_update_reconfigures_runtime(self, memory_storage, runtime):
        service = SettingsService(memory_storage, runtime, min_interval_seconds=30)

        settings = await service.update_settings(SettingsUpdate(notificationInterval=45))

        runtime.apply_settings.assert_awaited_once_with(settings, token_changed=False)

    @pytest.mark.asyncio
    async def test_new_token_flags_change(self, memory_storage, runtime):
        service = SettingsService(memory_storage, runtime, min_interval_seconds=30)

        settings = await service.update_settings(SettingsUpdate(telegramBotToken="123:abc"))

        assert settings.telegram_bot_token == "123:abc"
        runtime.apply_settings.assert_awaited_once_with(settings, token_changed=True)

    @pytest.mark.asyncio
    async def test_same_token_is_not_a_change(self, memory_storage, runtime):
        await memory_storage.update_system_settings(telegram_bot_token="123:abc")
        service = SettingsService(memory_storage, runtime, min_interval_seconds=30)

        settings = await service.update_settings(SettingsUpdate(telegramBotToken="123:abc"))

        runtime.apply_settings.assert_awaited_once_with(settings, token_changed=False)

    @pytest.mark.asyncio
    async def test_omitted_fields_keep_values(self, memory_storage):
        await memory_storage.update_system_settings(notification_interval=90)
        service = SettingsService(memory_storage, min_interval_seconds=30)

        settings = await service.update_settings(SettingsUpdate(enableNotifications=False))

        assert settings.notification_interval == 90
        assert settings.enable_notifications is False
