"""
Unit Test Fixtures.

Unit tests run against MemoryStorage or mocks and never need a server,
a database or a Telegram bot.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from habit_tracker.backend.models import User


@pytest.fixture
def mock_storage() -> AsyncMock:
    """
    Fully mocked Storage for tests that only check calls.

    Usage:
        async def test_linking(mock_storage):
            mock_storage.get_user_by_username.return_value = None
    """
    return AsyncMock()


@pytest.fixture
def mock_settings() -> MagicMock:
    """Secrets object with test values."""
    settings = MagicMock()
    settings.jwt_secret = "test-secret-key"
    settings.db_password = "test_pass"
    settings.telegram_bot_token = ""
    settings.telegram_webhook_secret = ""
    return settings


@pytest.fixture
def mock_message() -> MagicMock:
    """
    aiogram Message double with an awaitable `answer`.

    Usage:
        await cmd_start(mock_message)
        mock_message.answer.assert_awaited_once()
    """
    message = MagicMock()
    message.chat.id = 12345
    message.from_user.id = 12345
    message.text = ""
    message.answer = AsyncMock()
    return message


@pytest.fixture
def other_user() -> User:
    """Detached user that owns nothing in storage."""
    return User(id=999, username="mallory", password_hash="x", is_admin=False, telegram_id=None)
