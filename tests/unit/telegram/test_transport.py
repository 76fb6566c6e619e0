"""
Unit tests for TelegramTransport.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from habit_tracker.backend.notifications.transport import MessageTransport, NullTransport
from habit_tracker.telegram.services.notifications import TelegramTransport


@pytest.fixture
def mock_bot() -> AsyncMock:
    bot = AsyncMock()
    sent = MagicMock()
    sent.message_id = 777
    bot.send_message = AsyncMock(return_value=sent)
    return bot


class TestTelegramTransport:

    def test_satisfies_transport_contract(self, mock_bot):
        assert isinstance(TelegramTransport(mock_bot), MessageTransport)

    @pytest.mark.asyncio
    async def test_send_success(self, mock_bot):
        result = await TelegramTransport(mock_bot).send("12345", "Hello!")

        assert result.success is True
        assert result.chat_id == "12345"
        assert result.message_id == 777
        mock_bot.send_message.assert_awaited_once_with(chat_id="12345", text="Hello!")

    @pytest.mark.asyncio
    async def test_send_failure_is_reported(self, mock_bot):
        mock_bot.send_message.side_effect = Exception("Forbidden: bot was blocked by the user")

        result = await TelegramTransport(mock_bot).send("12345", "Hello!")

        assert result.success is False
        assert "blocked" in result.error

    @pytest.mark.asyncio
    async def test_send_notification_returns_bool(self, mock_bot):
        transport = TelegramTransport(mock_bot)

        assert await transport.send_notification("12345", "Hi") is True

        mock_bot.send_message.side_effect = TimeoutError()
        assert await transport.send_notification("12345", "Hi") is False


class TestNullTransport:

    @pytest.mark.asyncio
    async def test_never_delivers(self):
        assert await NullTransport().send_notification("12345", "Hi") is False
