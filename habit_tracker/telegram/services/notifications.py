"""
Telegram Notification Transport.

MessageTransport implementation that sends plain-text messages through an
aiogram Bot. The handle is the chat id stored by /connect.

Usage:
    transport = TelegramTransport(bot)
    delivered = await transport.send_notification("123456789", "Your role has been changed to user")
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from habit_tracker.backend.core.logging import get_logger, log_with_source
from habit_tracker.backend.core.utils import utc_now

if TYPE_CHECKING:
    from aiogram import Bot

logger = get_logger(__name__)


@dataclass
class SendResult:
    """Result of a single send attempt."""

    success: bool
    chat_id: str
    message_id: int | None = None
    error: str | None = None
    timestamp: datetime = field(default_factory=utc_now)


class TelegramTransport:
    """Sends notification messages to Telegram chats."""

    def __init__(self, bot: "Bot") -> None:
        self.bot = bot

    async def send(self, chat_id: str, text: str) -> SendResult:
        """
        Send a message to a chat.

        Any error is reported in the result, never raised.
        """
        try:
            message = await self.bot.send_message(chat_id=chat_id, text=text)
        except Exception as e:
            log_with_source(
                logger,
                "telegram",
                "warning",
                "Failed to send notification",
                chat_id=chat_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return SendResult(success=False, chat_id=chat_id, error=str(e))

        log_with_source(
            logger,
            "telegram",
            "info",
            "Notification sent",
            chat_id=chat_id,
            message_id=message.message_id,
        )
        return SendResult(success=True, chat_id=chat_id, message_id=message.message_id)

    async def send_notification(self, handle: str, message: str) -> bool:
        result = await self.send(handle, message)
        return result.success
