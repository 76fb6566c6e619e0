"""
Telegram Channel.

Owns the running bot: starts it (long polling task or webhook
registration), stops it, and restarts it when an administrator saves a
new token. `transport` always points at the bot that is currently
running, or at a NullTransport while there is none.
"""

import asyncio
from contextlib import suppress
from typing import TYPE_CHECKING

from habit_tracker.backend.core.config_schema import TelegramAppSchema
from habit_tracker.backend.core.logging import get_logger, log_with_source
from habit_tracker.backend.notifications.transport import MessageTransport, NullTransport
from habit_tracker.backend.storage.provider import StorageProvider
from habit_tracker.telegram.bot import cleanup_bot, create_bot, create_dispatcher, setup_webhook
from habit_tracker.telegram.services.notifications import TelegramTransport

if TYPE_CHECKING:
    from aiogram import Bot, Dispatcher

logger = get_logger(__name__)


class TelegramChannel:
    """Start/stop/restart wrapper around one aiogram bot."""

    def __init__(
        self,
        provider: StorageProvider,
        config: TelegramAppSchema,
        webhook_secret: str | None = None,
    ) -> None:
        self.provider = provider
        self.config = config
        self.webhook_secret = webhook_secret
        self.bot: "Bot | None" = None
        self.dispatcher: "Dispatcher | None" = None
        self._transport: MessageTransport = NullTransport()
        self._polling_task: asyncio.Task | None = None

    @property
    def transport(self) -> MessageTransport:
        return self._transport

    @property
    def running(self) -> bool:
        return self.bot is not None

    @property
    def webhook_url(self) -> str:
        return f"{self.config.webhook_base_url.rstrip('/')}{self.config.webhook_path}"

    async def start(self, token: str | None) -> None:
        """Start the bot; without a token (or when disabled) stay idle."""
        if not self.config.enabled or not token:
            log_with_source(
                logger,
                "telegram",
                "info",
                "Telegram bot not started",
                enabled=self.config.enabled,
                token_configured=bool(token),
            )
            self._transport = NullTransport()
            return

        bot = create_bot(token)
        dp = create_dispatcher(self.provider)

        if self.config.mode == "webhook":
            await setup_webhook(
                bot,
                dp,
                self.webhook_url,
                self.webhook_secret,
                drop_pending_updates=self.config.drop_pending_updates,
            )
        else:
            if self.config.drop_pending_updates:
                await bot.delete_webhook(drop_pending_updates=True)
            self._polling_task = asyncio.create_task(
                dp.start_polling(bot, handle_signals=False, close_bot_session=False),
                name="telegram-polling",
            )

        self.bot = bot
        self.dispatcher = dp
        self._transport = TelegramTransport(bot)
        log_with_source(logger, "telegram", "info", "Telegram bot started", mode=self.config.mode)

    async def stop(self) -> None:
        """Stop polling (or remove the webhook) and close the bot session."""
        if self._polling_task is not None:
            self._polling_task.cancel()
            with suppress(asyncio.CancelledError):
                await self._polling_task
            self._polling_task = None

        if self.bot is not None:
            await cleanup_bot(self.bot, delete_webhook=self.config.mode == "webhook")
            log_with_source(logger, "telegram", "info", "Telegram bot stopped")

        self.bot = None
        self.dispatcher = None
        self._transport = NullTransport()

    async def restart(self, token: str | None) -> None:
        """Replace the running bot with one using `token`."""
        await self.stop()
        await self.start(token)
