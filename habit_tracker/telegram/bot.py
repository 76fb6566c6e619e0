"""
Bot and Dispatcher Configuration.

Creates and configures the aiogram Bot and Dispatcher instances.
aiogram is imported lazily so the backend can run without a bot configured.
"""

from typing import TYPE_CHECKING

from habit_tracker.backend.core.logging import get_logger
from habit_tracker.backend.storage.provider import StorageProvider

logger = get_logger(__name__)

if TYPE_CHECKING:
    from aiogram import Bot, Dispatcher


def create_bot(token: str) -> "Bot":
    """
    Create the aiogram Bot instance.

    Messages are sent as plain text: habit names and command hints
    such as "<username>" must not be parsed as markup.

    Raises:
        RuntimeError: If the token is empty
    """
    from aiogram import Bot

    if not token:
        raise RuntimeError(
            "Telegram bot token not configured. "
            "Save it in the admin settings or set TELEGRAM_BOT_TOKEN in config/.env"
        )

    bot = Bot(token=token)
    logger.info("Telegram bot created")
    return bot


def create_dispatcher(provider: StorageProvider) -> "Dispatcher":
    """
    Create the aiogram Dispatcher with all routers and middlewares.

    Routers are built fresh for every dispatcher, so a restarted bot
    never re-attaches an existing router.
    """
    from aiogram import Dispatcher

    from habit_tracker.telegram.handlers import get_all_routers
    from habit_tracker.telegram.middlewares import setup_middlewares

    dp = Dispatcher()
    setup_middlewares(dp, provider)

    for router in get_all_routers():
        dp.include_router(router)

    logger.info("Telegram dispatcher created with routers and middlewares")
    return dp


async def setup_webhook(
    bot: "Bot",
    dp: "Dispatcher",
    webhook_url: str,
    secret_token: str | None,
    drop_pending_updates: bool = True,
) -> None:
    """Register the webhook URL with Telegram."""
    await bot.set_webhook(
        url=webhook_url,
        secret_token=secret_token or None,
        drop_pending_updates=drop_pending_updates,
        allowed_updates=dp.resolve_used_update_types(),
    )
    logger.info("Webhook configured", extra={"webhook_url": webhook_url})


async def cleanup_bot(bot: "Bot", delete_webhook: bool = False) -> None:
    """Release bot resources on shutdown or token change."""
    if delete_webhook:
        await bot.delete_webhook()
    await bot.session.close()
    logger.info("Bot session closed", extra={"webhook_deleted": delete_webhook})
