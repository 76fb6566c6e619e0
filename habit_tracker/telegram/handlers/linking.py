"""
Account Linking Handlers.

/start explains how to link; /connect <username> stores the chat id as the
user's telegram handle so the dispatcher can deliver notifications to it.
"""

from aiogram import Router
from aiogram.filters import Command, CommandObject, CommandStart
from aiogram.types import Message

from habit_tracker.backend.core.logging import get_logger, log_with_source
from habit_tracker.backend.storage.base import Storage

logger = get_logger(__name__)

WELCOME_TEXT = "Welcome to HabitTracker! Please use /connect <username> to link your account."
CONNECT_USAGE_TEXT = "Usage: /connect <username>"
USER_NOT_FOUND_TEXT = "User not found."
CONNECTED_TEXT = "Successfully connected! You will now receive habit reminders here."


async def cmd_start(message: Message) -> None:
    """Handle /start command."""
    await message.answer(WELCOME_TEXT)


async def cmd_connect(message: Message, command: CommandObject, storage: Storage) -> None:
    """
    Handle /connect <username>.

    Linking is by username only; relinking another chat replaces the
    previous handle. A chat belongs to one account at a time, so linking it
    to a new account unlinks the account that held it.
    """
    username = (command.args or "").strip()
    if not username:
        await message.answer(CONNECT_USAGE_TEXT)
        return

    user = await storage.get_user_by_username(username)
    if user is None:
        log_with_source(logger, "telegram", "info", "Connect for unknown username", username=username)
        await message.answer(USER_NOT_FOUND_TEXT)
        return

    chat_id = str(message.chat.id)
    previous = await storage.get_user_by_telegram_id(chat_id)
    if previous is not None and previous.id != user.id:
        await storage.update_user(previous.id, telegram_id=None)
        log_with_source(
            logger,
            "telegram",
            "info",
            "Telegram chat moved to another account",
            previous_user_id=previous.id,
            chat_id=chat_id,
        )

    await storage.update_user(user.id, telegram_id=chat_id)
    log_with_source(
        logger,
        "telegram",
        "info",
        "Telegram chat linked",
        user_id=user.id,
        chat_id=chat_id,
    )
    await message.answer(CONNECTED_TEXT)


def create_router() -> Router:
    router = Router(name="linking")
    router.message.register(cmd_start, CommandStart())
    router.message.register(cmd_connect, Command("connect"))
    return router
