"""
Logging Middleware.

Logs every incoming Telegram update with structured context
(source="telegram"). Message text other than the command itself is not
logged.
"""

import time
from typing import Any, Awaitable, Callable

from aiogram import BaseMiddleware
from aiogram.types import TelegramObject, Update

from habit_tracker.backend.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


class LoggingMiddleware(BaseMiddleware):
    """
    Middleware for logging all Telegram updates.

    Usage:
        dp.update.outer_middleware(LoggingMiddleware())
    """

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        start_time = time.perf_counter()
        context = extract_context(event)

        log_with_source(logger, "telegram", "info", "Telegram update received", **context)

        try:
            result = await handler(event, data)
        except Exception as e:
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            log_with_source(
                logger,
                "telegram",
                "error",
                "Telegram update processing error",
                error=str(e),
                error_type=type(e).__name__,
                elapsed_ms=round(elapsed_ms, 2),
                **context,
            )
            raise

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        log_with_source(
            logger,
            "telegram",
            "debug",
            "Telegram update processed",
            elapsed_ms=round(elapsed_ms, 2),
            **context,
        )
        return result


def extract_context(event: TelegramObject) -> dict[str, Any]:
    """Logging fields for an update: ids, chat type and command name."""
    context: dict[str, Any] = {}

    if not isinstance(event, Update):
        return context

    context["update_id"] = event.update_id
    context["update_type"] = event.event_type

    if event.message:
        msg = event.message
        context["chat_id"] = msg.chat.id
        context["chat_type"] = msg.chat.type
        if msg.from_user:
            context["telegram_user_id"] = msg.from_user.id
        if msg.text and msg.text.startswith("/"):
            context["command"] = msg.text.split()[0]

    return context
