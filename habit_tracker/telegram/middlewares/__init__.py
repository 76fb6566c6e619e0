"""
Telegram Bot Middlewares.

aiogram v3 middleware scopes:
- Outer middleware: Runs on every update (logging)
- Inner middleware: Runs after filters pass (storage for the matched handler)
"""

from typing import TYPE_CHECKING

from habit_tracker.backend.storage.provider import StorageProvider
from habit_tracker.telegram.middlewares.logging import LoggingMiddleware
from habit_tracker.telegram.middlewares.storage import StorageMiddleware

if TYPE_CHECKING:
    from aiogram import Dispatcher

__all__ = [
    "LoggingMiddleware",
    "StorageMiddleware",
    "setup_middlewares",
]


def setup_middlewares(dp: "Dispatcher", provider: StorageProvider) -> None:
    """
    Setup all middlewares on the dispatcher.

    Middleware order matters:
    1. LoggingMiddleware (outer) - Log all updates
    2. StorageMiddleware (inner) - One unit of work per handled message
    """
    dp.update.outer_middleware(LoggingMiddleware())
    dp.message.middleware(StorageMiddleware(provider))
