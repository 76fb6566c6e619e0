"""
Storage Middleware.

Opens one storage unit of work per handled message and passes it to the
handler as the `storage` argument. Changes are committed when the handler
returns and rolled back if it raises.
"""

from typing import Any, Awaitable, Callable

from aiogram import BaseMiddleware
from aiogram.types import TelegramObject

from habit_tracker.backend.storage.provider import StorageProvider


class StorageMiddleware(BaseMiddleware):
    """Injects a Storage into handler data."""

    def __init__(self, provider: StorageProvider) -> None:
        self.provider = provider

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        async with self.provider.session() as storage:
            data["storage"] = storage
            return await handler(event, data)
