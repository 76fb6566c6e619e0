"""
Storage Providers.

A provider hands out one Storage per unit of work (an HTTP request, a
dispatcher tick, a Telegram update). For the database backend that is one
AsyncSession committed on success and rolled back on error; the memory
backend always hands out the same instance.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from habit_tracker.backend.core.logging import get_logger
from habit_tracker.backend.storage.base import Storage
from habit_tracker.backend.storage.database import DatabaseStorage
from habit_tracker.backend.storage.memory import MemoryStorage

logger = get_logger(__name__)


class StorageProvider(ABC):
    """Factory of Storage instances scoped to a unit of work."""

    @abstractmethod
    def session(self) -> Any:
        """Async context manager yielding a Storage."""

    async def close(self) -> None:
        """Release backend resources on shutdown."""


class MemoryStorageProvider(StorageProvider):
    """Provider wrapping a single shared MemoryStorage."""

    def __init__(self, storage: MemoryStorage) -> None:
        self.storage = storage

    @asynccontextmanager
    async def session(self) -> AsyncIterator[Storage]:
        yield self.storage


class DatabaseStorageProvider(StorageProvider):
    """Provider opening one AsyncSession per unit of work."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        settings_defaults: dict[str, Any],
    ) -> None:
        self._session_factory = session_factory
        self._settings_defaults = settings_defaults

    @asynccontextmanager
    async def session(self) -> AsyncIterator[Storage]:
        async with self._session_factory() as session:
            try:
                yield DatabaseStorage(session, self._settings_defaults)
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def close(self) -> None:
        from habit_tracker.backend.core.database import dispose_engine

        await dispose_engine()


def settings_defaults_from_config() -> dict[str, Any]:
    """Initial SystemSettings values taken from notifications.yaml."""
    from habit_tracker.backend.core.config import get_app_config

    dispatcher = get_app_config().notifications.dispatcher
    return {
        "enable_notifications": dispatcher.default_enabled,
        "notification_interval": dispatcher.default_interval_seconds,
    }


def create_storage_provider() -> StorageProvider:
    """Build the provider selected by `database.yaml: storage_backend`."""
    from habit_tracker.backend.core.config import get_app_config

    backend = get_app_config().database.storage_backend
    defaults = settings_defaults_from_config()

    if backend == "database":
        from habit_tracker.backend.core.database import get_session_factory

        provider: StorageProvider = DatabaseStorageProvider(get_session_factory(), defaults)
    else:
        provider = MemoryStorageProvider(MemoryStorage(defaults))

    logger.info("Storage provider created", extra={"backend": backend})
    return provider


_provider: StorageProvider | None = None


def get_storage_provider() -> StorageProvider:
    """Get the process-wide storage provider, creating it on first use."""
    global _provider
    if _provider is None:
        _provider = create_storage_provider()
    return _provider


def set_storage_provider(provider: StorageProvider | None) -> None:
    """Replace the process-wide provider (application startup and tests)."""
    global _provider
    _provider = provider
