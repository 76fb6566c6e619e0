"""
Messaging Transport Contract.

The dispatcher only needs `send_notification(handle, message) -> bool`.
A transport reports failure by returning False; it may also raise, and the
dispatcher treats that as a failure too.
"""

from typing import Protocol, runtime_checkable

from habit_tracker.backend.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


@runtime_checkable
class MessageTransport(Protocol):
    """Anything able to push a text message to an external handle."""

    async def send_notification(self, handle: str, message: str) -> bool:
        ...


class NullTransport:
    """Transport used when no bot token is configured. Never delivers."""

    async def send_notification(self, handle: str, message: str) -> bool:
        log_with_source(
            logger,
            "tasks",
            "debug",
            "No messaging transport configured, delivery skipped",
            handle=handle,
        )
        return False


@runtime_checkable
class TransportChannel(Protocol):
    """
    A messaging channel whose credentials can change at runtime.

    `transport` always reflects the currently running bot.
    """

    @property
    def transport(self) -> MessageTransport:
        ...

    async def start(self, token: str | None) -> None:
        ...

    async def restart(self, token: str | None) -> None:
        ...

    async def stop(self) -> None:
        ...
