"""
Notification Dispatcher.

One tick drains the pending notifications:

    1. If notifications are disabled, do nothing.
    2. Fetch all pending notifications (treated as unordered).
    3. For each one, resolve the owning user. No linked handle -> skipped,
       left pending and retried on every later tick.
    4. Otherwise send through the transport. Success -> mark sent.
       Failure -> left pending, retried next tick (no backoff, no cap).

The user lookup and the sent mark run in two short units of work per
notification and the transport call runs between them, outside any
session. A delivered notification is marked sent even if a later one in
the batch fails.
Nothing raised inside a tick escapes it; the outcome of every item is
collected into a DispatchReport that is logged once per tick.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from habit_tracker.backend.core.exceptions import DeliveryFailure
from habit_tracker.backend.core.logging import get_logger, log_with_source
from habit_tracker.backend.core.utils import utc_now
from habit_tracker.backend.models import Notification, SystemSettings
from habit_tracker.backend.notifications.transport import MessageTransport
from habit_tracker.backend.storage.provider import StorageProvider

logger = get_logger(__name__)


class DeliveryOutcome(str, Enum):
    """What happened to one pending notification during a tick."""

    DELIVERED = "delivered"
    SKIPPED_NO_HANDLE = "skipped_no_handle"
    SKIPPED_RETENTION = "skipped_retention"
    FAILED = "failed"


@dataclass(frozen=True)
class DispatchSettings:
    """Snapshot of the settings the dispatcher runs with."""

    enabled: bool
    interval_seconds: float

    @classmethod
    def from_model(cls, settings: SystemSettings) -> "DispatchSettings":
        return cls(
            enabled=settings.enable_notifications,
            interval_seconds=settings.notification_interval,
        )


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome for a single notification."""

    notification_id: int
    user_id: int
    outcome: DeliveryOutcome
    error: str | None = None


@dataclass
class DispatchReport:
    """Everything that happened during one tick."""

    enabled: bool = True
    overlapped: bool = False
    results: list[DeliveryResult] = field(default_factory=list)
    error: str | None = None
    started_at: datetime = field(default_factory=utc_now)
    finished_at: datetime | None = None

    def _count(self, outcome: DeliveryOutcome) -> int:
        return sum(1 for r in self.results if r.outcome == outcome)

    @property
    def delivered(self) -> int:
        return self._count(DeliveryOutcome.DELIVERED)

    @property
    def skipped(self) -> int:
        return (
            self._count(DeliveryOutcome.SKIPPED_NO_HANDLE)
            + self._count(DeliveryOutcome.SKIPPED_RETENTION)
        )

    @property
    def failed(self) -> int:
        return self._count(DeliveryOutcome.FAILED)

    @property
    def attempted(self) -> int:
        """Number of transport calls made."""
        return self.delivered + self.failed

    def summary(self) -> dict[str, Any]:
        duration_ms = None
        if self.finished_at is not None:
            duration_ms = int((self.finished_at - self.started_at).total_seconds() * 1000)
        return {
            "enabled": self.enabled,
            "overlapped": self.overlapped,
            "pending": len(self.results),
            "delivered": self.delivered,
            "skipped": self.skipped,
            "failed": self.failed,
            "error": self.error,
            "duration_ms": duration_ms,
        }


class RetentionPolicy:
    """
    Hook deciding whether a pending notification is attempted this tick.

    The default attempts everything forever, so notifications for users who
    never link an account accumulate. Subclass to add a TTL or attempt cap;
    skipped notifications stay pending and are never deleted.
    """

    def should_attempt(self, notification: Notification) -> bool:
        return True


class NotificationDispatcher:
    """Delivers pending notifications through a MessageTransport."""

    def __init__(
        self,
        provider: StorageProvider,
        transport: MessageTransport,
        settings: DispatchSettings,
        retention: RetentionPolicy | None = None,
    ) -> None:
        self.provider = provider
        self.transport = transport
        self.settings = settings
        self.retention = retention or RetentionPolicy()
        self._lock = asyncio.Lock()

    async def run_once(self) -> DispatchReport:
        """Run a single tick and return its report. Never raises."""
        if not self.settings.enabled:
            report = DispatchReport(enabled=False, finished_at=utc_now())
            log_with_source(logger, "tasks", "debug", "Notifications disabled, tick skipped")
            return report

        if self._lock.locked():
            report = DispatchReport(overlapped=True, finished_at=utc_now())
            log_with_source(logger, "tasks", "warning", "Previous dispatch tick still running, tick skipped")
            return report

        async with self._lock:
            report = DispatchReport()
            try:
                async with self.provider.session() as storage:
                    pending = await storage.get_pending_notifications()
                for notification in pending:
                    report.results.append(await self._deliver(notification))
            except Exception as e:
                report.error = str(e)
                log_with_source(
                    logger,
                    "tasks",
                    "error",
                    "Dispatch tick failed",
                    error=str(e),
                    error_type=type(e).__name__,
                    exc_info=True,
                )
            report.finished_at = utc_now()

        self._log_report(report)
        return report

    async def tick(self) -> None:
        """Scheduler entry point."""
        await self.run_once()

    async def _deliver(self, notification: Notification) -> DeliveryResult:
        def result(outcome: DeliveryOutcome, error: str | None = None) -> DeliveryResult:
            return DeliveryResult(notification.id, notification.user_id, outcome, error)

        if not self.retention.should_attempt(notification):
            return result(DeliveryOutcome.SKIPPED_RETENTION)

        try:
            async with self.provider.session() as storage:
                user = await storage.get_user(notification.user_id)
                handle = user.telegram_id if user is not None else None
            if not handle:
                return result(DeliveryOutcome.SKIPPED_NO_HANDLE)

            # No storage session is held while the transport call is in flight
            try:
                delivered = await self.transport.send_notification(handle, notification.message)
            except Exception as e:
                raise DeliveryFailure(f"Transport error: {e}") from e
            if not delivered:
                raise DeliveryFailure("Transport reported failure")

            async with self.provider.session() as storage:
                await storage.mark_notification_sent(notification.id)
            return result(DeliveryOutcome.DELIVERED)

        except DeliveryFailure as e:
            return result(DeliveryOutcome.FAILED, e.message)
        except Exception as e:
            log_with_source(
                logger,
                "tasks",
                "warning",
                "Unexpected error while delivering notification",
                notification_id=notification.id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return result(DeliveryOutcome.FAILED, str(e))

    def _log_report(self, report: DispatchReport) -> None:
        fields = report.summary()
        if report.failed:
            fields["failures"] = [
                {"notification_id": r.notification_id, "error": r.error}
                for r in report.results
                if r.outcome == DeliveryOutcome.FAILED
            ]
        level = "info" if report.results else "debug"
        if report.error or report.failed:
            level = "warning"
        log_with_source(logger, "tasks", level, "Dispatch tick finished", **fields)
