"""
Dispatcher Scheduling Control.

Owns the single recurring dispatcher job on an APScheduler
AsyncIOScheduler running on the application's event loop.

State machine:
    STOPPED -> ARMED   start()/reconfigure() with notifications enabled
    ARMED   -> ARMED   reconfigure() re-arms with the (possibly new) interval
    ARMED   -> STOPPED reconfigure() with notifications disabled, shutdown()

Re-arming cancels the existing job and schedules a fresh one, so the next
tick happens one new interval after the change. A tick that is already
running is not interrupted, and ticks never overlap (max_instances=1 plus
the dispatcher's own lock).
"""

from collections.abc import Awaitable, Callable
from datetime import datetime
from enum import Enum

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.interval import IntervalTrigger

from habit_tracker.backend.core.logging import get_logger, log_with_source
from habit_tracker.backend.notifications.dispatcher import DispatchSettings, NotificationDispatcher

logger = get_logger(__name__)

DEFAULT_JOB_ID = "notification-dispatcher"


class SchedulerState(str, Enum):
    """Dispatcher timer state."""

    STOPPED = "stopped"
    ARMED = "armed"


class DispatchScheduler:
    """Cancellable repeating dispatcher job."""

    def __init__(
        self,
        dispatcher: NotificationDispatcher,
        job_id: str = DEFAULT_JOB_ID,
        misfire_grace_seconds: int = 30,
        scheduler: AsyncIOScheduler | None = None,
    ) -> None:
        self.dispatcher = dispatcher
        self.job_id = job_id
        self.misfire_grace_seconds = misfire_grace_seconds
        self.scheduler = scheduler or AsyncIOScheduler(timezone="UTC")
        self.state = SchedulerState.STOPPED

    @property
    def settings(self) -> DispatchSettings:
        return self.dispatcher.settings

    @property
    def next_run_time(self) -> datetime | None:
        """When the dispatcher job fires next (timezone-aware), if armed."""
        job = self.scheduler.get_job(self.job_id)
        return job.next_run_time if job is not None else None

    def _ensure_running(self) -> None:
        if not self.scheduler.running:
            self.scheduler.start()

    def _cancel(self) -> None:
        if self.scheduler.get_job(self.job_id) is not None:
            self.scheduler.remove_job(self.job_id)

    async def start(self) -> SchedulerState:
        """Read settings fresh from storage and arm (or stay stopped)."""
        async with self.dispatcher.provider.session() as storage:
            settings = await storage.get_system_settings()
            snapshot = DispatchSettings.from_model(settings)
        return self.reconfigure(snapshot)

    def reconfigure(self, settings: DispatchSettings) -> SchedulerState:
        """Cancel the current job and re-arm it according to `settings`."""
        self._ensure_running()
        self.dispatcher.settings = settings
        self._cancel()

        if not settings.enabled:
            self.state = SchedulerState.STOPPED
            log_with_source(logger, "tasks", "info", "Notification dispatcher stopped")
            return self.state

        self.scheduler.add_job(
            self.dispatcher.tick,
            trigger=IntervalTrigger(seconds=settings.interval_seconds),
            id=self.job_id,
            name="Deliver pending notifications",
            max_instances=1,
            coalesce=True,
            misfire_grace_time=self.misfire_grace_seconds,
            replace_existing=True,
        )
        self.state = SchedulerState.ARMED
        log_with_source(
            logger,
            "tasks",
            "info",
            "Notification dispatcher armed",
            interval_seconds=settings.interval_seconds,
            next_run_time=str(self.next_run_time),
        )
        return self.state

    def add_minutely_job(self, func: Callable[[], Awaitable[object]], job_id: str) -> None:
        """Run `func` at the start of every minute, next to the dispatcher job."""
        self._ensure_running()
        self.scheduler.add_job(
            func,
            trigger=CronTrigger(minute="*", timezone="UTC"),
            id=job_id,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        log_with_source(logger, "tasks", "info", "Minutely job scheduled", job_id=job_id)

    def shutdown(self) -> None:
        """Stop all jobs; running ticks are left to finish."""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
        self.state = SchedulerState.STOPPED
        log_with_source(logger, "tasks", "info", "Notification scheduler shut down")
