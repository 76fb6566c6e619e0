"""
Dispatcher Schemas.

Admin view of the notification dispatcher and of one tick's report.
"""

from datetime import datetime

from habit_tracker.backend.schemas.base import CamelModel


class DispatcherStatusResponse(CamelModel):
    state: str
    enabled: bool
    interval_seconds: float
    next_run_time: datetime | None
    transport: str


class DeliveryResultResponse(CamelModel):
    notification_id: int
    user_id: int
    outcome: str
    error: str | None


class DispatchReportResponse(CamelModel):
    enabled: bool
    overlapped: bool
    delivered: int
    skipped: int
    failed: int
    error: str | None
    started_at: datetime
    finished_at: datetime | None
    results: list[DeliveryResultResponse]
