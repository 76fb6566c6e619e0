"""
Admin API Endpoints.

User roles, system statistics, the notification log, system settings and
the notification dispatcher. Every route requires an administrator.
"""

from fastapi import APIRouter

from habit_tracker.backend.core.dependencies import AdminUser, RuntimeDep, StorageDep
from habit_tracker.backend.core.exceptions import ServiceUnavailableError
from habit_tracker.backend.notifications.dispatcher import DispatchReport
from habit_tracker.backend.notifications.runtime import NotificationRuntime
from habit_tracker.backend.schemas.base import ApiResponse
from habit_tracker.backend.schemas.dispatcher import (
    DeliveryResultResponse,
    DispatcherStatusResponse,
    DispatchReportResponse,
)
from habit_tracker.backend.schemas.notification import NotificationResponse
from habit_tracker.backend.schemas.settings import SettingsResponse, SettingsUpdate
from habit_tracker.backend.schemas.stats import SystemStatsResponse
from habit_tracker.backend.schemas.user import AdminUserUpdate, UserResponse
from habit_tracker.backend.services.admin import AdminService
from habit_tracker.backend.services.settings import SettingsService

router = APIRouter()


@router.get(
    "/users",
    response_model=ApiResponse[list[UserResponse]],
    summary="List all users",
)
async def list_users(admin: AdminUser, storage: StorageDep) -> ApiResponse[list[UserResponse]]:
    users = await AdminService(storage).list_users()
    return ApiResponse(data=[UserResponse.model_validate(u) for u in users])


@router.patch(
    "/users/{user_id}",
    response_model=ApiResponse[UserResponse],
    summary="Change a user's role",
    description="Sets the admin flag and queues a role_change notification for the user.",
)
async def update_user_role(
    user_id: int,
    data: AdminUserUpdate,
    admin: AdminUser,
    storage: StorageDep,
) -> ApiResponse[UserResponse]:
    user = await AdminService(storage).set_role(user_id, data.is_admin)
    return ApiResponse(data=UserResponse.model_validate(user))


@router.get(
    "/stats",
    response_model=ApiResponse[SystemStatsResponse],
    summary="System statistics",
)
async def system_stats(admin: AdminUser, storage: StorageDep) -> ApiResponse[SystemStatsResponse]:
    stats = await AdminService(storage).system_stats()
    return ApiResponse(data=SystemStatsResponse.model_validate(stats))


@router.get(
    "/notifications",
    response_model=ApiResponse[list[NotificationResponse]],
    summary="Notification log, newest first",
)
async def list_notifications(
    admin: AdminUser,
    storage: StorageDep,
) -> ApiResponse[list[NotificationResponse]]:
    notifications = await AdminService(storage).list_notifications()
    return ApiResponse(data=[NotificationResponse.model_validate(n) for n in notifications])


@router.get(
    "/settings",
    response_model=ApiResponse[SettingsResponse],
    summary="System settings",
)
async def get_settings(admin: AdminUser, storage: StorageDep) -> ApiResponse[SettingsResponse]:
    settings = await SettingsService(storage).get_settings()
    return ApiResponse(data=SettingsResponse.model_validate(settings))


@router.patch(
    "/settings",
    response_model=ApiResponse[SettingsResponse],
    summary="Update system settings",
    description=(
        "Partial update. The dispatcher is re-armed with the new interval and "
        "enable flag; the Telegram bot restarts when its token changes."
    ),
)
async def update_settings(
    data: SettingsUpdate,
    admin: AdminUser,
    storage: StorageDep,
    runtime: RuntimeDep,
) -> ApiResponse[SettingsResponse]:
    settings = await SettingsService(storage, runtime).update_settings(data)
    return ApiResponse(data=SettingsResponse.model_validate(settings))


def _require_runtime(runtime: NotificationRuntime | None) -> NotificationRuntime:
    if runtime is None:
        raise ServiceUnavailableError("Notification dispatcher is not running")
    return runtime


@router.get(
    "/dispatcher",
    response_model=ApiResponse[DispatcherStatusResponse],
    summary="Dispatcher state",
)
async def dispatcher_status(
    admin: AdminUser,
    runtime: RuntimeDep,
) -> ApiResponse[DispatcherStatusResponse]:
    runtime = _require_runtime(runtime)
    settings = runtime.dispatcher.settings
    return ApiResponse(
        data=DispatcherStatusResponse(
            state=runtime.state.value,
            enabled=settings.enabled,
            interval_seconds=settings.interval_seconds,
            next_run_time=runtime.scheduler.next_run_time,
            transport=type(runtime.dispatcher.transport).__name__,
        )
    )


@router.post(
    "/dispatcher/run",
    response_model=ApiResponse[DispatchReportResponse],
    summary="Run one dispatcher tick now",
)
async def run_dispatcher(
    admin: AdminUser,
    runtime: RuntimeDep,
) -> ApiResponse[DispatchReportResponse]:
    report = await _require_runtime(runtime).run_now()
    return ApiResponse(data=report_response(report))


def report_response(report: DispatchReport) -> DispatchReportResponse:
    return DispatchReportResponse(
        enabled=report.enabled,
        overlapped=report.overlapped,
        delivered=report.delivered,
        skipped=report.skipped,
        failed=report.failed,
        error=report.error,
        started_at=report.started_at,
        finished_at=report.finished_at,
        results=[
            DeliveryResultResponse(
                notification_id=r.notification_id,
                user_id=r.user_id,
                outcome=r.outcome.value,
                error=r.error,
            )
            for r in report.results
        ],
    )
