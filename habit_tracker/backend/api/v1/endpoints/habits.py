"""
Habits API Endpoints.

REST API endpoints for the caller's habits. Habits of other users are
reported as 404.
"""

from fastapi import APIRouter

from habit_tracker.backend.core.dependencies import CurrentUser, StorageDep
from habit_tracker.backend.schemas.base import ApiResponse
from habit_tracker.backend.schemas.habit import HabitCreate, HabitResponse, HabitUpdate
from habit_tracker.backend.schemas.stats import HabitStatsResponse
from habit_tracker.backend.services.habit import HabitService
from habit_tracker.backend.services.stats import StatsService

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[HabitResponse],
    status_code=201,
    summary="Create a habit",
)
async def create_habit(
    data: HabitCreate,
    user: CurrentUser,
    storage: StorageDep,
) -> ApiResponse[HabitResponse]:
    habit = await HabitService(storage).create_habit(user, data)
    return ApiResponse(data=HabitResponse.model_validate(habit))


@router.get(
    "",
    response_model=ApiResponse[list[HabitResponse]],
    summary="List my habits",
)
async def list_habits(user: CurrentUser, storage: StorageDep) -> ApiResponse[list[HabitResponse]]:
    habits = await HabitService(storage).list_habits(user)
    return ApiResponse(data=[HabitResponse.model_validate(h) for h in habits])


@router.patch(
    "/{habit_id}",
    response_model=ApiResponse[HabitResponse],
    summary="Update a habit",
    description="Update one of your habits. Only provided fields are updated.",
)
async def update_habit(
    habit_id: int,
    data: HabitUpdate,
    user: CurrentUser,
    storage: StorageDep,
) -> ApiResponse[HabitResponse]:
    habit = await HabitService(storage).update_habit(user, habit_id, data)
    return ApiResponse(data=HabitResponse.model_validate(habit))


@router.delete(
    "/{habit_id}",
    status_code=204,
    summary="Delete a habit",
)
async def delete_habit(habit_id: int, user: CurrentUser, storage: StorageDep) -> None:
    await HabitService(storage).delete_habit(user, habit_id)


@router.get(
    "/{habit_id}/stats",
    response_model=ApiResponse[HabitStatsResponse],
    summary="Completion statistics for a habit",
)
async def habit_stats(
    habit_id: int,
    user: CurrentUser,
    storage: StorageDep,
) -> ApiResponse[HabitStatsResponse]:
    stats = await StatsService(storage).habit_stats(user, habit_id)
    return ApiResponse(data=HabitStatsResponse.model_validate(stats))
