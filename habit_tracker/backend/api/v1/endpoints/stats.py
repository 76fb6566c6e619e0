"""
Stats API Endpoints.
"""

from fastapi import APIRouter

from habit_tracker.backend.core.dependencies import CurrentUser, StorageDep
from habit_tracker.backend.schemas.base import ApiResponse
from habit_tracker.backend.schemas.stats import HabitTimeline, TimelineDay, TimelineResponse
from habit_tracker.backend.services.stats import StatsService

router = APIRouter()


@router.get(
    "/timeline",
    response_model=ApiResponse[TimelineResponse],
    summary="This week's completion grid",
)
async def week_timeline(user: CurrentUser, storage: StorageDep) -> ApiResponse[TimelineResponse]:
    week_start, habits = await StatsService(storage).week_timeline(user)
    return ApiResponse(
        data=TimelineResponse(
            week_start=week_start,
            habits=[
                HabitTimeline(
                    habit_id=h.habit_id,
                    name=h.name,
                    days=[TimelineDay(date=day, completed=done) for day, done in h.days],
                )
                for h in habits
            ],
        )
    )
