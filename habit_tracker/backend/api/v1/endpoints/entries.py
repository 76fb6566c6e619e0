"""
Entries API Endpoints.
"""

from fastapi import APIRouter

from habit_tracker.backend.core.dependencies import CurrentUser, StorageDep
from habit_tracker.backend.schemas.base import ApiResponse
from habit_tracker.backend.schemas.entry import (
    EntryCreate,
    EntryResponse,
    EntryToggle,
    ToggleResponse,
)
from habit_tracker.backend.services.entry import EntryService

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[EntryResponse],
    status_code=201,
    summary="Log a completion",
)
async def create_entry(
    data: EntryCreate,
    user: CurrentUser,
    storage: StorageDep,
) -> ApiResponse[EntryResponse]:
    entry = await EntryService(storage).create_entry(user, data)
    return ApiResponse(data=EntryResponse.model_validate(entry))


@router.post(
    "/toggle",
    response_model=ApiResponse[ToggleResponse],
    summary="Toggle a habit's completion for a day",
    description="Removes the day's entry if there is one, otherwise creates it.",
)
async def toggle_entry(
    data: EntryToggle,
    user: CurrentUser,
    storage: StorageDep,
) -> ApiResponse[ToggleResponse]:
    created, entry = await EntryService(storage).toggle(user, data.habit_id, data.date)
    return ApiResponse(
        data=ToggleResponse(created=created, entry=EntryResponse.model_validate(entry))
    )


@router.get(
    "",
    response_model=ApiResponse[list[EntryResponse]],
    summary="List all my entries",
)
async def list_entries(user: CurrentUser, storage: StorageDep) -> ApiResponse[list[EntryResponse]]:
    entries = await EntryService(storage).list_entries(user)
    return ApiResponse(data=[EntryResponse.model_validate(e) for e in entries])


@router.get(
    "/{habit_id}",
    response_model=ApiResponse[list[EntryResponse]],
    summary="List entries of one habit",
)
async def list_habit_entries(
    habit_id: int,
    user: CurrentUser,
    storage: StorageDep,
) -> ApiResponse[list[EntryResponse]]:
    entries = await EntryService(storage).list_habit_entries(user, habit_id)
    return ApiResponse(data=[EntryResponse.model_validate(e) for e in entries])


@router.delete(
    "/{entry_id}",
    status_code=204,
    summary="Delete an entry",
)
async def delete_entry(entry_id: int, user: CurrentUser, storage: StorageDep) -> None:
    await EntryService(storage).delete_entry(user, entry_id)
