"""
Auth API Endpoints.
"""

from fastapi import APIRouter

from habit_tracker.backend.core.dependencies import CurrentUser, StorageDep
from habit_tracker.backend.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from habit_tracker.backend.schemas.base import ApiResponse
from habit_tracker.backend.schemas.user import UserResponse
from habit_tracker.backend.services.auth import AuthService

router = APIRouter()


@router.post(
    "/register",
    response_model=ApiResponse[TokenResponse],
    status_code=201,
    summary="Register an account",
)
async def register(data: RegisterRequest, storage: StorageDep) -> ApiResponse[TokenResponse]:
    user, token = await AuthService(storage).register(data)
    return ApiResponse(
        data=TokenResponse(access_token=token, user=UserResponse.model_validate(user))
    )


@router.post(
    "/login",
    response_model=ApiResponse[TokenResponse],
    summary="Log in with username and password",
)
async def login(data: LoginRequest, storage: StorageDep) -> ApiResponse[TokenResponse]:
    user, token = await AuthService(storage).login(data)
    return ApiResponse(
        data=TokenResponse(access_token=token, user=UserResponse.model_validate(user))
    )


@router.get(
    "/me",
    response_model=ApiResponse[UserResponse],
    summary="Current user",
)
async def me(user: CurrentUser) -> ApiResponse[UserResponse]:
    return ApiResponse(data=UserResponse.model_validate(user))
