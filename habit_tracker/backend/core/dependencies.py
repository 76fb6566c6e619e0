"""
FastAPI Dependencies.

Shared dependencies for request handling: storage per request, the
authenticated user, and the notification runtime.
"""

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from habit_tracker.backend.core.exceptions import AuthenticationError, AuthorizationError
from habit_tracker.backend.core.logging import get_logger
from habit_tracker.backend.core.security import user_id_from_token
from habit_tracker.backend.models import User
from habit_tracker.backend.notifications.runtime import NotificationRuntime
from habit_tracker.backend.storage.base import Storage
from habit_tracker.backend.storage.provider import StorageProvider, get_storage_provider

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_provider() -> StorageProvider:
    """The process-wide storage provider."""
    return get_storage_provider()


async def get_storage(
    provider: Annotated[StorageProvider, Depends(get_provider)],
) -> AsyncIterator[Storage]:
    """
    One storage unit of work per request.

    Committed when the endpoint returns, rolled back if it raises.
    """
    async with provider.session() as storage:
        yield storage


StorageDep = Annotated[Storage, Depends(get_storage)]


async def get_current_user(
    storage: StorageDep,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> User:
    """Resolve the bearer token to a user."""
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    user_id = user_id_from_token(credentials.credentials)
    user = await storage.get_user(user_id)
    if user is None:
        raise AuthenticationError("User no longer exists")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


async def require_admin(user: CurrentUser) -> User:
    """Current user, which must be an administrator."""
    if not user.is_admin:
        logger.warning("Admin route denied", extra={"user_id": user.id})
        raise AuthorizationError("Admin access required")
    return user


AdminUser = Annotated[User, Depends(require_admin)]


def get_notification_runtime(request: Request) -> NotificationRuntime | None:
    """Runtime started by the application lifespan, if any."""
    return getattr(request.app.state, "notification_runtime", None)


RuntimeDep = Annotated[NotificationRuntime | None, Depends(get_notification_runtime)]
