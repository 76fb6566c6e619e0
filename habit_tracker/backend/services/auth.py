"""
Auth Service.

Registration and password login. Access is granted through JWT bearer
tokens carrying the user id.
"""

from habit_tracker.backend.core.config import get_app_config
from habit_tracker.backend.core.exceptions import AuthenticationError, ConflictError
from habit_tracker.backend.core.security import create_access_token, hash_password, verify_password
from habit_tracker.backend.models import User
from habit_tracker.backend.schemas.auth import LoginRequest, RegisterRequest
from habit_tracker.backend.services.base import BaseService


class AuthService(BaseService):
    """Account creation and credential checks."""

    async def register(self, data: RegisterRequest) -> tuple[User, str]:
        """
        Create an account and issue a token.

        With `security.yaml: registration.first_user_admin` the very first
        account becomes an administrator.

        Raises:
            ValidationError: Password shorter than the configured minimum
            ConflictError: Username already taken
        """
        security = get_app_config().security
        self._validate_string_length(
            data.password, "password", min_length=security.passwords.min_length
        )

        if await self.storage.get_user_by_username(data.username) is not None:
            raise ConflictError("Username already taken")

        is_admin = False
        if security.registration.first_user_admin:
            is_admin = (await self.storage.get_system_stats()).total_users == 0

        user = await self._execute_db_operation(
            "register",
            self.storage.create_user(
                username=data.username,
                password_hash=hash_password(data.password),
                is_admin=is_admin,
            ),
        )
        self._log_operation("User registered", user_id=user.id, is_admin=is_admin)
        return user, create_access_token(user.id)

    async def login(self, data: LoginRequest) -> tuple[User, str]:
        """
        Raises:
            AuthenticationError: Unknown username or wrong password
        """
        user = await self.storage.get_user_by_username(data.username)
        if user is None or not verify_password(data.password, user.password_hash):
            self._logger.warning("Login failed", extra={"username": data.username})
            raise AuthenticationError("Invalid username or password")

        self._log_debug("User logged in", user_id=user.id)
        return user, create_access_token(user.id)
