"""
Base Service.

Base class for all services. Services hold one Storage (a single unit of
work), enforce ownership and business rules, and translate persistence
errors into application errors.

Usage:
    from habit_tracker.backend.services.base import BaseService

    class HabitService(BaseService):
        async def create_habit(self, user: User, data: HabitCreate) -> Habit:
            return await self._execute_db_operation(
                "create_habit",
                self.storage.create_habit(user_id=user.id, **data.model_dump()),
            )
"""

from typing import Any, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from habit_tracker.backend.core.exceptions import ConflictError, DatabaseError, ValidationError
from habit_tracker.backend.core.logging import get_logger
from habit_tracker.backend.storage.base import Storage

T = TypeVar("T")


class BaseService:
    """
    Base class for all services.

    Provides:
    - The storage unit of work
    - Logging context
    - Error wrapping for database operations
    """

    def __init__(self, storage: Storage) -> None:
        self._storage = storage
        self._logger = get_logger(self.__class__.__module__)

    @property
    def storage(self) -> Storage:
        return self._storage

    async def _execute_db_operation(self, operation: str, coro: Any) -> T:
        """
        Await a storage operation, converting SQLAlchemy exceptions.

        Raises:
            ConflictError: For unique constraint violations
            DatabaseError: For other database errors
        """
        try:
            return await coro
        except IntegrityError as e:
            self._logger.warning(
                "Database integrity error",
                extra={"operation": operation, "error": str(e)},
            )
            error_str = str(e).lower()
            if "unique" in error_str or "duplicate" in error_str:
                raise ConflictError("Resource already exists")
            raise DatabaseError(f"Database constraint violation: {operation}")
        except SQLAlchemyError as e:
            self._logger.error(
                "Database error",
                extra={"operation": operation, "error": str(e)},
            )
            raise DatabaseError(f"Database operation failed: {operation}")

    def _validate_string_length(
        self,
        value: str,
        field_name: str,
        min_length: int | None = None,
        max_length: int | None = None,
    ) -> None:
        """
        Validate string length constraints.

        Raises:
            ValidationError: If string length is out of bounds
        """
        if min_length is not None and len(value) < min_length:
            raise ValidationError(
                f"{field_name} too short",
                details={field_name: f"Minimum length is {min_length}"},
            )
        if max_length is not None and len(value) > max_length:
            raise ValidationError(
                f"{field_name} too long",
                details={field_name: f"Maximum length is {max_length}"},
            )

    def _log_operation(self, operation: str, **context: Any) -> None:
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(self, message: str, **context: Any) -> None:
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
