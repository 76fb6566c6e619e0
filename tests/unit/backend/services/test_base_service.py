"""
Unit Tests for BaseService.

Tests the database error translation and validation helpers.
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from habit_tracker.backend.core.exceptions import ConflictError, DatabaseError, ValidationError
from habit_tracker.backend.services.base import BaseService


@pytest.fixture
def service(mock_storage: AsyncMock) -> BaseService:
    return BaseService(mock_storage)


async def _raise(exc: Exception):
    raise exc


class TestExecuteDbOperation:

    @pytest.mark.asyncio
    async def test_returns_result(self, service):
        async def ok():
            return 42

        assert await service._execute_db_operation("op", ok()) == 42

    @pytest.mark.asyncio
    async def test_unique_violation_becomes_conflict(self, service):
        error = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: users.username"))

        with pytest.raises(ConflictError):
            await service._execute_db_operation("create_user", _raise(error))

    @pytest.mark.asyncio
    async def test_other_integrity_error_becomes_database_error(self, service):
        error = IntegrityError("INSERT", {}, Exception("FOREIGN KEY constraint failed"))

        with pytest.raises(DatabaseError):
            await service._execute_db_operation("create_entry", _raise(error))

    @pytest.mark.asyncio
    async def test_operational_error_becomes_database_error(self, service):
        error = OperationalError("SELECT", {}, Exception("connection refused"))

        with pytest.raises(DatabaseError, match="list_habits"):
            await service._execute_db_operation("list_habits", _raise(error))


class TestValidateStringLength:

    def test_too_short(self, service):
        with pytest.raises(ValidationError) as exc_info:
            service._validate_string_length("abc", "password", min_length=8)

        assert exc_info.value.details == {"password": "Minimum length is 8"}

    def test_too_long(self, service):
        with pytest.raises(ValidationError):
            service._validate_string_length("x" * 10, "name", max_length=5)

    def test_within_bounds(self, service):
        service._validate_string_length("just right", "name", min_length=1, max_length=20)
