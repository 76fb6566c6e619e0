# Pydantic schemas package
from habit_tracker.backend.schemas.base import (
    ApiResponse,
    CamelModel,
    ErrorDetail,
    ErrorResponse,
    ResponseMetadata,
)

__all__ = [
    "ApiResponse",
    "CamelModel",
    "ErrorDetail",
    "ErrorResponse",
    "ResponseMetadata",
]
