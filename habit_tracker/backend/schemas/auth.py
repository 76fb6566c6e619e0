"""
Auth Schemas.
"""

from pydantic import Field, field_validator

from habit_tracker.backend.schemas.base import CamelModel
from habit_tracker.backend.schemas.user import UserResponse

# bcrypt only accepts passwords up to 72 bytes
PASSWORD_MAX_BYTES = 72


def check_password_bytes(password: str) -> str:
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
    return password


class RegisterRequest(CamelModel):
    username: str = Field(
        ...,
        min_length=3,
        max_length=64,
        pattern=r"^[A-Za-z0-9_.-]+$",
        examples=["alice"],
    )
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_BYTES)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return check_password_bytes(value)


class LoginRequest(CamelModel):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_BYTES)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return check_password_bytes(value)


class TokenResponse(CamelModel):
    """Bearer token issued on register and login."""

    access_token: str
    token_type: str = "bearer"
    user: UserResponse
