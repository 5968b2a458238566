from typing import Optional

from pydantic import Field

from domain.schemas.base import CamelModel
from domain.schemas.user_schemas import NAME_MAX_LENGTH, Email, UserResponse

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128


class RegisterRequest(CamelModel):
    email: Email
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH
    )
    name: Optional[str] = Field(None, min_length=1, max_length=NAME_MAX_LENGTH)


class LoginRequest(CamelModel):
    """Presence only: a malformed email simply fails authentication."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(CamelModel):
    token: str
    token_type: str = "Bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: UserResponse
