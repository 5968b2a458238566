from datetime import datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, Field
from pydantic.networks import validate_email

from domain.schemas.base import CamelModel

NAME_MAX_LENGTH = 100


def _checked_email(value: str) -> str:
    # email-validator rejects malformed input; the address is kept as sent
    validate_email(value)
    return value


Email = Annotated[str, AfterValidator(_checked_email)]


class UserResponse(CamelModel):
    """Public profile. The password hash never leaves the service layer."""

    id: int
    email: str
    name: Optional[str] = None
    created_at: Optional[datetime] = None


class UserUpdateRequest(CamelModel):
    # Omitted fields stay unchanged; an explicit null is rejected
    name: str = Field(None, min_length=1, max_length=NAME_MAX_LENGTH)
    email: Email = None
