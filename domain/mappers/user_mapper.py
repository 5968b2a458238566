"""
User domain mappers.
Handles transformation between ORM models and DTOs for user-related entities.
"""

from domain.mappers.meal_mapper import utc_or_none
from domain.models import User
from domain.schemas import TokenResponse, UserResponse


class UserMapper:
    """Mapper for user-related transformations."""

    @staticmethod
    def to_response(user: User) -> UserResponse:
        """
        Convert User ORM model to the public UserResponse DTO.

        Args:
            user: User ORM instance

        Returns:
            UserResponse without the password hash
        """
        return UserResponse(
            id=user.id,
            email=user.email,
            name=user.name,
            created_at=utc_or_none(user.created_at),
        )

    @staticmethod
    def to_token_response(user: User, token: str, expires_in: int) -> TokenResponse:
        return TokenResponse(
            token=token,
            expires_in=expires_in,
            user=UserMapper.to_response(user),
        )
