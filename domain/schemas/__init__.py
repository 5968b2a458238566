"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.base import CamelModel
from domain.schemas.user_schemas import UserResponse, UserUpdateRequest
from domain.schemas.auth_schemas import (
    RegisterRequest,
    LoginRequest,
    TokenResponse,
    PASSWORD_MIN_LENGTH,
)
from domain.schemas.meal_schemas import (
    MealCreate,
    MealUpdate,
    MealResponse,
    MealDetailResponse,
    MealEntryCreate,
    MealEntryUpdate,
    MealEntryResponse,
)
from domain.schemas.goal_schemas import GoalCreate, GoalUpdate, GoalResponse
from domain.schemas.summary_schemas import (
    MacroTotalsResponse,
    MealSummaryResponse,
    DailySummaryResponse,
    GoalProgressResponse,
)

__all__ = [
    "CamelModel",
    # User / auth schemas
    "UserResponse",
    "UserUpdateRequest",
    "RegisterRequest",
    "LoginRequest",
    "TokenResponse",
    "PASSWORD_MIN_LENGTH",
    # Meal schemas
    "MealCreate",
    "MealUpdate",
    "MealResponse",
    "MealDetailResponse",
    "MealEntryCreate",
    "MealEntryUpdate",
    "MealEntryResponse",
    # Goal schemas
    "GoalCreate",
    "GoalUpdate",
    "GoalResponse",
    # Summary schemas
    "MacroTotalsResponse",
    "MealSummaryResponse",
    "DailySummaryResponse",
    "GoalProgressResponse",
]
