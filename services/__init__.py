"""Services package - Business logic layer"""

from services.auth_service import AuthService
from services.profile_service import ProfileService
from services.meal_service import MealService
from services.goal_service import GoalService

# aggregation, authorization and validation hold plain functions, not classes

__all__ = [
    "AuthService",
    "ProfileService",
    "MealService",
    "GoalService",
]
