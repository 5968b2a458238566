"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.user_repository import UserRepository
from repositories.meal_repository import MealRepository, MealEntryRepository
from repositories.goal_repository import GoalRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "MealRepository",
    "MealEntryRepository",
    "GoalRepository",
]
