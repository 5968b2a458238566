"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import Base, Database
from domain.models.user import User
from domain.models.meal import Meal, MealEntry
from domain.models.goal import Goal

__all__ = [
    # Database
    "Base",
    "Database",
    # User models
    "User",
    # Meal models
    "Meal",
    "MealEntry",
    # Goal models
    "Goal",
]
