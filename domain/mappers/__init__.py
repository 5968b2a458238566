"""
Domain mappers package.
Handles transformation between ORM models and DTOs (Data Transfer Objects).
"""

from domain.mappers.user_mapper import UserMapper
from domain.mappers.meal_mapper import MealMapper
from domain.mappers.goal_mapper import GoalMapper
from domain.mappers.summary_mapper import SummaryMapper

__all__ = ["UserMapper", "MealMapper", "GoalMapper", "SummaryMapper"]
