"""
Goal mapper.
"""

from domain.mappers.meal_mapper import utc_or_none
from domain.models import Goal
from domain.schemas import GoalResponse


class GoalMapper:
    @staticmethod
    def to_response(goal: Goal) -> GoalResponse:
        return GoalResponse(
            id=goal.id,
            user_id=goal.user_id,
            calories=goal.calories,
            protein=goal.protein,
            carbs=goal.carbs,
            fat=goal.fat,
            updated_at=utc_or_none(goal.updated_at),
        )
