from datetime import date as Date, datetime

from pydantic import Field

from domain.schemas.base import CamelModel


class MacroTotalsResponse(CamelModel):
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0


class MealSummaryResponse(MacroTotalsResponse):
    """Totals of one meal with the meal's id, timestamp and calendar day."""

    meal_id: int
    date: datetime
    day: Date


class DailySummaryResponse(MacroTotalsResponse):
    date: Date
    meal_count: int = Field(..., description="Meals logged on this date")


class GoalProgressResponse(CamelModel):
    date: Date
    goal: MacroTotalsResponse
    consumed: MacroTotalsResponse
    remaining: MacroTotalsResponse
