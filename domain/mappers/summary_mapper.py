"""
Summary mappers.
Turn the plain aggregation results into response DTOs.
"""

from datetime import date

from domain.schemas import (
    DailySummaryResponse,
    GoalProgressResponse,
    MacroTotalsResponse,
    MealSummaryResponse,
)
from services.aggregation import DailySummary, GoalProgress, MacroTotals, MealSummary


class SummaryMapper:
    @staticmethod
    def to_totals_response(totals: MacroTotals) -> MacroTotalsResponse:
        return MacroTotalsResponse(**totals.as_dict())

    @staticmethod
    def to_meal_summary_response(summary: MealSummary) -> MealSummaryResponse:
        return MealSummaryResponse(
            meal_id=summary.meal_id,
            date=summary.date,
            day=summary.day,
            **summary.totals.as_dict(),
        )

    @staticmethod
    def to_daily_summary_response(summary: DailySummary) -> DailySummaryResponse:
        return DailySummaryResponse(
            date=summary.day,
            meal_count=summary.meal_count,
            **summary.totals.as_dict(),
        )

    @staticmethod
    def to_progress_response(day: date, progress: GoalProgress) -> GoalProgressResponse:
        return GoalProgressResponse(
            date=day,
            goal=SummaryMapper.to_totals_response(progress.target),
            consumed=SummaryMapper.to_totals_response(progress.consumed),
            remaining=SummaryMapper.to_totals_response(progress.remaining),
        )
