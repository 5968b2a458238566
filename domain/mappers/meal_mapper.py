"""
Meal domain mappers.
Meal dates are stored as naive UTC and always leave the service as aware UTC.
"""

from datetime import datetime
from typing import Optional

from domain.models import Meal, MealEntry
from domain.schemas import MealDetailResponse, MealEntryResponse, MealResponse
from services.aggregation import as_utc


def utc_or_none(value: Optional[datetime]) -> Optional[datetime]:
    return as_utc(value) if value is not None else None


class MealMapper:
    """Mapper for meals and their entries."""

    @staticmethod
    def to_response(meal: Meal) -> MealResponse:
        return MealResponse(
            id=meal.id,
            user_id=meal.user_id,
            date=as_utc(meal.date),
            created_at=utc_or_none(meal.created_at),
        )

    @staticmethod
    def to_detail_response(meal: Meal) -> MealDetailResponse:
        """Meal with its entries, in insertion order"""
        return MealDetailResponse(
            id=meal.id,
            user_id=meal.user_id,
            date=as_utc(meal.date),
            created_at=utc_or_none(meal.created_at),
            entries=[MealMapper.to_entry_response(e) for e in meal.entries],
        )

    @staticmethod
    def to_entry_response(entry: MealEntry) -> MealEntryResponse:
        return MealEntryResponse.model_validate(entry)
