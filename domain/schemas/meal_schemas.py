from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import Field, field_validator
from pydantic_core import PydanticCustomError

from domain.schemas.base import CamelModel

FOOD_NAME_MAX_LENGTH = 200

# Strict: strings and booleans are rejected, JSON integers are accepted as floats
Macro = Annotated[float, Field(ge=0, strict=True, allow_inf_nan=False)]
Quantity = Annotated[int, Field(ge=1, strict=True)]


class MealCreate(CamelModel):
    """Meal payload; the same shape is used for create and update."""

    date: datetime

    @field_validator("date", mode="before")
    @classmethod
    def require_datetime_string(cls, v):
        if not isinstance(v, str):
            raise PydanticCustomError(
                "datetime_string", "must be an ISO-8601 date-time string"
            )
        v = v.strip()
        if len(v) <= len("YYYY-MM-DD"):
            raise PydanticCustomError(
                "datetime_string",
                "must include a time, e.g. 2024-01-01T08:30:00Z",
            )
        # Digit-only strings would otherwise be read as Unix timestamps
        iso = v[:-1] + "+00:00" if v[-1] in "zZ" else v
        try:
            return datetime.fromisoformat(iso)
        except ValueError:
            raise PydanticCustomError(
                "datetime_string", "must be an ISO-8601 date-time string"
            ) from None


class MealUpdate(MealCreate):
    pass


class MealEntryCreate(CamelModel):
    food_name: str = Field(..., min_length=1, max_length=FOOD_NAME_MAX_LENGTH)
    calories: Macro
    protein: Macro
    carbs: Macro
    fat: Macro
    quantity: Quantity = 1


class MealEntryUpdate(CamelModel):
    # Partial update: omitted fields stay unchanged, explicit nulls are rejected
    food_name: str = Field(None, min_length=1, max_length=FOOD_NAME_MAX_LENGTH)
    calories: Macro = None
    protein: Macro = None
    carbs: Macro = None
    fat: Macro = None
    quantity: Quantity = None


class MealEntryResponse(CamelModel):
    id: int
    meal_id: int
    food_name: str
    calories: float
    protein: float
    carbs: float
    fat: float
    quantity: int


class MealResponse(CamelModel):
    id: int
    user_id: int
    date: datetime
    created_at: Optional[datetime] = None


class MealDetailResponse(MealResponse):
    entries: List[MealEntryResponse] = []
