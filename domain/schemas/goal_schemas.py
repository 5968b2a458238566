from datetime import datetime
from typing import Annotated, Optional

from pydantic import Field

from domain.schemas.base import CamelModel

Target = Annotated[int, Field(gt=0, strict=True)]


class GoalCreate(CamelModel):
    calories: Target
    protein: Target
    carbs: Target
    fat: Target


class GoalUpdate(CamelModel):
    calories: Target = None
    protein: Target = None
    carbs: Target = None
    fat: Target = None


class GoalResponse(CamelModel):
    id: int
    user_id: int
    calories: int
    protein: int
    carbs: int
    fat: int
    updated_at: Optional[datetime] = None
