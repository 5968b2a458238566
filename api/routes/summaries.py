"""Per-meal summary routes"""

from datetime import date
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.dependencies import get_db, get_identity
from api.responses import AUTH_ERRORS
from domain.mappers import SummaryMapper
from domain.schemas import MealSummaryResponse
from services.authorization import Identity
from services.meal_service import MealService

router = APIRouter(prefix="/summaries", tags=["Summaries"], responses=AUTH_ERRORS)


@router.get("", response_model=List[MealSummaryResponse])
def list_summaries(
    identity: Identity = Depends(get_identity), db: Session = Depends(get_db)
):
    """Totals of every meal the caller has, newest first"""
    summaries = MealService.meal_summaries(db, identity)
    return [SummaryMapper.to_meal_summary_response(s) for s in summaries]


@router.get("/{day}", response_model=List[MealSummaryResponse])
def summaries_for_day(
    day: date,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    """Totals of each meal on one YYYY-MM-DD day; a malformed date is a 400"""
    summaries = MealService.meal_summaries(db, identity, day)
    return [SummaryMapper.to_meal_summary_response(s) for s in summaries]
