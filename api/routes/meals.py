"""Meal and nested meal-entry routes"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from api.dependencies import get_db, get_identity
from api.responses import AUTH_ERRORS
from domain.mappers import MealMapper, SummaryMapper
from domain.schemas import (
    DailySummaryResponse,
    MealCreate,
    MealDetailResponse,
    MealEntryCreate,
    MealEntryResponse,
    MealEntryUpdate,
    MealResponse,
    MealSummaryResponse,
    MealUpdate,
)
from services.authorization import Identity
from services.meal_service import MealService

router = APIRouter(prefix="/meals", tags=["Meals"], responses=AUTH_ERRORS)


# ============================================================================
# Meals
# ============================================================================


@router.post("", response_model=MealResponse, status_code=status.HTTP_201_CREATED)
def create_meal(
    data: MealCreate,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    meal = MealService.create_meal(db, identity, data)
    return MealMapper.to_response(meal)


@router.get("", response_model=List[MealResponse])
def list_meals(identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    """The caller's meals, newest first"""
    meals = MealService.list_meals(db, identity)
    return [MealMapper.to_response(m) for m in meals]


# Declared before /{meal_id} so "daily-summary" is not parsed as an id
@router.get("/daily-summary", response_model=List[DailySummaryResponse])
def daily_summary(
    day: Optional[date] = Query(None, alias="date", description="Only this UTC day"),
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    """Totals per calendar day, newest day first"""
    rows = MealService.daily_summaries(db, identity, day)
    return [SummaryMapper.to_daily_summary_response(r) for r in rows]


@router.get("/{meal_id}", response_model=MealDetailResponse)
def get_meal(
    meal_id: int,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    meal = MealService.get_meal(db, identity, meal_id)
    return MealMapper.to_detail_response(meal)


@router.put("/{meal_id}", response_model=MealResponse)
def update_meal(
    meal_id: int,
    data: MealUpdate,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    meal = MealService.update_meal(db, identity, meal_id, data)
    return MealMapper.to_response(meal)


@router.delete("/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_meal(
    meal_id: int,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    """Delete the meal and every entry in it"""
    MealService.delete_meal(db, identity, meal_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{meal_id}/summary", response_model=MealSummaryResponse)
def meal_summary(
    meal_id: int,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    summary = MealService.meal_summary(db, identity, meal_id)
    return SummaryMapper.to_meal_summary_response(summary)


# ============================================================================
# Entries within a meal
# ============================================================================


@router.get("/{meal_id}/entries", response_model=List[MealEntryResponse])
def list_entries(
    meal_id: int,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    entries = MealService.list_entries(db, identity, meal_id)
    return [MealMapper.to_entry_response(e) for e in entries]


@router.post(
    "/{meal_id}/entries",
    response_model=MealEntryResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_entry(
    meal_id: int,
    data: MealEntryCreate,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    entry = MealService.add_entry(db, identity, meal_id, data)
    return MealMapper.to_entry_response(entry)


@router.put("/{meal_id}/entries/{entry_id}", response_model=MealEntryResponse)
def update_entry(
    meal_id: int,
    entry_id: int,
    data: MealEntryUpdate,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    entry = MealService.update_entry(db, identity, entry_id, data, meal_id=meal_id)
    return MealMapper.to_entry_response(entry)


@router.delete("/{meal_id}/entries/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_entry(
    meal_id: int,
    entry_id: int,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    MealService.delete_entry(db, identity, entry_id, meal_id=meal_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
