from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
import logging

from domain.models import Meal, MealEntry
from domain.schemas import MealCreate, MealUpdate, MealEntryCreate, MealEntryUpdate
from repositories import MealRepository, MealEntryRepository
from app.exceptions import AuthorizationError
from services.aggregation import (
    DailySummary,
    MacroTotals,
    MealSummary,
    as_utc,
    summarize_days,
    summarize_meal,
    summarize_meals,
)
from services.authorization import Identity, entry_owner_id, require_owner
from services.transaction import unit_of_work

logger = logging.getLogger("nutrition_tracker.meals")


def to_storage(value: datetime) -> datetime:
    """Meal dates are stored as naive UTC"""
    return as_utc(value).replace(tzinfo=None)


class MealService:
    """Meals and their food entries, always scoped to the calling user"""

    # ------------------------------------------------------------------
    # Meals
    # ------------------------------------------------------------------

    @staticmethod
    def create_meal(db: Session, identity: Identity, data: MealCreate) -> Meal:
        meal_repo = MealRepository(db)
        with unit_of_work(db, "meal_create"):
            meal = meal_repo.create_meal(identity.user_id, to_storage(data.date))
        db.refresh(meal)
        logger.info(f"meal_created meal_id={meal.id} user_id={identity.user_id}")
        return meal

    @staticmethod
    def list_meals(db: Session, identity: Identity) -> List[Meal]:
        """All of the caller's meals, newest first"""
        return MealRepository(db).list_for_user(identity.user_id)

    @staticmethod
    def get_meal(db: Session, identity: Identity, meal_id: int) -> Meal:
        """
        Fetch one meal with its entries.

        Raises:
            AuthorizationError: meal missing or owned by someone else
        """
        meal = MealRepository(db).get_with_entries(meal_id)
        return require_owner(meal, identity, resource_name="Meal")

    @staticmethod
    def update_meal(db: Session, identity: Identity, meal_id: int, data: MealUpdate) -> Meal:
        meal_repo = MealRepository(db)
        meal = require_owner(meal_repo.get_with_entries(meal_id), identity, resource_name="Meal")
        with unit_of_work(db, "meal_update"):
            meal_repo.update(meal, date=to_storage(data.date))
        logger.info(f"meal_updated meal_id={meal.id} user_id={identity.user_id}")
        return meal

    @staticmethod
    def delete_meal(db: Session, identity: Identity, meal_id: int) -> int:
        """Delete a meal and all of its entries in one transaction. Returns the entry count removed."""
        meal_repo = MealRepository(db)
        meal = require_owner(meal_repo.get_by_id(meal_id), identity, resource_name="Meal")
        with unit_of_work(db, "meal_delete"):
            removed = meal_repo.delete_with_entries(meal)
        logger.info(
            f"meal_deleted meal_id={meal_id} user_id={identity.user_id} entries_removed={removed}"
        )
        return removed

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------

    @staticmethod
    def list_entries(db: Session, identity: Identity, meal_id: int) -> List[MealEntry]:
        meal = MealService.get_meal(db, identity, meal_id)
        return MealEntryRepository(db).list_for_meal(meal.id)

    @staticmethod
    def add_entry(db: Session, identity: Identity, meal_id: int, data: MealEntryCreate) -> MealEntry:
        meal = require_owner(
            MealRepository(db).get_by_id(meal_id), identity, resource_name="Meal"
        )
        entry_repo = MealEntryRepository(db)
        with unit_of_work(db, "entry_create"):
            entry = entry_repo.create_entry(meal.id, **data.model_dump())
        logger.info(f"entry_created entry_id={entry.id} meal_id={meal.id}")
        return entry

    @staticmethod
    def get_entry(
        db: Session, identity: Identity, entry_id: int, meal_id: Optional[int] = None
    ) -> MealEntry:
        """
        Fetch an entry the caller owns through its parent meal.

        With ``meal_id`` the meal is checked first and the entry must belong
        to it; an entry of another meal is reported as not found.
        """
        if meal_id is not None:
            require_owner(
                MealRepository(db).get_by_id(meal_id), identity, resource_name="Meal"
            )

        entry = MealEntryRepository(db).get_with_meal(entry_id)
        if entry is not None and meal_id is not None and entry.meal_id != meal_id:
            raise AuthorizationError("Entry not found")
        return require_owner(entry, identity, resource_name="Entry", owner=entry_owner_id)

    @staticmethod
    def update_entry(
        db: Session,
        identity: Identity,
        entry_id: int,
        data: MealEntryUpdate,
        meal_id: Optional[int] = None,
    ) -> MealEntry:
        """Partial update: only fields present in the payload change"""
        entry = MealService.get_entry(db, identity, entry_id, meal_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        with unit_of_work(db, "entry_update"):
            MealEntryRepository(db).update(entry, **changes)
        logger.info(f"entry_updated entry_id={entry.id} fields={sorted(changes)}")
        return entry

    @staticmethod
    def delete_entry(
        db: Session, identity: Identity, entry_id: int, meal_id: Optional[int] = None
    ) -> None:
        entry = MealService.get_entry(db, identity, entry_id, meal_id)
        with unit_of_work(db, "entry_delete"):
            MealEntryRepository(db).delete(entry)
        logger.info(f"entry_deleted entry_id={entry_id}")

    # ------------------------------------------------------------------
    # Summaries
    # ------------------------------------------------------------------

    @staticmethod
    def meal_summary(db: Session, identity: Identity, meal_id: int) -> MealSummary:
        meal = MealService.get_meal(db, identity, meal_id)
        return summarize_meal(meal)

    @staticmethod
    def meal_summaries(
        db: Session, identity: Identity, day: Optional[date] = None
    ) -> List[MealSummary]:
        """Per-meal totals for the caller, optionally limited to one UTC day"""
        return summarize_meals(_meals_for(db, identity, day))

    @staticmethod
    def daily_summaries(
        db: Session, identity: Identity, day: Optional[date] = None
    ) -> List[DailySummary]:
        """Per-day totals, newest day first; only days that have meals appear"""
        return summarize_days(_meals_for(db, identity, day), day)

    @staticmethod
    def consumed_on(db: Session, identity: Identity, day: date) -> MacroTotals:
        """Totals across every meal the caller logged on ``day``"""
        rows = summarize_days(_meals_for(db, identity, day), day)
        return rows[0].totals if rows else MacroTotals()


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    """Naive-UTC [start, end) covering one calendar day"""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def _meals_for(db: Session, identity: Identity, day: Optional[date]) -> List[Meal]:
    repo = MealRepository(db)
    if day is None:
        return repo.list_for_user(identity.user_id)
    start, end = day_bounds(day)
    return repo.list_for_user(identity.user_id, start=start, end=end)
