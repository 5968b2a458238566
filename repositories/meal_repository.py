"""
Meal and meal-entry repositories.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, joinedload, selectinload

from repositories.base import BaseRepository
from domain.models import Meal, MealEntry


class MealRepository(BaseRepository[Meal]):
    """Repository for meals"""

    def __init__(self, db: Session):
        super().__init__(db, Meal)

    def get_with_entries(self, meal_id: int) -> Optional[Meal]:
        stmt = (
            select(Meal)
            .options(selectinload(Meal.entries))
            .where(Meal.id == meal_id)
        )
        return self.db.scalars(stmt).first()

    def list_for_user(
        self,
        user_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Meal]:
        """
        Meals of one user, newest first, entries eagerly loaded.

        Args:
            user_id: Owner
            start: Inclusive lower bound on meal date (naive UTC)
            end: Exclusive upper bound on meal date (naive UTC)
        """
        stmt = (
            select(Meal)
            .options(selectinload(Meal.entries))
            .where(Meal.user_id == user_id)
        )
        if start is not None:
            stmt = stmt.where(Meal.date >= start)
        if end is not None:
            stmt = stmt.where(Meal.date < end)
        stmt = stmt.order_by(Meal.date.desc(), Meal.id.desc())
        return list(self.db.scalars(stmt))

    def create_meal(self, user_id: int, date: datetime) -> Meal:
        return self.add(Meal(user_id=user_id, date=date))

    def delete_with_entries(self, meal: Meal) -> int:
        """
        Delete a meal and its entries inside the caller's transaction.

        Returns:
            Number of entries removed
        """
        result = self.db.execute(delete(MealEntry).where(MealEntry.meal_id == meal.id))
        self.db.execute(delete(Meal).where(Meal.id == meal.id))
        self.db.flush()
        return result.rowcount or 0


class MealEntryRepository(BaseRepository[MealEntry]):
    """Repository for entries within meals"""

    def __init__(self, db: Session):
        super().__init__(db, MealEntry)

    def get_with_meal(self, entry_id: int) -> Optional[MealEntry]:
        """Entry with its parent meal loaded, for ownership checks"""
        stmt = (
            select(MealEntry)
            .options(joinedload(MealEntry.meal))
            .where(MealEntry.id == entry_id)
        )
        return self.db.scalars(stmt).first()

    def list_for_meal(self, meal_id: int) -> List[MealEntry]:
        stmt = (
            select(MealEntry)
            .where(MealEntry.meal_id == meal_id)
            .order_by(MealEntry.id)
        )
        return list(self.db.scalars(stmt))

    def create_entry(self, meal_id: int, **values) -> MealEntry:
        return self.add(MealEntry(meal_id=meal_id, **values))
