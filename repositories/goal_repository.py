"""
Goal Repository - one goal row per user
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from repositories.base import BaseRepository
from domain.models import Goal

_DIALECT_INSERTS = {"sqlite": sqlite_insert, "postgresql": pg_insert}


class GoalRepository(BaseRepository[Goal]):
    """Repository for daily macro goals"""

    def __init__(self, db: Session):
        super().__init__(db, Goal)

    def get_by_user_id(self, user_id: int) -> Optional[Goal]:
        """Get the goal for a user"""
        return self.db.scalars(select(Goal).where(Goal.user_id == user_id)).first()

    def upsert(self, user_id: int, **values) -> Goal:
        """
        Create or update the user's goal in one statement.

        On SQLite and PostgreSQL this is ``INSERT ... ON CONFLICT (user_id) DO
        UPDATE``, so two concurrent requests cannot both insert. Other dialects
        insert inside a savepoint and fall back to updating the row that won.
        """
        insert = _DIALECT_INSERTS.get(self.db.get_bind().dialect.name)
        if insert is not None:
            stmt = insert(Goal).values(user_id=user_id, **values)
            stmt = stmt.on_conflict_do_update(
                index_elements=["user_id"],
                set_={**values, "updated_at": func.now()},
            )
            self.db.execute(stmt)
        else:
            self._insert_or_update(user_id, values)

        stmt = (
            select(Goal)
            .where(Goal.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return self.db.scalars(stmt).one()

    def _insert_or_update(self, user_id: int, values: dict) -> None:
        try:
            with self.db.begin_nested():
                self.db.add(Goal(user_id=user_id, **values))
        except IntegrityError:
            goal = self.get_by_user_id(user_id)
            self.update(goal, **values)
