from datetime import date
from sqlalchemy.orm import Session
import logging

from domain.models import Goal
from domain.schemas import GoalCreate, GoalUpdate
from repositories import GoalRepository
from services.aggregation import GoalProgress, compare_to_goal
from services.authorization import Identity, require_owner
from services.meal_service import MealService
from services.transaction import unit_of_work

logger = logging.getLogger("nutrition_tracker.goals")


class GoalService:
    """Business logic for the caller's daily macro goal"""

    @staticmethod
    def get_goal(db: Session, identity: Identity) -> Goal:
        """
        Get the caller's goal.

        Raises:
            AuthorizationError: caller has no goal
        """
        goal = GoalRepository(db).get_by_user_id(identity.user_id)
        return require_owner(goal, identity, resource_name="Goal")

    @staticmethod
    def upsert_goal(db: Session, identity: Identity, data: GoalCreate) -> Goal:
        """Create the goal, or replace every target if one already exists"""
        goal_repo = GoalRepository(db)
        with unit_of_work(db, "goal_upsert"):
            goal = goal_repo.upsert(identity.user_id, **data.model_dump())
        logger.info(f"goal_upserted goal_id={goal.id} user_id={identity.user_id}")
        return goal

    @staticmethod
    def update_goal(db: Session, identity: Identity, data: GoalUpdate) -> Goal:
        goal_repo = GoalRepository(db)
        goal = require_owner(
            goal_repo.get_by_user_id(identity.user_id), identity, resource_name="Goal"
        )
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        with unit_of_work(db, "goal_update"):
            goal_repo.update(goal, **changes)
        db.refresh(goal)
        logger.info(f"goal_updated goal_id={goal.id} fields={sorted(changes)}")
        return goal

    @staticmethod
    def delete_goal(db: Session, identity: Identity) -> None:
        goal_repo = GoalRepository(db)
        goal = require_owner(
            goal_repo.get_by_user_id(identity.user_id), identity, resource_name="Goal"
        )
        with unit_of_work(db, "goal_delete"):
            goal_repo.delete(goal)
        logger.info(f"goal_deleted user_id={identity.user_id}")

    @staticmethod
    def progress(db: Session, identity: Identity, day: date) -> GoalProgress:
        """Targets against what the caller logged on ``day``"""
        goal = GoalService.get_goal(db, identity)
        consumed = MealService.consumed_on(db, identity, day)
        return compare_to_goal(goal, consumed)
