from typing import Optional
from sqlalchemy.orm import Session
import logging

from domain.models import User
from domain.schemas import UserUpdateRequest
from repositories import UserRepository
from app.exceptions import ConflictError
from services.authorization import Identity, require_owner
from services.transaction import unit_of_work

logger = logging.getLogger("nutrition_tracker.profile")


def _user_id(user: User) -> Optional[int]:
    return user.id


class ProfileService:
    """Business logic for the caller's own account"""

    @staticmethod
    def get_profile(db: Session, identity: Identity) -> User:
        """Return the caller's user record"""
        user = UserRepository(db).get_by_id(identity.user_id)
        user = require_owner(user, identity, resource_name="User", owner=_user_id)
        logger.info(f"profile_fetched user_id={user.id}")
        return user

    @staticmethod
    def update_profile(db: Session, identity: Identity, data: UserUpdateRequest) -> User:
        """
        Update name and/or email. Only supplied fields change.

        Raises:
            ConflictError: the new email belongs to another account
        """
        user_repo = UserRepository(db)
        user = require_owner(
            user_repo.get_by_id(identity.user_id),
            identity,
            resource_name="User",
            owner=_user_id,
        )
        changes = data.model_dump(exclude_unset=True, exclude_none=True)

        with unit_of_work(db, "profile_update"):
            new_email = changes.get("email")
            if new_email and new_email != user.email:
                other = user_repo.get_by_email(new_email)
                if other is not None:
                    raise ConflictError(f"User with email {new_email} already exists")
            user_repo.update_user(user, **changes)

        db.refresh(user)
        logger.info(f"profile_updated user_id={user.id} fields={sorted(changes)}")
        return user

    @staticmethod
    def delete_user(db: Session, identity: Identity) -> None:
        """Delete the caller's account with its meals, entries and goal"""
        user_repo = UserRepository(db)
        user = require_owner(
            user_repo.get_by_id(identity.user_id),
            identity,
            resource_name="User",
            owner=_user_id,
        )
        with unit_of_work(db, "user_delete"):
            user_repo.delete_user(user)
        logger.info(f"user_deleted user_id={identity.user_id}")
