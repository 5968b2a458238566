"""
User Repository - Data access layer for user accounts
"""

from typing import Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from repositories.base import BaseRepository
from domain.models import User
from app.exceptions import ConflictError


class UserRepository(BaseRepository[User]):
    """Repository for user data access"""

    def __init__(self, db: Session):
        super().__init__(db, User)

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email (exact, case-sensitive match)"""
        return self.db.scalars(select(User).where(User.email == email)).first()

    def create_user(
        self, email: str, password_hash: str, name: Optional[str] = None
    ) -> User:
        """Create a new user; the unique index on email is the final arbiter"""
        user = User(email=email, password_hash=password_hash, name=name)
        try:
            return self.add(user)
        except IntegrityError as e:
            raise ConflictError(f"User with email {email} already exists") from e

    def update_user(self, user: User, **values) -> User:
        """Update user information"""
        try:
            return self.update(user, **values)
        except IntegrityError as e:
            raise ConflictError(
                f"User with email {values.get('email')} already exists"
            ) from e

    def delete_user(self, user: User) -> None:
        """Delete user and all related data (cascade to meals, entries, goal)"""
        self.delete(user)
