"""
User account model.
"""

from sqlalchemy import Column, Integer, Text, TIMESTAMP
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from domain.models.database import Base


class User(Base):
    """User account model"""

    __tablename__ = "app_user"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(Text, unique=True, nullable=False)
    password_hash = Column(Text, nullable=False)
    name = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Deleting a user removes their meals (and through them, entries) and goal
    meals = relationship(
        "Meal", back_populates="user", cascade="all, delete-orphan"
    )
    goal = relationship(
        "Goal", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
