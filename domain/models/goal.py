"""
Daily macro goal model.
"""

from sqlalchemy import (
    Column,
    Integer,
    TIMESTAMP,
    ForeignKey,
    CheckConstraint,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from domain.models.database import Base


class Goal(Base):
    """Daily macro targets. At most one row per user."""

    __tablename__ = "goal"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=False,
    )
    calories = Column(Integer, nullable=False)
    protein = Column(Integer, nullable=False)
    carbs = Column(Integer, nullable=False)
    fat = Column(Integer, nullable=False)
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    user = relationship("User", back_populates="goal")

    __table_args__ = (
        # the upsert in GoalRepository targets this constraint
        UniqueConstraint("user_id", name="uq_goal_user"),
        CheckConstraint(
            "calories > 0 AND protein > 0 AND carbs > 0 AND fat > 0",
            name="ck_goal_positive",
        ),
    )
