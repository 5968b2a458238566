"""
Meal and food-entry models.
"""

from sqlalchemy import (
    Column,
    Integer,
    Float,
    Text,
    DateTime,
    TIMESTAMP,
    ForeignKey,
    CheckConstraint,
    Index,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from domain.models.database import Base


class Meal(Base):
    """A dated container of food entries owned by one user"""

    __tablename__ = "meal"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=False,
    )
    date = Column(DateTime, nullable=False)  # naive UTC
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="meals")
    entries = relationship(
        "MealEntry",
        back_populates="meal",
        cascade="all, delete-orphan",
        order_by="MealEntry.id",
    )

    __table_args__ = (Index("ix_meal_user_date", "user_id", "date"),)


class MealEntry(Base):
    """One food item within a meal; macros are per unit, scaled by quantity"""

    __tablename__ = "meal_entry"

    id = Column(Integer, primary_key=True, autoincrement=True)
    meal_id = Column(
        Integer,
        ForeignKey("meal.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    food_name = Column(Text, nullable=False)
    calories = Column(Float, nullable=False, default=0)
    protein = Column(Float, nullable=False, default=0)
    carbs = Column(Float, nullable=False, default=0)
    fat = Column(Float, nullable=False, default=0)
    quantity = Column(Integer, nullable=False, default=1)

    meal = relationship("Meal", back_populates="entries")

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_meal_entry_quantity_positive"),
        CheckConstraint(
            "calories >= 0 AND protein >= 0 AND carbs >= 0 AND fat >= 0",
            name="ck_meal_entry_macros_nonneg",
        ),
        CheckConstraint("length(food_name) > 0", name="ck_meal_entry_food_name"),
    )
