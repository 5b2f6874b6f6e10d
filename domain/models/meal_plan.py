"""
Generated meal plan model.
"""

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Float, JSON, Index
from sqlalchemy.orm import relationship

from domain.models.database import Base


class MealPlanRecord(Base):
    """One plan per user and date; ``id`` is ``plan_{user_id}_{date}``"""

    __tablename__ = "meal_plan"

    id = Column(Text, primary_key=True)
    user_id = Column(
        Text,
        ForeignKey("user_profile.user_id", ondelete="CASCADE"),
        nullable=False,
    )
    date = Column(Text, nullable=False)  # ISO date
    meals = Column(JSON, nullable=False, default=list)
    total_calories = Column(Float, default=0)
    total_protein = Column(Float, default=0)
    total_carbs = Column(Float, default=0)
    total_fat = Column(Float, default=0)
    targets = Column(JSON)
    source = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True))
    updated_at = Column(TIMESTAMP(timezone=True))

    profile = relationship("ProfileRecord", back_populates="meal_plans")

    __table_args__ = (Index("ix_meal_plan_user_date", "user_id", "date"),)
