"""
User profile model.
"""

from sqlalchemy import Column, Text, TIMESTAMP, Integer, Float, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from domain.models.database import Base


class ProfileRecord(Base):
    """Onboarding profile; list fields are stored as JSON arrays"""

    __tablename__ = "user_profile"

    user_id = Column(Text, primary_key=True)
    age = Column(Integer)
    gender = Column(Text)
    height_cm = Column(Float)
    weight_kg = Column(Float)
    activity_level = Column(Text)
    health_goals = Column(JSON, default=list)
    dietary_restrictions = Column(JSON, default=list)  # allergens
    dietary_preferences = Column(JSON, default=list)  # vegan, halal, keto, ...
    cuisine_preferences = Column(JSON, default=list)
    cooking_skill_level = Column(Text)
    location = Column(Text)
    cultural_background = Column(Text)
    cultural_preferences = Column(JSON, default=list)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    pantry_items = relationship(
        "PantryItemRecord", back_populates="profile", cascade="all, delete-orphan"
    )
    meal_plans = relationship(
        "MealPlanRecord", back_populates="profile", cascade="all, delete-orphan"
    )
