"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    get_db_session,
)
from domain.models.profile import ProfileRecord
from domain.models.pantry import PantryItemRecord
from domain.models.meal_plan import MealPlanRecord

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "get_db_session",
    # Models
    "ProfileRecord",
    "PantryItemRecord",
    "MealPlanRecord",
]
