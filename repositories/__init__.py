"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.profile_repository import ProfileRepository
from repositories.pantry_repository import PantryRepository
from repositories.meal_plan_repository import MealPlanRepository

__all__ = [
    "BaseRepository",
    "ProfileRepository",
    "PantryRepository",
    "MealPlanRepository",
]
