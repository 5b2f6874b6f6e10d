"""Request and response bodies used only by the HTTP layer"""

from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from domain.schemas.nutrition_schemas import DailyIntake, NutritionTarget
from domain.schemas.profile_schemas import PantryItem, UserProfile


class PerMealRequest(BaseModel):
    targets: NutritionTarget
    include_snack: bool = True
    slots: Optional[List[str]] = Field(
        None, description="Slots to split for; defaults to the standard day"
    )


class InsightsRequest(BaseModel):
    daily: DailyIntake
    targets: NutritionTarget
    fiber_target: Optional[float] = None


class UseFirstRequest(BaseModel):
    pantry: List[PantryItem] = []
    today: Optional[date] = None


class CacheInvalidationResponse(BaseModel):
    namespace: str
    removed: int


class CuisineRequest(BaseModel):
    profile: UserProfile
    meal: Dict[str, Any]
    previous_meals: List[str] = []


class CuisineResponse(BaseModel):
    cuisine: str
    authenticity_score: int
    authentic_elements: List[str] = []
    missing_elements: List[str] = []
    suggestions: List[str] = []
    is_repeat: bool = False
