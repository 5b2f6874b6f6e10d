from __future__ import annotations

from datetime import date as date_type
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from domain.enums import MealSlot, PlanSource
from domain.schemas.nutrition_schemas import NutritionTarget
from domain.schemas.profile_schemas import PantryItem


class MealCombination(BaseModel):
    """A canned meal template filled with the first matching pantry items."""

    name: str
    ingredients: List[str]
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float = 0


class PantryAnalysis(BaseModel):
    combinations: Dict[str, List[MealCombination]]
    available_ingredients: Dict[str, List[PantryItem]]
    total_combinations: int


class StockRecommendations(BaseModel):
    expiring_soon: List[PantryItem] = []
    low_stock: List[PantryItem] = []
    use_first: List[PantryItem] = []


class Meal(BaseModel):
    id: str
    meal_type: MealSlot
    name: str
    description: str = ""
    ingredients: List[str] = []
    instructions: List[str] = []
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    prep_time: int = 0
    cooking_time: int = 0
    difficulty: str = "easy"  # easy | medium | hard
    cuisine_type: str = "International"
    dietary_tags: List[str] = []
    image_url: Optional[str] = None
    pantry_match_score: int = 0


class MealPlan(BaseModel):
    """One user's meals for one date; totals are always summed from ``meals``."""

    id: str
    user_id: str
    date: str
    meals: List[Meal] = []
    total_calories: float = 0
    total_protein: float = 0
    total_carbs: float = 0
    total_fat: float = 0
    targets: Optional[NutritionTarget] = None
    source: PlanSource = PlanSource.PANTRY
    created_at: datetime
    updated_at: datetime


class SmartPlanResult(BaseModel):
    success: bool
    meal_plan: Optional[MealPlan] = None
    message: Optional[str] = None
    # NOT_FOUND or LOAD_FAILED when success is False
    error_code: Optional[str] = None
    pantry_analysis: Optional[PantryAnalysis] = None


class GeneratePlanRequest(BaseModel):
    user_id: str
    date: Optional[date_type] = Field(
        default=None, description="Plan date; defaults to today"
    )


class PantryAnalysisRequest(BaseModel):
    pantry: List[PantryItem] = []
    dietary_preferences: List[str] = []
    allergies: List[str] = []
