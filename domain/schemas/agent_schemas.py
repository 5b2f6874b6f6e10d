"""Request/response shapes for the meal prompt builder."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from domain.enums import BreakfastSeafoodMode, MealSlot
from domain.schemas.nutrition_schemas import NutritionTarget
from domain.schemas.plan_schemas import Meal
from domain.schemas.profile_schemas import PantryItem, UserProfile


class AgentPolicy(BaseModel):
    """Policy block the agent appends to the hard rules of every prompt."""

    name: str = "smart_agent_policy"
    allergens: List[str] = []
    dietary_restrictions: List[str] = []
    cuisines: List[str] = []
    cultural_constraints: List[str] = []
    min_pantry_usage: float = 0.8


class PromptRequest(BaseModel):
    profile: UserProfile
    meal_type: MealSlot
    pantry: List[PantryItem] = []
    previous_meals: List[Meal] = []
    target_cuisine: Optional[str] = None
    per_slot: Optional[NutritionTarget] = None
    forbidden_tokens: Optional[List[str]] = None
    breakfast_seafood_mode: Optional[BreakfastSeafoodMode] = None
    breakfast_seafood_allow_list: Optional[List[str]] = None


class PromptResponse(BaseModel):
    prompt: str
    response_schema: Dict[str, Any]
