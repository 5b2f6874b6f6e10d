"""Pydantic schemas for the prompt-oriented user context."""

from typing import Dict, List

from pydantic import BaseModel

from domain.schemas.policy_schemas import KcalBounds


class MacroGrams(BaseModel):
    protein: int
    carbs: int
    fat: int


class HealthProfile(BaseModel):
    calorie_range: KcalBounds
    macro_targets: MacroGrams
    health_priorities: List[str] = []
    risk_factors: List[str] = []


class CulturalContext(BaseModel):
    primary_cuisines: List[str] = []
    cultural_restrictions: List[str] = []
    spice_preference: str = "medium"  # mild | medium | spicy
    authenticity_level: str = "modern"  # fusion | traditional | modern


class NutritionalNeeds(BaseModel):
    daily_calories: int
    meal_distribution: Dict[str, int]
    nutrient_focus: List[str] = []
    avoidance_list: List[str] = []


class RestrictionProfile(BaseModel):
    allergens: List[str] = []
    dietary_restrictions: List[str] = []


class PreferenceProfile(BaseModel):
    skill_level: str = "beginner"
    time_constraints: str = "moderate"
    adventurousness: str = "conservative"  # conservative | moderate | adventurous


class UserContext(BaseModel):
    health_profile: HealthProfile
    cultural_profile: CulturalContext
    nutritional_needs: NutritionalNeeds
    restrictions: RestrictionProfile
    preferences: PreferenceProfile
