"""Pydantic schemas for compiled meal policies and cultural profiles."""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from domain.enums import BreakfastSeafoodMode, Region
from domain.schemas.nutrition_schemas import NutritionTarget


class CompiledDiet(BaseModel):
    picked: List[str] = []
    tokens: List[str] = []
    restrictions: Dict[str, List[str]] = {}


class CulturalProfile(BaseModel):
    primary_cuisine: str
    region: Region
    religious_restrictions: List[str] = []
    cultural_preferences: List[str] = []


class ConstraintLevel(BaseModel):
    """One precedence level; lower ``level`` wins when a consumer resolves conflicts."""

    level: int
    name: str
    rules: List[str] = []


class HierarchicalConstraints(BaseModel):
    religious: ConstraintLevel
    cultural: ConstraintLevel
    regional: ConstraintLevel
    personal: ConstraintLevel

    def ordered(self) -> List[ConstraintLevel]:
        return sorted(
            [self.religious, self.cultural, self.regional, self.personal],
            key=lambda c: c.level,
        )


class KcalBounds(BaseModel):
    min: int
    max: int


class HardConstraints(BaseModel):
    allergens: List[str] = []
    diet_rules: List[str] = []
    kcal_bounds: KcalBounds


class CuisinePolicy(BaseModel):
    weights: Dict[str, float] = {}
    explore_rate: float = 0.2


class SoftPreferences(BaseModel):
    cuisine: CuisinePolicy
    methods_to_vary: List[str] = []
    pantry_first: bool = True


class UserConstraints(BaseModel):
    skill: str = "beginner"
    time_constraint: str = "moderate"


class MealPolicy(BaseModel):
    """Everything a planner or prompt builder needs for one planning request."""

    hard: HardConstraints
    soft: SoftPreferences
    user: UserConstraints
    targets: NutritionTarget
    compiled_diet: Optional[CompiledDiet] = None
    cultural_profile: Optional[CulturalProfile] = None
    hierarchical_constraints: Optional[HierarchicalConstraints] = None
    breakfast_seafood_mode: BreakfastSeafoodMode = Field(
        default=BreakfastSeafoodMode.CONTEXTUAL
    )
