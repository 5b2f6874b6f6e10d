"""Pydantic schemas for nutrition targets."""

from typing import Dict

from pydantic import BaseModel, Field


class NutritionTarget(BaseModel):
    """Daily (or per-slot) calorie and macro gram targets."""

    kcal: int
    protein: int
    carbs: int
    fat: int


class NutritionBreakdown(BaseModel):
    """Every intermediate value of a target calculation."""

    bmr: float = Field(..., description="Basal metabolic rate (kcal)")
    tdee: float = Field(..., description="Total daily energy expenditure (kcal)")
    goal_adjusted_kcal: float = Field(
        ..., description="TDEE after goal adjustment and clamping"
    )
    targets: NutritionTarget
    meal_distribution: Dict[str, float] = Field(
        ..., description="Share of daily calories per meal slot"
    )


class DailyIntake(BaseModel):
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    fiber: float = 0


class NutritionInsight(BaseModel):
    type: str
    message: str
    recommendation: str
