"""Nutrition targets, meal policy and user context routes"""

import logging
from typing import Dict, List

from fastapi import APIRouter

from api.schemas import InsightsRequest, PerMealRequest
from domain.schemas.context_schemas import UserContext
from domain.schemas.nutrition_schemas import (
    NutritionBreakdown,
    NutritionInsight,
    NutritionTarget,
)
from domain.schemas.policy_schemas import MealPolicy
from domain.schemas.profile_schemas import UserProfile
from services.meal_policy_service import (
    MealPolicyBuilder,
    SLOTS_WITH_SNACK,
    SLOTS_WITHOUT_SNACK,
)
from services.nutrition_service import NutritionCalculator
from services.user_context_service import UserContextAnalyzer

router = APIRouter(prefix="/policy", tags=["Meal Policy"])
logger = logging.getLogger("smartpantry.api.policy")


@router.post("", response_model=MealPolicy)
def build_policy(profile: UserProfile):
    """Full meal policy: hard constraints, soft preferences, targets and culture."""
    return MealPolicyBuilder.build_meal_policy(profile)


@router.post("/targets", response_model=NutritionBreakdown)
def nutrition_targets(profile: UserProfile):
    return NutritionCalculator.calculate_targets(profile)


@router.post("/per-meal", response_model=Dict[str, NutritionTarget])
def per_meal_targets(body: PerMealRequest):
    """Split daily targets across meal slots."""
    split = MealPolicyBuilder.split_targets_per_meal(body.targets, body.include_snack)
    slots = body.slots or list(SLOTS_WITH_SNACK if body.include_snack else SLOTS_WITHOUT_SNACK)
    return {slot: split(slot) for slot in slots}


@router.post("/context", response_model=UserContext)
def user_context(profile: UserProfile):
    return UserContextAnalyzer.analyze_user(profile)


@router.post("/insights", response_model=List[NutritionInsight])
def nutrition_insights(body: InsightsRequest):
    if body.fiber_target is None:
        return NutritionCalculator.nutrition_insights(body.daily, body.targets)
    return NutritionCalculator.nutrition_insights(
        body.daily, body.targets, body.fiber_target
    )
