"""Prompt building and cuisine classification for the meal generation agent"""

import logging

from fastapi import APIRouter

from api.schemas import CuisineRequest, CuisineResponse
from domain.schemas.agent_schemas import PromptRequest, PromptResponse
from services.cultural_intelligence import MarkerCulturalIntelligence
from services.cultural_profile_service import (
    breakfast_seafood_allow_list,
    breakfast_seafood_mode,
)
from services.diet_policy_service import compile_diet_policy
from services.meal_agent_service import RESPONSE_SCHEMA, SmartMealAgent

router = APIRouter(prefix="/agent", tags=["Meal Agent"])
logger = logging.getLogger("smartpantry.api.agent")


@router.post("/prompt", response_model=PromptResponse)
def build_prompt(body: PromptRequest):
    """
    Assemble the generation prompt for one meal slot.

    Forbidden tokens and breakfast seafood rules default to what the
    profile's diet and cuisines imply when the caller leaves them out.
    """
    profile = body.profile
    forbidden = body.forbidden_tokens
    if forbidden is None:
        forbidden = compile_diet_policy(profile.dietary_preferences).tokens
    mode = body.breakfast_seafood_mode or breakfast_seafood_mode(
        profile.cuisine_preferences, profile.dietary_preferences
    )
    allow_list = body.breakfast_seafood_allow_list
    if allow_list is None:
        allow_list = breakfast_seafood_allow_list(profile.cuisine_preferences)

    agent = SmartMealAgent(profile)
    prompt = agent.build_prompt(
        body.meal_type,
        body.pantry,
        body.previous_meals,
        target_cuisine=body.target_cuisine,
        per_slot=body.per_slot,
        forbidden_tokens=forbidden,
        breakfast_seafood_mode=mode,
        breakfast_seafood_allow_list=allow_list,
    )
    return PromptResponse(prompt=prompt, response_schema=RESPONSE_SCHEMA)


@router.post("/cuisine", response_model=CuisineResponse)
def classify_cuisine(body: CuisineRequest):
    """Classify a generated meal with the keyword-marker provider."""
    provider = MarkerCulturalIntelligence()
    agent = SmartMealAgent(body.profile, provider=provider)
    cuisine = agent.pick_primary_cuisine_from(body.meal)
    report = provider.detect_cultural_authenticity(body.meal, cuisine)
    return CuisineResponse(
        cuisine=cuisine,
        authenticity_score=report.authenticity_score,
        authentic_elements=report.authentic_elements,
        missing_elements=report.missing_elements,
        suggestions=report.suggestions,
        is_repeat=SmartMealAgent.is_repeat(
            str(body.meal.get("name", "")), body.previous_meals
        ),
    )
