"""Pantry analysis routes"""

import logging

from fastapi import APIRouter

from api.schemas import UseFirstRequest
from domain.schemas.plan_schemas import (
    PantryAnalysis,
    PantryAnalysisRequest,
    StockRecommendations,
)
from services.pantry_analyzer import PantryAnalyzer

router = APIRouter(prefix="/pantry", tags=["Pantry"])
logger = logging.getLogger("smartpantry.api.pantry")


@router.post("/analysis", response_model=PantryAnalysis)
def analyze_pantry(body: PantryAnalysisRequest):
    """Filter, categorize and turn a pantry into meal combinations."""
    return PantryAnalyzer.generate_meal_combinations(
        body.pantry, body.dietary_preferences, body.allergies
    )


@router.post("/use-first", response_model=StockRecommendations)
def use_first(body: UseFirstRequest):
    return PantryAnalyzer.get_stock_based_recommendations(body.pantry, body.today)
