"""Services package - Business logic layer"""

from services.nutrition_service import NutritionCalculator
from services.diet_policy_service import compile_diet_policy, violates_diet
from services.cultural_profile_service import CulturalProfileBuilder
from services.meal_policy_service import MealPolicyBuilder
from services.user_context_service import UserContextAnalyzer
from services.pantry_analyzer import PantryAnalyzer, classify_pantry_item
from services.planner_service import SmartMealPlanner
from services.cultural_intelligence import (
    CulturalIntelligenceProvider,
    StubCulturalIntelligence,
    MarkerCulturalIntelligence,
)
from services.meal_agent_service import SmartMealAgent

# Note: diet_policy_service and the breakfast seafood rules in
# cultural_profile_service are plain functions, not classes

__all__ = [
    "NutritionCalculator",
    "compile_diet_policy",
    "violates_diet",
    "CulturalProfileBuilder",
    "MealPolicyBuilder",
    "UserContextAnalyzer",
    "PantryAnalyzer",
    "classify_pantry_item",
    "SmartMealPlanner",
    "CulturalIntelligenceProvider",
    "StubCulturalIntelligence",
    "MarkerCulturalIntelligence",
    "SmartMealAgent",
]
