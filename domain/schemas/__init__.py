"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.profile_schemas import UserProfile, PantryItem, NutritionalInfo
from domain.schemas.nutrition_schemas import (
    NutritionTarget,
    NutritionBreakdown,
    DailyIntake,
    NutritionInsight,
)
from domain.schemas.policy_schemas import (
    CompiledDiet,
    CulturalProfile,
    ConstraintLevel,
    HierarchicalConstraints,
    KcalBounds,
    HardConstraints,
    CuisinePolicy,
    SoftPreferences,
    UserConstraints,
    MealPolicy,
)
from domain.schemas.context_schemas import UserContext
from domain.schemas.plan_schemas import (
    MealCombination,
    PantryAnalysis,
    StockRecommendations,
    Meal,
    MealPlan,
    SmartPlanResult,
    GeneratePlanRequest,
    PantryAnalysisRequest,
)
from domain.schemas.recipe_schemas import (
    Recipe,
    RecipeSearchParams,
    RecipeSearchResult,
)
from domain.schemas.agent_schemas import AgentPolicy, PromptRequest, PromptResponse

__all__ = [
    # Profile schemas
    "UserProfile",
    "PantryItem",
    "NutritionalInfo",
    # Nutrition schemas
    "NutritionTarget",
    "NutritionBreakdown",
    "DailyIntake",
    "NutritionInsight",
    # Policy schemas
    "CompiledDiet",
    "CulturalProfile",
    "ConstraintLevel",
    "HierarchicalConstraints",
    "KcalBounds",
    "HardConstraints",
    "CuisinePolicy",
    "SoftPreferences",
    "UserConstraints",
    "MealPolicy",
    "UserContext",
    # Plan schemas
    "MealCombination",
    "PantryAnalysis",
    "StockRecommendations",
    "Meal",
    "MealPlan",
    "SmartPlanResult",
    "GeneratePlanRequest",
    "PantryAnalysisRequest",
    # Recipe schemas
    "Recipe",
    "RecipeSearchParams",
    "RecipeSearchResult",
    # Agent schemas
    "AgentPolicy",
    "PromptRequest",
    "PromptResponse",
]
