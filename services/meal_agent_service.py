import logging
import re
from typing import Any, Dict, List, Optional, Sequence, Union

from domain.enums import BreakfastSeafoodMode, MealSlot
from domain.schemas.agent_schemas import AgentPolicy
from domain.schemas.context_schemas import UserContext
from domain.schemas.nutrition_schemas import NutritionTarget
from domain.schemas.plan_schemas import Meal
from domain.schemas.profile_schemas import PantryItem, UserProfile
from services.cultural_intelligence import (
    CulturalIntelligenceProvider,
    StubCulturalIntelligence,
)
from services.user_context_service import UserContextAnalyzer

logger = logging.getLogger("smartpantry.agent")

MIN_PANTRY_USAGE = 0.8
REPEAT_SIMILARITY = 0.6

CUISINE_CONSTRAINTS = {
    "japanese": "no_heavy_breakfast",
    "mediterranean": "olive_oil_preferred",
}

RESPONSE_SCHEMA_TEXT = """Return ONLY JSON:
{
  "name": string,
  "ingredients": [{"name": string, "amount": number, "unit": string, "category": string, "fromPantry": boolean}],
  "calories": number,
  "protein": number,
  "carbs": number,
  "fat": number,
  "fiber": number,
  "prepTime": number,
  "cookTime": number,
  "servings": 1,
  "difficulty": "Easy" | "Medium" | "Hard",
  "instructions": [string],
  "tags": [string],
  "pantryUsagePercentage": number,
  "shoppingListItems": [string],
  "restrictionsFollowed": boolean
}"""

# JSON Schema form of RESPONSE_SCHEMA_TEXT for consumers that validate replies
RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": [
        "name", "ingredients", "calories", "protein", "carbs", "fat", "fiber",
        "instructions", "tags",
    ],
    "properties": {
        "name": {"type": "string"},
        "ingredients": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "amount": {"type": "number"},
                    "unit": {"type": "string"},
                    "category": {"type": "string"},
                    "fromPantry": {"type": "boolean"},
                },
            },
        },
        "calories": {"type": "number"},
        "protein": {"type": "number"},
        "carbs": {"type": "number"},
        "fat": {"type": "number"},
        "fiber": {"type": "number"},
        "prepTime": {"type": "number"},
        "cookTime": {"type": "number"},
        "servings": {"const": 1},
        "difficulty": {"enum": ["Easy", "Medium", "Hard"]},
        "instructions": {"type": "array", "items": {"type": "string"}},
        "tags": {"type": "array", "items": {"type": "string"}},
        "pantryUsagePercentage": {"type": "number"},
        "shoppingListItems": {"type": "array", "items": {"type": "string"}},
        "restrictionsFollowed": {"type": "boolean"},
    },
}


def _num(value: float) -> str:
    """2.0 -> '2', 2.5 -> '2.5'"""
    return f"{value:g}"


def _csv(values: Optional[Sequence[str]], empty: str = "none") -> str:
    return ", ".join(values or []) or empty


def _name_tokens(name: str) -> set:
    return set(re.findall(r"[a-z0-9]+", (name or "").lower()))


class SmartMealAgent:
    """
    Builds generation prompts for one user.

    The agent never calls a model. ``build_prompt`` is pure string assembly
    and the cuisine classifier is whatever provider was injected.
    """

    def __init__(
        self,
        profile: UserProfile,
        provider: Optional[CulturalIntelligenceProvider] = None,
    ):
        self.profile = profile
        self.provider = provider or StubCulturalIntelligence()
        self.context: UserContext = UserContextAnalyzer.analyze_user(profile)
        self.policy = AgentPolicy(
            allergens=list(profile.dietary_restrictions),
            dietary_restrictions=list(profile.dietary_preferences),
            cuisines=list(profile.cuisine_preferences),
            cultural_constraints=self.detect_cultural_constraints(profile),
            min_pantry_usage=MIN_PANTRY_USAGE,
        )

    @staticmethod
    def detect_cultural_constraints(profile: UserProfile) -> List[str]:
        cuisines = [c.lower() for c in profile.cuisine_preferences]
        return [rule for cuisine, rule in CUISINE_CONSTRAINTS.items() if cuisine in cuisines]

    def _policy_block(self) -> str:
        p = self.policy
        return "\n".join(
            [
                f"POLICY_ALLERGENS: {_csv(p.allergens)}",
                f"POLICY_RESTRICTIONS: {_csv(p.dietary_restrictions)}",
                f"CULTURAL_RULES: {_csv(p.cultural_constraints)}",
                f"MIN_PANTRY_USAGE: {round(p.min_pantry_usage * 100)}%",
            ]
        )

    def build_prompt(
        self,
        meal_type: Union[MealSlot, str],
        pantry: Sequence[PantryItem],
        previous_meals: Sequence[Meal],
        target_cuisine: Optional[str] = None,
        per_slot: Optional[NutritionTarget] = None,
        forbidden_tokens: Optional[Sequence[str]] = None,
        breakfast_seafood_mode: Optional[BreakfastSeafoodMode] = None,
        breakfast_seafood_allow_list: Optional[Sequence[str]] = None,
    ) -> str:
        """
        Prompt with HARD_RULES, STYLE, VARIETY, PANTRY and the reply schema,
        separated by blank lines.
        """
        slot = meal_type.value if isinstance(meal_type, MealSlot) else str(meal_type)
        ctx = self.context

        if per_slot is not None:
            goal = str(per_slot.kcal)
            macros = f"{per_slot.protein}P/{per_slot.carbs}C/{per_slot.fat}F"
        else:
            goal = str(ctx.nutritional_needs.meal_distribution.get(slot, "unknown"))
            macros = "derive from distribution"

        cuisine = target_cuisine or (
            ctx.cultural_profile.primary_cuisines[0]
            if ctx.cultural_profile.primary_cuisines
            else "modern"
        )

        hard = [
            f"MEAL_TYPE: {slot}",
            f"MEAL_KCAL_TARGET: {goal}",
            f"MACROS_TARGET_PER_SLOT: {macros}",
            f"TARGET_CUISINE: {cuisine} (MUST MATCH)",
            f"DIET_RULES_SELECTED: {_csv(ctx.restrictions.dietary_restrictions)}",
            f"ALLERGENS_FORBIDDEN: {_csv(ctx.restrictions.allergens)}",
            f"ABSOLUTE_FORBIDDEN_TOKENS: {_csv(forbidden_tokens)}",
            self._policy_block(),
        ]
        if slot == MealSlot.BREAKFAST.value:
            mode = breakfast_seafood_mode or BreakfastSeafoodMode.CONTEXTUAL
            mode = mode.value if isinstance(mode, BreakfastSeafoodMode) else str(mode)
            hard.append(f"BREAKFAST_SEAFOOD_MODE: {mode}")
            hard.append(
                f"BREAKFAST_SEAFOOD_ALLOWED_CUISINES: {_csv(breakfast_seafood_allow_list)}"
            )

        style = [
            f"CUISINES_PREF: {_csv(ctx.cultural_profile.primary_cuisines, 'open')}",
            f"SPICE: {ctx.cultural_profile.spice_preference}",
            f"AUTHENTICITY: {ctx.cultural_profile.authenticity_level}",
            f"SKILL: {ctx.preferences.skill_level} | TIME: {ctx.preferences.time_constraints}",
        ]

        previous_names = [m.name for m in previous_meals]
        used_main = [i for m in previous_meals for i in (m.ingredients or [])[:2]]
        variety = [
            f"AVOID_NAMES: {_csv(previous_names)}",
            f"AVOID_MAIN_INGREDIENTS: {_csv(used_main)}",
            "VARY_COOK_METHODS: yes",
        ]

        inventory = ", ".join(
            f"{p.name} ({_num(p.quantity)} {p.unit or ''})" for p in pantry
        )

        logger.debug(
            "Built %s prompt for user=%s pantry=%d previous=%d",
            slot,
            self.profile.user_id,
            len(pantry),
            len(previous_meals),
        )
        return "\n\n".join(
            [
                "HARD_RULES:\n" + "\n".join(hard),
                "STYLE:\n" + "\n".join(style),
                "VARIETY:\n" + "\n".join(variety),
                f"PANTRY:\n{inventory or 'empty'}",
                RESPONSE_SCHEMA_TEXT,
            ]
        )

    def pick_primary_cuisine_from(self, meal: Any) -> str:
        return self.provider.identify_primary_cuisine(
            meal, self.context.cultural_profile.primary_cuisines
        )

    @staticmethod
    def is_repeat(name: str, previous: Sequence[Union[Meal, str]]) -> bool:
        """True when ``name`` shares at least 60% of its words with a previous meal."""
        tokens = _name_tokens(name)
        if not tokens:
            return False
        for prev in previous:
            other = _name_tokens(prev if isinstance(prev, str) else prev.name)
            if not other:
                continue
            if len(tokens & other) / len(tokens | other) >= REPEAT_SIMILARITY:
                return True
        return False
