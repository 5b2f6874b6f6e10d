import logging
from typing import Callable, Dict, List

from domain.enums import MealSlot
from domain.schemas.nutrition_schemas import NutritionTarget
from domain.schemas.policy_schemas import (
    CuisinePolicy,
    HardConstraints,
    KcalBounds,
    MealPolicy,
    SoftPreferences,
    UserConstraints,
)
from domain.schemas.profile_schemas import UserProfile
from services.cultural_profile_service import (
    CulturalProfileBuilder,
    breakfast_seafood_mode,
)
from services.diet_policy_service import compile_diet_policy
from services.nutrition_service import HIGH_ACTIVITY_LEVELS, NutritionCalculator

logger = logging.getLogger("smartpantry.policy")

PREFERRED_CUISINE_SHARE = 0.8
EXPLORE_RATE = 0.2
COOKING_METHODS = ["grill", "bake", "saute", "steam", "stir-fry", "roast"]

SLOTS_WITH_SNACK = [
    MealSlot.BREAKFAST.value,
    MealSlot.LUNCH.value,
    MealSlot.DINNER.value,
    MealSlot.SNACK.value,
]
WEIGHTS_WITH_SNACK = [0.25, 0.35, 0.35, 0.05]
SLOTS_WITHOUT_SNACK = SLOTS_WITH_SNACK[:3]
WEIGHTS_WITHOUT_SNACK = [0.3, 0.35, 0.35]
UNKNOWN_SLOT_WEIGHT = 0.25


class MealPolicyBuilder:
    """Compose nutrition, diet and cultural rules into one MealPolicy."""

    @staticmethod
    def cuisine_weights(cuisines: List[str]) -> Dict[str, float]:
        """Spread the preferred share evenly; the rest is left for exploration."""
        if not cuisines:
            return {}
        share = PREFERRED_CUISINE_SHARE / len(cuisines)
        return {c: share for c in cuisines}

    @staticmethod
    def build_meal_policy(profile: UserProfile) -> MealPolicy:
        """
        Build the policy for one planning request.

        Pure function of ``profile``: the same profile always yields an
        equal policy. Empty preference lists give empty weights, never errors.
        """
        breakdown = NutritionCalculator.calculate_targets(profile)
        kcal = breakdown.goal_adjusted_kcal

        cultural = CulturalProfileBuilder.build_cultural_profile(profile)
        hierarchy = CulturalProfileBuilder.build_hierarchical_constraints(
            cultural, profile
        )
        level = (profile.activity_level or "").lower()

        policy = MealPolicy(
            hard=HardConstraints(
                allergens=list(profile.dietary_restrictions),
                diet_rules=list(profile.dietary_preferences),
                kcal_bounds=KcalBounds(min=round(kcal * 0.9), max=round(kcal * 1.1)),
            ),
            soft=SoftPreferences(
                cuisine=CuisinePolicy(
                    weights=MealPolicyBuilder.cuisine_weights(
                        list(profile.cuisine_preferences)
                    ),
                    explore_rate=EXPLORE_RATE,
                ),
                methods_to_vary=list(COOKING_METHODS),
                pantry_first=True,
            ),
            user=UserConstraints(
                skill=profile.cooking_skill_level or "beginner",
                time_constraint="quick" if level in HIGH_ACTIVITY_LEVELS else "moderate",
            ),
            targets=breakdown.targets,
            compiled_diet=compile_diet_policy(profile.dietary_preferences),
            cultural_profile=cultural,
            hierarchical_constraints=hierarchy,
            breakfast_seafood_mode=breakfast_seafood_mode(
                profile.cuisine_preferences, profile.dietary_preferences
            ),
        )
        logger.info(
            "Built meal policy for user=%s kcal=%d cuisines=%d",
            profile.user_id,
            policy.targets.kcal,
            len(policy.soft.cuisine.weights),
        )
        return policy

    @staticmethod
    def split_targets_per_meal(
        targets: NutritionTarget, include_snack: bool = True
    ) -> Callable[[str], NutritionTarget]:
        """Return a slot name -> per-slot target function."""
        slots = SLOTS_WITH_SNACK if include_snack else SLOTS_WITHOUT_SNACK
        weights = WEIGHTS_WITH_SNACK if include_snack else WEIGHTS_WITHOUT_SNACK
        table = dict(zip(slots, weights))

        def for_slot(slot: str) -> NutritionTarget:
            name = slot.value if isinstance(slot, MealSlot) else str(slot)
            w = table.get(name.lower(), UNKNOWN_SLOT_WEIGHT)
            return NutritionTarget(
                kcal=round(targets.kcal * w),
                protein=round(targets.protein * w),
                carbs=round(targets.carbs * w),
                fat=round(targets.fat * w),
            )

        return for_slot
