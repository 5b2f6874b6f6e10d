import logging
from typing import List

from domain.enums import GoalType
from domain.schemas.context_schemas import (
    CulturalContext,
    HealthProfile,
    MacroGrams,
    NutritionalNeeds,
    PreferenceProfile,
    RestrictionProfile,
    UserContext,
)
from domain.schemas.policy_schemas import KcalBounds
from domain.schemas.profile_schemas import UserProfile
from services.nutrition_service import HIGH_ACTIVITY_LEVELS, NutritionCalculator

logger = logging.getLogger("smartpantry.context")

GOAL_PRIORITIES = {
    GoalType.WEIGHT_LOSS.value: ["calorie_deficit", "high_protein"],
    GoalType.MUSCLE_GAIN.value: ["high_protein"],
    GoalType.HEART_HEALTH.value: ["omega3", "low_sodium", "fiber_rich"],
    GoalType.BLOOD_SUGAR_CONTROL.value: ["low_glycemic", "fiber_rich"],
}
GOAL_RISKS = {
    GoalType.BLOOD_SUGAR_CONTROL.value: ["high_sugar", "refined_carbs"],
}

SPICY_CUISINES = ["indian", "thai", "mexican", "ethiopian", "korean"]
MILD_CUISINES = ["japanese", "french", "italian", "german"]

CULTURAL_RESTRICTIONS = {
    "halal": ["no_pork", "no_alcohol"],
    "kosher": ["no_pork", "no_shellfish"],
}


def _extend_unique(target: List[str], values: List[str]) -> None:
    for v in values:
        if v not in target:
            target.append(v)


class UserContextAnalyzer:
    """
    Prompt-oriented view of a profile.

    Calorie math goes through NutritionCalculator so prompts and plans agree
    on the same baseline.
    """

    @staticmethod
    def analyze_user(profile: UserProfile) -> UserContext:
        health = UserContextAnalyzer.analyze_health_profile(profile)
        return UserContext(
            health_profile=health,
            cultural_profile=UserContextAnalyzer.analyze_cultural_profile(profile),
            nutritional_needs=UserContextAnalyzer.analyze_nutritional_needs(
                profile, health
            ),
            restrictions=RestrictionProfile(
                allergens=list(profile.dietary_restrictions),
                dietary_restrictions=list(profile.dietary_preferences),
            ),
            preferences=UserContextAnalyzer.analyze_preferences(profile),
        )

    @staticmethod
    def analyze_health_profile(profile: UserProfile) -> HealthProfile:
        bmr = NutritionCalculator.calculate_bmr(
            profile.age, profile.gender, profile.height_cm, profile.weight_kg
        )
        tdee = NutritionCalculator.calculate_tdee(bmr, profile.activity_level)
        kcal = NutritionCalculator.apply_goal_adjustment(tdee, profile.health_goals)
        macros = NutritionCalculator.calculate_macros(
            kcal, profile.health_goals, profile.dietary_preferences
        )

        priorities: List[str] = []
        risks: List[str] = []
        goals = [g.lower() for g in profile.health_goals]
        for goal in goals:
            _extend_unique(priorities, GOAL_PRIORITIES.get(goal, []))
            _extend_unique(risks, GOAL_RISKS.get(goal, []))

        return HealthProfile(
            calorie_range=KcalBounds(min=round(kcal * 0.9), max=round(kcal * 1.1)),
            macro_targets=MacroGrams(
                protein=macros.protein, carbs=macros.carbs, fat=macros.fat
            ),
            health_priorities=priorities,
            risk_factors=risks,
        )

    @staticmethod
    def analyze_cultural_profile(profile: UserProfile) -> CulturalContext:
        cuisines = [c.lower() for c in profile.cuisine_preferences]
        prefs = [p.lower() for p in profile.dietary_preferences]

        restrictions: List[str] = []
        for tag, rules in CULTURAL_RESTRICTIONS.items():
            if tag in prefs:
                restrictions = list(rules)
                break

        spicy = len([c for c in SPICY_CUISINES if c in cuisines])
        mild = len([c for c in MILD_CUISINES if c in cuisines])
        if spicy > mild:
            spice = "spicy"
        elif mild > spicy:
            spice = "mild"
        else:
            spice = "medium"

        if len(cuisines) > 3:
            authenticity = "fusion"
        elif len(cuisines) == 1:
            authenticity = "traditional"
        else:
            authenticity = "modern"

        return CulturalContext(
            primary_cuisines=cuisines,
            cultural_restrictions=restrictions,
            spice_preference=spice,
            authenticity_level=authenticity,
        )

    @staticmethod
    def analyze_nutritional_needs(
        profile: UserProfile, health: HealthProfile
    ) -> NutritionalNeeds:
        daily = round((health.calorie_range.min + health.calorie_range.max) / 2)
        distribution = NutritionCalculator.meal_distribution(
            profile.health_goals, profile.activity_level
        )
        return NutritionalNeeds(
            daily_calories=daily,
            meal_distribution={
                slot: round(daily * share) for slot, share in distribution.items()
            },
            nutrient_focus=list(health.health_priorities),
            avoidance_list=list(health.risk_factors),
        )

    @staticmethod
    def analyze_preferences(profile: UserProfile) -> PreferenceProfile:
        count = len(profile.cuisine_preferences)
        if count >= 5:
            adventurousness = "adventurous"
        elif count >= 3:
            adventurousness = "moderate"
        else:
            adventurousness = "conservative"

        level = (profile.activity_level or "").lower()
        return PreferenceProfile(
            skill_level=profile.cooking_skill_level or "beginner",
            time_constraints="quick" if level in HIGH_ACTIVITY_LEVELS else "moderate",
            adventurousness=adventurousness,
        )
