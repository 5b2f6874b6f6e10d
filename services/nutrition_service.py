import logging
from typing import Dict, Iterable, List, Optional, Tuple

from domain.enums import ActivityLevel, Gender, GoalType, MealSlot
from domain.schemas.nutrition_schemas import (
    DailyIntake,
    NutritionBreakdown,
    NutritionInsight,
    NutritionTarget,
)
from domain.schemas.profile_schemas import UserProfile

logger = logging.getLogger("smartpantry.nutrition")

DEFAULT_BMR = 1800.0
DEFAULT_ACTIVITY_MULTIPLIER = 1.4
MIN_DAILY_KCAL = 1200
MAX_DAILY_KCAL = 4000

# kcal per gram
PROTEIN_KCAL = 4
CARBS_KCAL = 4
FAT_KCAL = 9

# Adult reference intake used when no explicit fiber target is given
DEFAULT_FIBER_G = 25

ACTIVITY_MULTIPLIERS: Dict[str, float] = {
    ActivityLevel.SEDENTARY.value: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE.value: 1.375,
    ActivityLevel.MODERATELY_ACTIVE.value: 1.55,
    ActivityLevel.VERY_ACTIVE.value: 1.725,
    ActivityLevel.EXTRA_ACTIVE.value: 1.9,
}

HIGH_ACTIVITY_LEVELS = {ActivityLevel.VERY_ACTIVE.value, ActivityLevel.EXTRA_ACTIVE.value}

DEFAULT_DISTRIBUTION = {
    MealSlot.BREAKFAST.value: 0.25,
    MealSlot.LUNCH.value: 0.35,
    MealSlot.DINNER.value: 0.35,
    MealSlot.SNACK.value: 0.05,
}
WEIGHT_LOSS_DISTRIBUTION = {
    MealSlot.BREAKFAST.value: 0.30,
    MealSlot.LUNCH.value: 0.40,
    MealSlot.DINNER.value: 0.25,
    MealSlot.SNACK.value: 0.05,
}
HIGH_ACTIVITY_DISTRIBUTION = {
    MealSlot.BREAKFAST.value: 0.25,
    MealSlot.LUNCH.value: 0.30,
    MealSlot.DINNER.value: 0.35,
    MealSlot.SNACK.value: 0.10,
}


def _normalized(tags: Optional[Iterable[str]]) -> List[str]:
    return [str(t).strip().lower() for t in (tags or []) if t]


class NutritionCalculator:
    """
    Daily energy and macro targets from biometrics and goals.

    Every path that needs a calorie baseline (policy builder, prompt context,
    meal planner) goes through this class so there is a single BMR formula
    (Mifflin-St Jeor) and a single activity table.
    """

    @staticmethod
    def calculate_bmr(
        age: Optional[float],
        gender: Optional[str],
        height_cm: Optional[float],
        weight_kg: Optional[float],
    ) -> float:
        """
        Basal metabolic rate via Mifflin-St Jeor.

        Missing or non-positive biometrics fall back to ``DEFAULT_BMR``.
        Anything other than ``female`` uses the male constant.
        """
        if not age or not height_cm or not weight_kg:
            return DEFAULT_BMR
        if age <= 0 or height_cm <= 0 or weight_kg <= 0:
            return DEFAULT_BMR

        base = 10 * weight_kg + 6.25 * height_cm - 5 * age
        if (gender or "").strip().lower() == Gender.FEMALE.value:
            return base - 161
        return base + 5

    @staticmethod
    def activity_multiplier(level: Optional[str]) -> float:
        return ACTIVITY_MULTIPLIERS.get(
            (level or "").strip().lower(), DEFAULT_ACTIVITY_MULTIPLIER
        )

    @staticmethod
    def calculate_tdee(bmr: float, activity_level: Optional[str]) -> float:
        return bmr * NutritionCalculator.activity_multiplier(activity_level)

    @staticmethod
    def apply_goal_adjustment(tdee: float, goals: Optional[Iterable[str]]) -> float:
        """Deficit for weight loss, surplus for muscle gain, clamped to a safe range.

        Having both goals (or neither) leaves TDEE unchanged.
        """
        goals = _normalized(goals)
        wants_loss = GoalType.WEIGHT_LOSS.value in goals
        wants_gain = GoalType.MUSCLE_GAIN.value in goals

        kcal = tdee
        if wants_loss and not wants_gain:
            kcal = tdee * 0.85
        elif wants_gain and not wants_loss:
            kcal = tdee * 1.10
        return max(MIN_DAILY_KCAL, min(MAX_DAILY_KCAL, kcal))

    @staticmethod
    def macro_ratios(
        goals: Optional[Iterable[str]], diet_preferences: Optional[Iterable[str]] = None
    ) -> Tuple[float, float, float]:
        """(protein, carbs, fat) shares of total calories."""
        goals = _normalized(goals)
        prefs = _normalized(diet_preferences)

        ratios = (0.20, 0.50, 0.30)
        if GoalType.MUSCLE_GAIN.value in goals:
            ratios = (0.30, 0.40, 0.30)
        if GoalType.WEIGHT_LOSS.value in goals:
            ratios = (0.35, 0.35, 0.30)
        if "keto" in prefs:
            ratios = (0.25, 0.05, 0.70)
        return ratios

    @staticmethod
    def calculate_macros(
        kcal: float,
        goals: Optional[Iterable[str]] = None,
        diet_preferences: Optional[Iterable[str]] = None,
    ) -> NutritionTarget:
        target_kcal = int(round(kcal / 10.0)) * 10
        protein_r, carbs_r, fat_r = NutritionCalculator.macro_ratios(
            goals, diet_preferences
        )
        return NutritionTarget(
            kcal=target_kcal,
            protein=round(target_kcal * protein_r / PROTEIN_KCAL),
            carbs=round(target_kcal * carbs_r / CARBS_KCAL),
            fat=round(target_kcal * fat_r / FAT_KCAL),
        )

    @staticmethod
    def meal_distribution(
        goals: Optional[Iterable[str]], activity_level: Optional[str]
    ) -> Dict[str, float]:
        """Share of daily calories per slot; high activity overrides weight loss."""
        level = (activity_level or "").strip().lower()
        if level in HIGH_ACTIVITY_LEVELS:
            return dict(HIGH_ACTIVITY_DISTRIBUTION)
        if GoalType.WEIGHT_LOSS.value in _normalized(goals):
            return dict(WEIGHT_LOSS_DISTRIBUTION)
        return dict(DEFAULT_DISTRIBUTION)

    @staticmethod
    def calculate_targets(profile: UserProfile) -> NutritionBreakdown:
        bmr = NutritionCalculator.calculate_bmr(
            profile.age, profile.gender, profile.height_cm, profile.weight_kg
        )
        tdee = NutritionCalculator.calculate_tdee(bmr, profile.activity_level)
        adjusted = NutritionCalculator.apply_goal_adjustment(tdee, profile.health_goals)
        targets = NutritionCalculator.calculate_macros(
            adjusted, profile.health_goals, profile.dietary_preferences
        )
        logger.debug(
            "Targets for user=%s: bmr=%.1f tdee=%.1f kcal=%d",
            profile.user_id,
            bmr,
            tdee,
            targets.kcal,
        )
        return NutritionBreakdown(
            bmr=bmr,
            tdee=tdee,
            goal_adjusted_kcal=adjusted,
            targets=targets,
            meal_distribution=NutritionCalculator.meal_distribution(
                profile.health_goals, profile.activity_level
            ),
        )

    @staticmethod
    def nutrition_insights(
        daily: DailyIntake,
        targets: NutritionTarget,
        fiber_target: float = DEFAULT_FIBER_G,
    ) -> List[NutritionInsight]:
        """Compare a day's intake against targets and return coaching hints."""

        def percent(value: float, target: float) -> float:
            return (value / target) * 100 if target else 100.0

        insights: List[NutritionInsight] = []

        calorie_pct = percent(daily.calories, targets.kcal)
        if calorie_pct < 80:
            insights.append(
                NutritionInsight(
                    type="warning",
                    message="You may not be eating enough calories today",
                    recommendation="Consider adding a healthy snack or larger portions",
                )
            )
        elif calorie_pct > 110:
            insights.append(
                NutritionInsight(
                    type="caution",
                    message="You're exceeding your calorie goal",
                    recommendation="Focus on lower-calorie, nutrient-dense foods",
                )
            )

        if percent(daily.protein, targets.protein) < 70:
            insights.append(
                NutritionInsight(
                    type="info",
                    message="Protein intake is below target",
                    recommendation="Add lean meats, eggs, legumes, or protein powder",
                )
            )

        if percent(daily.fiber, fiber_target) < 60:
            insights.append(
                NutritionInsight(
                    type="info",
                    message="Fiber intake is low",
                    recommendation="Include more vegetables, fruits, and whole grains",
                )
            )

        return insights
