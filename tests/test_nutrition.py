"""
Tests for NutritionCalculator: BMR/TDEE math, goal adjustment, macro split,
meal distribution and daily insights.
"""

import pytest

from domain.schemas.nutrition_schemas import DailyIntake, NutritionTarget
from services.nutrition_service import (
    DEFAULT_BMR,
    MAX_DAILY_KCAL,
    MIN_DAILY_KCAL,
    NutritionCalculator,
)
from test_fixtures import make_profile


# =============================================================================
# BMR / TDEE
# =============================================================================


def test_reference_scenario_targets():
    """30y male, 180cm, 80kg, moderately active, weight loss."""
    breakdown = NutritionCalculator.calculate_targets(make_profile())

    assert breakdown.bmr == pytest.approx(1780)
    assert breakdown.tdee == pytest.approx(2759)
    assert breakdown.goal_adjusted_kcal == pytest.approx(2345.15)
    assert breakdown.targets.kcal == 2350
    # weight loss split 35/35/30
    assert breakdown.targets.protein == 206
    assert breakdown.targets.carbs == 206
    assert breakdown.targets.fat == 78


def test_female_bmr_uses_female_constant():
    assert NutritionCalculator.calculate_bmr(28, "female", 165, 60) == pytest.approx(1330.25)


def test_unknown_gender_uses_male_constant():
    male = NutritionCalculator.calculate_bmr(40, "male", 170, 70)
    assert NutritionCalculator.calculate_bmr(40, None, 170, 70) == male
    assert NutritionCalculator.calculate_bmr(40, "other", 170, 70) == male


@pytest.mark.parametrize(
    "age,height,weight",
    [(None, 180, 80), (30, None, 80), (30, 180, None), (0, 180, 80), (30, 180, -5)],
)
def test_missing_biometrics_fall_back_to_default_bmr(age, height, weight):
    assert NutritionCalculator.calculate_bmr(age, "male", height, weight) == DEFAULT_BMR


def test_unknown_activity_level_uses_default_multiplier():
    assert NutritionCalculator.activity_multiplier("couch_potato") == 1.4
    assert NutritionCalculator.activity_multiplier(None) == 1.4


def test_tdee_is_monotonic_in_activity_level():
    levels = [
        "sedentary",
        "lightly_active",
        "moderately_active",
        "very_active",
        "extra_active",
    ]
    values = [NutritionCalculator.calculate_tdee(1700, level) for level in levels]
    assert values == sorted(values)
    assert len(set(values)) == len(values)


# =============================================================================
# Goal adjustment and clamping
# =============================================================================


def test_goal_adjustment_directions():
    assert NutritionCalculator.apply_goal_adjustment(2000, ["weight_loss"]) == pytest.approx(1700)
    assert NutritionCalculator.apply_goal_adjustment(2000, ["muscle_gain"]) == pytest.approx(2200)
    assert NutritionCalculator.apply_goal_adjustment(2000, []) == 2000


def test_conflicting_goals_leave_tdee_unchanged():
    assert (
        NutritionCalculator.apply_goal_adjustment(2000, ["weight_loss", "muscle_gain"])
        == 2000
    )


def test_targets_are_clamped_to_safe_range():
    tiny = make_profile(
        age=90, gender="female", height_cm=140, weight_kg=40, activity_level="sedentary"
    )
    huge = make_profile(
        age=20,
        height_cm=210,
        weight_kg=200,
        activity_level="extra_active",
        health_goals=["muscle_gain"],
    )
    assert NutritionCalculator.calculate_targets(tiny).targets.kcal == MIN_DAILY_KCAL
    assert NutritionCalculator.calculate_targets(huge).targets.kcal == MAX_DAILY_KCAL


# =============================================================================
# Macros
# =============================================================================


@pytest.mark.parametrize(
    "overrides",
    [
        {},
        {"health_goals": ["muscle_gain"]},
        {"health_goals": []},
        {"dietary_preferences": ["keto"]},
        {"age": None},
    ],
)
def test_macro_calories_match_target_within_one_percent(overrides):
    targets = NutritionCalculator.calculate_targets(make_profile(**overrides)).targets
    macro_kcal = targets.protein * 4 + targets.carbs * 4 + targets.fat * 9
    assert abs(macro_kcal - targets.kcal) <= targets.kcal * 0.01


def test_keto_overrides_goal_ratios():
    assert NutritionCalculator.macro_ratios(["weight_loss"], ["Keto"]) == (0.25, 0.05, 0.70)


def test_kcal_is_rounded_to_nearest_ten():
    assert NutritionCalculator.calculate_macros(2344.9).kcal == 2340
    assert NutritionCalculator.calculate_macros(2345.1).kcal == 2350


# =============================================================================
# Meal distribution
# =============================================================================


def test_high_activity_distribution_wins_over_weight_loss():
    dist = NutritionCalculator.meal_distribution(["weight_loss"], "very_active")
    assert dist == {"breakfast": 0.25, "lunch": 0.30, "dinner": 0.35, "snack": 0.10}


def test_weight_loss_distribution():
    dist = NutritionCalculator.meal_distribution(["weight_loss"], "sedentary")
    assert dist["lunch"] == 0.40
    assert sum(dist.values()) == pytest.approx(1.0)


# =============================================================================
# Insights
# =============================================================================


def test_insights_flag_low_intake():
    targets = NutritionTarget(kcal=2000, protein=100, carbs=250, fat=70)
    insights = NutritionCalculator.nutrition_insights(
        DailyIntake(calories=1000, protein=50, fiber=10), targets
    )
    assert [i.type for i in insights] == ["warning", "info", "info"]
    assert insights[0].message == "You may not be eating enough calories today"


def test_insights_flag_excess_calories_only():
    targets = NutritionTarget(kcal=2000, protein=100, carbs=250, fat=70)
    insights = NutritionCalculator.nutrition_insights(
        DailyIntake(calories=2500, protein=120, fiber=30), targets
    )
    assert len(insights) == 1
    assert insights[0].type == "caution"


def test_insights_on_target_day_are_empty():
    targets = NutritionTarget(kcal=2000, protein=100, carbs=250, fat=70)
    daily = DailyIntake(calories=2000, protein=100, carbs=250, fat=70, fiber=25)
    assert NutritionCalculator.nutrition_insights(daily, targets) == []
