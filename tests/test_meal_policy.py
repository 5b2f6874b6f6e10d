"""Tests for MealPolicyBuilder."""

import pytest

from domain.enums import BreakfastSeafoodMode, MealSlot
from domain.schemas.nutrition_schemas import NutritionTarget
from services.meal_policy_service import COOKING_METHODS, MealPolicyBuilder
from test_fixtures import make_profile


def test_reference_policy():
    policy = MealPolicyBuilder.build_meal_policy(make_profile())

    assert policy.targets.kcal == 2350
    # bounds come from the unrounded goal-adjusted kcal (2345.15)
    assert policy.hard.kcal_bounds.min == 2111
    assert policy.hard.kcal_bounds.max == 2580
    assert policy.soft.cuisine.weights == {}
    assert policy.soft.cuisine.explore_rate == 0.2
    assert policy.soft.methods_to_vary == COOKING_METHODS
    assert policy.soft.pantry_first is True
    assert policy.user.skill == "beginner"
    assert policy.user.time_constraint == "moderate"


def test_policy_is_idempotent():
    profile = make_profile("athlete")
    assert MealPolicyBuilder.build_meal_policy(profile) == MealPolicyBuilder.build_meal_policy(
        profile
    )


def test_preferred_cuisines_share_eighty_percent():
    policy = MealPolicyBuilder.build_meal_policy(make_profile("athlete"))

    assert policy.soft.cuisine.weights == {
        "japanese": pytest.approx(0.4),
        "american": pytest.approx(0.4),
    }
    assert sum(policy.soft.cuisine.weights.values()) + policy.soft.cuisine.explore_rate == (
        pytest.approx(1.0)
    )


def test_athlete_constraints():
    policy = MealPolicyBuilder.build_meal_policy(make_profile("athlete"))

    assert policy.user.skill == "intermediate"
    assert policy.user.time_constraint == "quick"
    assert policy.cultural_profile.primary_cuisine == "japanese"
    assert policy.breakfast_seafood_mode == BreakfastSeafoodMode.CONTEXTUAL


def test_policy_carries_compiled_diet_and_allergens():
    profile = make_profile(
        dietary_preferences=["vegetarian"], dietary_restrictions=["nuts"]
    )
    policy = MealPolicyBuilder.build_meal_policy(profile)

    assert policy.hard.allergens == ["nuts"]
    assert policy.hard.diet_rules == ["vegetarian"]
    assert "chicken" in policy.compiled_diet.tokens
    assert policy.breakfast_seafood_mode == BreakfastSeafoodMode.AVOID


# =============================================================================
# Per-meal split
# =============================================================================

TARGETS = NutritionTarget(kcal=2000, protein=100, carbs=240, fat=80)


def test_split_with_snack():
    split = MealPolicyBuilder.split_targets_per_meal(TARGETS)

    assert split("breakfast") == NutritionTarget(kcal=500, protein=25, carbs=60, fat=20)
    assert split("lunch") == NutritionTarget(kcal=700, protein=35, carbs=84, fat=28)
    assert split(MealSlot.SNACK) == NutritionTarget(kcal=100, protein=5, carbs=12, fat=4)


def test_split_without_snack():
    split = MealPolicyBuilder.split_targets_per_meal(TARGETS, include_snack=False)
    assert split("breakfast").kcal == 600
    assert split("dinner").kcal == 700


def test_unknown_slot_gets_a_quarter():
    split = MealPolicyBuilder.split_targets_per_meal(TARGETS)
    assert split("brunch").kcal == 500
    assert split("LUNCH").kcal == 700
