"""Tests for UserContextAnalyzer."""

from services.user_context_service import UserContextAnalyzer
from test_fixtures import make_profile


def test_health_profile_matches_nutrition_calculator():
    health = UserContextAnalyzer.analyze_health_profile(make_profile())

    assert health.calorie_range.min == 2111
    assert health.calorie_range.max == 2580
    assert (health.macro_targets.protein, health.macro_targets.carbs, health.macro_targets.fat) == (
        206,
        206,
        78,
    )
    assert health.health_priorities == ["calorie_deficit", "high_protein"]
    assert health.risk_factors == []


def test_priorities_and_risks_are_deduplicated():
    health = UserContextAnalyzer.analyze_health_profile(make_profile("health"))

    assert health.health_priorities == ["omega3", "low_sodium", "fiber_rich", "low_glycemic"]
    assert health.risk_factors == ["high_sugar", "refined_carbs"]


def test_nutritional_needs_distribution():
    context = UserContextAnalyzer.analyze_user(make_profile())
    needs = context.nutritional_needs

    assert needs.daily_calories == 2346
    assert needs.meal_distribution["breakfast"] == 704
    assert needs.meal_distribution["lunch"] == 938
    assert needs.nutrient_focus == ["calorie_deficit", "high_protein"]


def test_cultural_restrictions_halal_checked_before_kosher():
    profile = make_profile(dietary_preferences=["kosher", "halal"])
    cultural = UserContextAnalyzer.analyze_cultural_profile(profile)
    assert cultural.cultural_restrictions == ["no_pork", "no_alcohol"]


def test_spice_and_authenticity():
    spicy = UserContextAnalyzer.analyze_cultural_profile(
        make_profile(cuisine_preferences=["Indian", "thai", "japanese"])
    )
    assert spicy.spice_preference == "spicy"
    assert spicy.authenticity_level == "modern"

    mild = UserContextAnalyzer.analyze_cultural_profile(
        make_profile(cuisine_preferences=["japanese"])
    )
    assert mild.spice_preference == "mild"
    assert mild.authenticity_level == "traditional"

    fusion = UserContextAnalyzer.analyze_cultural_profile(
        make_profile(cuisine_preferences=["a", "b", "c", "d"])
    )
    assert fusion.spice_preference == "medium"
    assert fusion.authenticity_level == "fusion"


def test_preferences():
    athlete = UserContextAnalyzer.analyze_preferences(make_profile("athlete"))
    assert athlete.skill_level == "intermediate"
    assert athlete.time_constraints == "quick"
    assert athlete.adventurousness == "conservative"

    explorer = UserContextAnalyzer.analyze_preferences(
        make_profile(cuisine_preferences=["a", "b", "c", "d", "e"])
    )
    assert explorer.adventurousness == "adventurous"
    assert explorer.skill_level == "beginner"
