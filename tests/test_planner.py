"""
Tests for SmartMealPlanner against a real (in-memory SQLite) database.

Covers pantry plans, the basic fallback plan, load failures, persistence
failures and the plan query helpers.
"""

import time
from datetime import datetime, timezone

import anyio
import pytest
from sqlalchemy.orm import Session

from domain.enums import PlanSource
from repositories import MealPlanRepository, PantryRepository, ProfileRepository
from services.planner_service import (
    FALLBACK_PLAN_MESSAGE,
    PANTRY_PLAN_MESSAGE,
    PLAN_LOAD_FAILED,
    PLAN_NOT_FOUND,
    SmartMealPlanner,
)
from test_fixtures import db_session, full_pantry, make_pantry_item, make_profile

pytestmark = pytest.mark.anyio

NOW = datetime(2024, 5, 15, 8, 0, tzinfo=timezone.utc)
STAMP = int(NOW.timestamp() * 1000)


def seed(db: Session, pantry=None, **profile_overrides):
    profile = make_profile(**profile_overrides)
    ProfileRepository(db).save(profile)
    repo = PantryRepository(db)
    for item in full_pantry() if pantry is None else pantry:
        repo.add_item(profile.user_id, item)
    return profile


def planner_for(db: Session, user_id: str = "sarah", now: datetime = NOW) -> SmartMealPlanner:
    return SmartMealPlanner.from_session(user_id, db, clock=lambda: now)


async def test_pantry_plan(db_session: Session):
    seed(db_session)
    result = await planner_for(db_session).generate_smart_meal_plan("2024-05-15")

    assert result.success is True
    assert result.message == PANTRY_PLAN_MESSAGE
    plan = result.meal_plan
    assert plan.id == "plan_sarah_2024-05-15"
    assert plan.source == PlanSource.PANTRY
    assert [m.meal_type.value for m in plan.meals] == ["breakfast", "lunch", "dinner", "snack"]
    assert [m.pantry_match_score for m in plan.meals] == [85, 80, 75, 90]
    assert plan.meals[0].id == f"breakfast_{STAMP}"
    assert plan.targets.kcal == 2350
    assert result.pantry_analysis.total_combinations == 5


async def test_totals_are_summed_from_meals(db_session: Session):
    seed(db_session)
    plan = (await planner_for(db_session).generate_smart_meal_plan("2024-05-15")).meal_plan

    assert plan.total_calories == sum(m.calories for m in plan.meals) == 1180
    assert plan.total_protein == sum(m.protein for m in plan.meals)
    assert plan.total_carbs == sum(m.carbs for m in plan.meals)
    assert plan.total_fat == sum(m.fat for m in plan.meals)


async def test_meal_tags_follow_ingredients(db_session: Session):
    seed(db_session)
    plan = (await planner_for(db_session).generate_smart_meal_plan("2024-05-15")).meal_plan
    breakfast, lunch = plan.meals[0], plan.meals[1]

    assert breakfast.dietary_tags == ["natural", "vegetarian", "dairy-free"]
    assert lunch.dietary_tags == ["natural", "dairy-free"]
    assert "chicken breast, broccoli" in lunch.description


async def test_fallback_plan_when_pantry_is_thin(db_session: Session):
    seed(db_session, pantry=[make_pantry_item("p1", "banana", 3)])
    result = await planner_for(db_session).generate_smart_meal_plan("2024-05-15")

    assert result.success is True
    assert result.message == FALLBACK_PLAN_MESSAGE
    plan = result.meal_plan
    assert plan.source == PlanSource.FALLBACK
    assert plan.id == "plan_sarah_2024-05-15"
    assert [m.name for m in plan.meals] == ["Simple Oatmeal Bowl", "Grilled Chicken Salad"]
    assert plan.total_calories == 700

    stored = MealPlanRepository(db_session).get_by_user_and_date("sarah", "2024-05-15")
    assert stored is not None
    assert stored.source == PlanSource.FALLBACK


async def test_empty_pantry_uses_fallback(db_session: Session):
    seed(db_session, pantry=[])
    result = await planner_for(db_session).generate_smart_meal_plan("2024-05-15")
    assert result.meal_plan.source == PlanSource.FALLBACK


async def test_zero_quantity_items_are_ignored(db_session: Session):
    pantry = full_pantry()
    pantry[0] = make_pantry_item("p1", "chicken breast", 0)
    seed(db_session, pantry=pantry)

    plan = (await planner_for(db_session).generate_smart_meal_plan("2024-05-15")).meal_plan
    assert [m.meal_type.value for m in plan.meals] == ["breakfast", "snack"]


async def test_diet_filters_apply_to_pantry(db_session: Session):
    seed(db_session, dietary_preferences=["vegetarian"])
    result = await planner_for(db_session).generate_smart_meal_plan("2024-05-15")
    assert all("chicken" not in " ".join(m.ingredients) for m in result.meal_plan.meals)


async def test_missing_profile_returns_failure(db_session: Session):
    result = await planner_for(db_session, "ghost").generate_smart_meal_plan("2024-05-15")

    assert result.success is False
    assert result.meal_plan is None
    assert result.error_code == PLAN_NOT_FOUND
    assert "not found" in result.message.lower()


async def test_load_failure_returns_load_failed(db_session: Session):
    class BrokenProfiles:
        def get_profile(self, user_id):
            raise RuntimeError("connection reset")

    planner = SmartMealPlanner(
        "sarah",
        BrokenProfiles(),
        PantryRepository(db_session),
        MealPlanRepository(db_session),
        clock=lambda: NOW,
    )
    result = await planner.generate_smart_meal_plan("2024-05-15")

    assert result.success is False
    assert result.error_code == PLAN_LOAD_FAILED
    assert result.message == "connection reset"


async def test_repository_calls_do_not_block_event_loop(db_session: Session):
    seed(db_session)
    profiles = ProfileRepository(db_session)

    class SlowProfiles:
        def get_profile(self, user_id):
            time.sleep(0.3)
            return profiles.get_profile(user_id)

    planner = SmartMealPlanner(
        "sarah",
        SlowProfiles(),
        PantryRepository(db_session),
        MealPlanRepository(db_session),
        clock=lambda: NOW,
    )
    gaps = []

    async def heartbeat():
        last = time.monotonic()
        while True:
            await anyio.sleep(0.05)
            now = time.monotonic()
            gaps.append(now - last)
            last = now

    async with anyio.create_task_group() as tg:
        tg.start_soon(heartbeat)
        result = await planner.generate_smart_meal_plan("2024-05-15")
        tg.cancel_scope.cancel()

    assert result.success is True
    assert gaps and max(gaps) < 0.2


async def test_persistence_failure_is_not_fatal(db_session: Session):
    class BrokenPlans:
        def upsert(self, plan):
            raise RuntimeError("disk full")

    seed(db_session)
    planner = SmartMealPlanner(
        "sarah",
        ProfileRepository(db_session),
        PantryRepository(db_session),
        BrokenPlans(),
        clock=lambda: NOW,
    )
    result = await planner.generate_smart_meal_plan("2024-05-15")

    assert result.success is True
    assert result.meal_plan.id == "plan_sarah_2024-05-15"


async def test_regenerating_overwrites_same_day(db_session: Session):
    seed(db_session)
    later = datetime(2024, 5, 15, 18, 30, tzinfo=timezone.utc)
    await planner_for(db_session).generate_smart_meal_plan("2024-05-15")
    await planner_for(db_session, now=later).generate_smart_meal_plan("2024-05-15")

    history = await planner_for(db_session).get_meal_plan_history()
    assert len(history) == 1
    assert history[0].created_at.replace(tzinfo=None) == NOW.replace(tzinfo=None)
    assert history[0].updated_at.replace(tzinfo=None) == later.replace(tzinfo=None)


async def test_default_date_comes_from_clock(db_session: Session):
    seed(db_session)
    result = await planner_for(db_session).generate_smart_meal_plan()
    assert result.meal_plan.date == "2024-05-15"


async def test_current_plan_and_history(db_session: Session):
    seed(db_session)
    planner = planner_for(db_session)
    for day in ("2024-05-13", "2024-05-14", "2024-05-15"):
        await planner.generate_smart_meal_plan(day)

    current = await planner.get_current_meal_plan("2024-05-14")
    assert current.id == "plan_sarah_2024-05-14"
    assert len(current.meals) == 4

    assert await planner.get_current_meal_plan("2024-06-01") is None

    history = await planner.get_meal_plan_history(days=2)
    assert [p.date for p in history] == ["2024-05-15", "2024-05-14"]
