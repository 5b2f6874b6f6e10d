"""
Tests for the repository classes over an in-memory SQLite database.
"""

from datetime import date, datetime, timezone

from sqlalchemy.orm import Session

from domain.enums import MealSlot, PantryCategory
from domain.models import PantryItemRecord
from domain.schemas.plan_schemas import Meal, MealPlan
from repositories import MealPlanRepository, PantryRepository, ProfileRepository
from test_fixtures import db_session, make_pantry_item, make_profile


def test_profile_round_trip(db_session: Session):
    repo = ProfileRepository(db_session)
    repo.save(make_profile("health"))

    profile = repo.get_profile("raj")
    assert profile.dietary_preferences == ["vegetarian", "hindu"]
    assert profile.health_goals == ["heart_health", "blood_sugar_control"]
    assert repo.get_profile("nobody") is None


def test_profile_save_replaces_fields(db_session: Session):
    repo = ProfileRepository(db_session)
    repo.save(make_profile())
    repo.save(make_profile(weight_kg=75, cuisine_preferences=["greek"]))

    profile = repo.get_profile("sarah")
    assert profile.weight_kg == 75
    assert profile.cuisine_preferences == ["greek"]
    assert len(repo.get_all()) == 1


def test_pantry_available_items(db_session: Session):
    ProfileRepository(db_session).save(make_profile())
    repo = PantryRepository(db_session)
    repo.add_item("sarah", make_pantry_item("p1", "milk", 2, "l", category="dairy", expires_in=2))
    repo.add_item("sarah", make_pantry_item("p2", "eggs", 0))
    repo.add_item("sarah", make_pantry_item("p3", "rice", 1, "kg"))

    items = repo.get_available("sarah")
    assert [i.id for i in items] == ["p1", "p3"]
    assert items[0].category == PantryCategory.DAIRY
    assert items[0].expiration_date == date(2024, 5, 17)
    assert len(repo.get_by_user_id("sarah")) == 3


def test_pantry_unknown_category_is_dropped(db_session: Session):
    ProfileRepository(db_session).save(make_profile())
    db_session.add(
        PantryItemRecord(id="x", user_id="sarah", name="tahini", category="condiments", quantity=1)
    )
    db_session.commit()

    item = PantryRepository(db_session).get_available("sarah")[0]
    assert item.category is None
    assert item.unit == ""


def _plan(plan_date: str, kcal: float, now: datetime) -> MealPlan:
    meal = Meal(id="breakfast_1", meal_type=MealSlot.BREAKFAST, name="Toast", calories=kcal)
    return MealPlan(
        id=f"plan_sarah_{plan_date}",
        user_id="sarah",
        date=plan_date,
        meals=[meal],
        total_calories=kcal,
        created_at=now,
        updated_at=now,
    )


def test_meal_plan_upsert_and_history(db_session: Session):
    ProfileRepository(db_session).save(make_profile())
    repo = MealPlanRepository(db_session)
    now = datetime(2024, 5, 15, tzinfo=timezone.utc)

    repo.upsert(_plan("2024-05-14", 300, now))
    repo.upsert(_plan("2024-05-15", 300, now))
    repo.upsert(_plan("2024-05-15", 450, now))

    stored = repo.get_by_user_and_date("sarah", "2024-05-15")
    assert stored.total_calories == 450
    assert stored.meals[0].meal_type == MealSlot.BREAKFAST
    assert [p.date for p in repo.get_history("sarah")] == ["2024-05-15", "2024-05-14"]
    assert repo.exists("plan_sarah_2024-05-14")
    assert repo.delete("plan_sarah_2024-05-14") is True
    assert repo.get_by_user_and_date("sarah", "2024-05-14") is None
