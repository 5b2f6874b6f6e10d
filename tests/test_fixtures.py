"""
Shared test fixtures and utilities for the SmartPantry test suite.

Factories for profiles and pantry items, an in-memory SQLite session with
the real schema, and a TestClient wired to that session.
"""

from datetime import date, timedelta
from typing import Generator, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import domain.models as db_models
from api.dependencies import get_db
from domain.schemas.profile_schemas import PantryItem, UserProfile
from main import app

TODAY = date(2024, 5, 15)

# Realistic default user profiles
REALISTIC_PROFILES = {
    # The reference scenario: BMR 1880, TDEE 2914, target 2480 kcal
    "default": dict(
        user_id="sarah",
        age=30,
        gender="male",
        height_cm=180,
        weight_kg=80,
        activity_level="moderately_active",
        health_goals=["weight_loss"],
    ),
    "athlete": dict(
        user_id="michael",
        age=25,
        gender="male",
        height_cm=185,
        weight_kg=85,
        activity_level="very_active",
        health_goals=["muscle_gain"],
        cuisine_preferences=["japanese", "american"],
        cooking_skill_level="intermediate",
        location="Seattle coast",
    ),
    "health": dict(
        user_id="raj",
        age=52,
        gender="male",
        height_cm=172,
        weight_kg=88,
        activity_level="lightly_active",
        health_goals=["heart_health", "blood_sugar_control"],
        dietary_preferences=["vegetarian", "hindu"],
        cuisine_preferences=["indian"],
        cultural_background="Hindu",
    ),
}


def make_profile(profile_type: str = "default", **overrides) -> UserProfile:
    data = dict(REALISTIC_PROFILES[profile_type])
    data.update(overrides)
    return UserProfile(**data)


def make_pantry_item(
    item_id: str,
    name: str,
    quantity: float = 5,
    unit: str = "pcs",
    category: Optional[str] = None,
    expires_in: Optional[int] = None,
) -> PantryItem:
    return PantryItem(
        id=item_id,
        name=name,
        quantity=quantity,
        unit=unit,
        category=category,
        expiration_date=TODAY + timedelta(days=expires_in) if expires_in is not None else None,
    )


def full_pantry():
    """Enough variety for every combination template (5 combinations, two of them breakfasts)."""
    return [
        make_pantry_item("p1", "chicken breast", 3, "pcs"),
        make_pantry_item("p2", "broccoli", 2, "heads"),
        make_pantry_item("p3", "brown rice", 1, "kg"),
        make_pantry_item("p4", "greek yogurt", 4, "cups"),
        make_pantry_item("p5", "banana", 6, "pcs"),
    ]


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """
    Fresh in-memory SQLite database per test.

    StaticPool keeps one connection so every session (and the TestClient's
    worker threads) sees the same database.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    db_models.init_database(bind=engine)
    TestingSession = sessionmaker(bind=engine, autoflush=False)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def client(db_session: Session, monkeypatch) -> Generator[TestClient, None, None]:
    """TestClient whose routes use ``db_session``; startup DDL is skipped."""
    monkeypatch.setattr(db_models, "init_database", lambda *a, **k: None)
    app.dependency_overrides[get_db] = lambda: db_session
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
