from __future__ import annotations

import functools
import logging
from datetime import date, datetime, timezone
from typing import Callable, Dict, List, Optional, Union

import anyio
from sqlalchemy.orm import Session

from app.exceptions import NotFoundError
from domain.enums import MealSlot, PlanSource
from domain.schemas.nutrition_schemas import NutritionTarget
from domain.schemas.plan_schemas import (
    Meal,
    MealCombination,
    MealPlan,
    PantryAnalysis,
    SmartPlanResult,
)
from domain.schemas.profile_schemas import PantryItem, UserProfile
from repositories import MealPlanRepository, PantryRepository, ProfileRepository
from services.nutrition_service import NutritionCalculator
from services.pantry_analyzer import FALLBACK_THRESHOLD, PantryAnalyzer


logger = logging.getLogger("smartpantry.planner")

PANTRY_PLAN_MESSAGE = "Smart meal plan created based on your pantry and preferences"
FALLBACK_PLAN_MESSAGE = "Basic meal plan created with pantry-friendly suggestions"

# SmartPlanResult.error_code values
PLAN_NOT_FOUND = "NOT_FOUND"
PLAN_LOAD_FAILED = "LOAD_FAILED"

# Per-slot presentation of pantry combinations. pantry_match_score values are
# fixed placeholders, not computed from pantry coverage.
SLOT_TEMPLATES: Dict[str, Dict[str, object]] = {
    MealSlot.BREAKFAST.value: {
        "prep_time": 5,
        "cooking_time": 10,
        "difficulty": "easy",
        "score": 85,
        "instructions": ["Prepare ingredients", "Combine and cook as needed", "Serve fresh"],
        "description": "A delicious breakfast using {ingredients} from your pantry",
    },
    MealSlot.LUNCH.value: {
        "prep_time": 10,
        "cooking_time": 20,
        "difficulty": "medium",
        "score": 80,
        "instructions": ["Prep ingredients", "Cook protein and vegetables", "Assemble and serve"],
        "description": "A satisfying lunch featuring {ingredients}",
    },
    MealSlot.DINNER.value: {
        "prep_time": 15,
        "cooking_time": 25,
        "difficulty": "medium",
        "score": 75,
        "instructions": [
            "Prepare all ingredients",
            "Cook protein, grains, and vegetables",
            "Plate and enjoy",
        ],
        "description": "A balanced dinner using your available ingredients",
    },
    MealSlot.SNACK.value: {
        "prep_time": 2,
        "cooking_time": 0,
        "difficulty": "easy",
        "score": 90,
        "instructions": ["Prepare and enjoy"],
        "description": "A healthy snack option",
    },
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def dietary_tags(ingredients: List[str]) -> List[str]:
    """Coarse tags from ingredient names; 'natural' is always present."""
    tags = ["natural"]
    text = " ".join(ingredients).lower()
    if not any(k in text for k in ("meat", "chicken", "fish")):
        tags.append("vegetarian")
    if not any(k in text for k in ("dairy", "milk", "cheese")):
        tags.append("dairy-free")
    return tags


class SmartMealPlanner:
    """
    Planner for one user and one day:
    - loads the profile and the usable pantry (quantity > 0)
    - computes daily targets with NutritionCalculator
    - builds meals from pantry combinations, or a basic plan when fewer
      than FALLBACK_THRESHOLD combinations exist
    - upserts the plan under plan_{user_id}_{date}
    """

    def __init__(
        self,
        user_id: str,
        profiles: ProfileRepository,
        pantry: PantryRepository,
        plans: MealPlanRepository,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.user_id = user_id
        self.profiles = profiles
        self.pantry = pantry
        self.plans = plans
        self.clock = clock or _utcnow

    @classmethod
    def from_session(cls, user_id: str, db: Session, **kwargs) -> "SmartMealPlanner":
        return cls(
            user_id,
            ProfileRepository(db),
            PantryRepository(db),
            MealPlanRepository(db),
            **kwargs,
        )

    # ---------- loading ----------

    def _load_profile(self) -> UserProfile:
        profile = self.profiles.get_profile(self.user_id)
        if profile is None:
            raise NotFoundError(f"Profile for user {self.user_id} not found")
        return profile

    def _load_pantry(self) -> List[PantryItem]:
        return self.pantry.get_available(self.user_id)

    # ---------- assembly ----------

    def plan_id(self, plan_date: str) -> str:
        return f"plan_{self.user_id}_{plan_date}"

    def _meal_from_combination(
        self, slot: str, combo: MealCombination, stamp: int
    ) -> Meal:
        tpl = SLOT_TEMPLATES[slot]
        return Meal(
            id=f"{slot}_{stamp}",
            meal_type=slot,
            name=combo.name,
            description=str(tpl["description"]).format(
                ingredients=", ".join(combo.ingredients)
            ),
            ingredients=list(combo.ingredients),
            instructions=list(tpl["instructions"]),
            calories=combo.calories,
            protein=combo.protein,
            carbs=combo.carbs,
            fat=combo.fat,
            prep_time=tpl["prep_time"],
            cooking_time=tpl["cooking_time"],
            difficulty=tpl["difficulty"],
            cuisine_type="International",
            dietary_tags=dietary_tags(combo.ingredients),
            pantry_match_score=tpl["score"],
        )

    def _meals_from_pantry(self, analysis: PantryAnalysis, stamp: int) -> List[Meal]:
        meals: List[Meal] = []
        for slot in SLOT_TEMPLATES:
            options = analysis.combinations.get(slot) or []
            if options:
                meals.append(self._meal_from_combination(slot, options[0], stamp))
        return meals

    @staticmethod
    def _basic_meals(stamp: int) -> List[Meal]:
        return [
            Meal(
                id=f"basic_breakfast_{stamp}",
                meal_type=MealSlot.BREAKFAST,
                name="Simple Oatmeal Bowl",
                description="A quick and nutritious breakfast option",
                ingredients=["oats", "milk", "banana"],
                instructions=["Cook oats with milk", "Top with banana slices"],
                calories=300,
                protein=10,
                carbs=45,
                fat=8,
                prep_time=5,
                cooking_time=10,
                difficulty="easy",
                dietary_tags=["vegetarian"],
                pantry_match_score=50,
            ),
            Meal(
                id=f"basic_lunch_{stamp}",
                meal_type=MealSlot.LUNCH,
                name="Grilled Chicken Salad",
                description="A protein-rich lunch option",
                ingredients=["chicken breast", "mixed greens", "olive oil"],
                instructions=["Grill chicken", "Toss with greens and dressing"],
                calories=400,
                protein=35,
                carbs=15,
                fat=20,
                prep_time=10,
                cooking_time=15,
                difficulty="medium",
                dietary_tags=["gluten-free"],
                pantry_match_score=60,
            ),
        ]

    def _assemble(
        self,
        plan_date: str,
        meals: List[Meal],
        targets: NutritionTarget,
        source: PlanSource,
        now: datetime,
    ) -> MealPlan:
        return MealPlan(
            id=self.plan_id(plan_date),
            user_id=self.user_id,
            date=plan_date,
            meals=meals,
            total_calories=sum(m.calories for m in meals),
            total_protein=sum(m.protein for m in meals),
            total_carbs=sum(m.carbs for m in meals),
            total_fat=sum(m.fat for m in meals),
            targets=targets,
            source=source,
            created_at=now,
            updated_at=now,
        )

    def _save(self, plan: MealPlan) -> None:
        try:
            self.plans.upsert(plan)
        except Exception as e:
            # The computed plan is still returned to the caller
            logger.error("Failed to persist meal plan %s: %s", plan.id, e)

    # ---------- main ----------

    async def generate_smart_meal_plan(
        self, plan_date: Union[date, str, None] = None
    ) -> SmartPlanResult:
        plan_date = str(plan_date or self.clock().date().isoformat())
        try:
            profile = await anyio.to_thread.run_sync(self._load_profile)
            pantry = await anyio.to_thread.run_sync(self._load_pantry)
        except NotFoundError as e:
            logger.error("Error loading data for user %s: %s", self.user_id, e)
            return SmartPlanResult(
                success=False, message=e.message, error_code=PLAN_NOT_FOUND
            )
        except Exception as e:
            logger.error("Error loading data for user %s: %s", self.user_id, e)
            return SmartPlanResult(
                success=False,
                message=str(e) or "Unknown error occurred",
                error_code=PLAN_LOAD_FAILED,
            )

        targets = NutritionCalculator.calculate_targets(profile).targets
        analysis = PantryAnalyzer.generate_meal_combinations(
            pantry, profile.dietary_preferences, profile.dietary_restrictions
        )
        now = self.clock()
        stamp = int(now.timestamp() * 1000)

        if analysis.total_combinations < FALLBACK_THRESHOLD:
            logger.info(
                "User %s: %d pantry combinations, using basic plan",
                self.user_id,
                analysis.total_combinations,
            )
            plan = self._assemble(
                plan_date, self._basic_meals(stamp), targets, PlanSource.FALLBACK, now
            )
            message = FALLBACK_PLAN_MESSAGE
        else:
            plan = self._assemble(
                plan_date,
                self._meals_from_pantry(analysis, stamp),
                targets,
                PlanSource.PANTRY,
                now,
            )
            message = PANTRY_PLAN_MESSAGE

        await anyio.to_thread.run_sync(self._save, plan)
        logger.info(
            "Generated %s plan %s with %d meals", plan.source.value, plan.id, len(plan.meals)
        )
        return SmartPlanResult(
            success=True, meal_plan=plan, message=message, pantry_analysis=analysis
        )

    # ---------- queries for API ----------

    async def get_current_meal_plan(
        self, plan_date: Union[date, str]
    ) -> Optional[MealPlan]:
        try:
            return await anyio.to_thread.run_sync(
                self.plans.get_by_user_and_date, self.user_id, str(plan_date)
            )
        except Exception as e:
            logger.error("Error loading meal plan for %s on %s: %s", self.user_id, plan_date, e)
            return None

    async def get_meal_plan_history(self, days: int = 7) -> List[MealPlan]:
        try:
            return await anyio.to_thread.run_sync(
                functools.partial(self.plans.get_history, self.user_id, limit=days)
            )
        except Exception as e:
            logger.error("Error loading meal plan history for %s: %s", self.user_id, e)
            return []
