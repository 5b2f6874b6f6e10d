"""
Profile, pantry and plan mappers.
Handles transformation between ORM models and the schemas the services use.
"""

from typing import Any, Dict

from domain.models import MealPlanRecord, PantryItemRecord, ProfileRecord
from domain.schemas.plan_schemas import MealPlan
from domain.schemas.profile_schemas import PantryItem, UserProfile


class ProfileMapper:
    """Mapper for profile and pantry rows."""

    @staticmethod
    def to_profile(record: ProfileRecord) -> UserProfile:
        """
        Convert a ProfileRecord row to the immutable UserProfile schema.

        Args:
            record: ProfileRecord ORM instance

        Returns:
            UserProfile with JSON list columns unpacked (NULL becomes [])
        """
        return UserProfile.model_validate(record)

    @staticmethod
    def to_pantry_item(record: PantryItemRecord) -> PantryItem:
        return PantryItem.model_validate(record)


class MealPlanMapper:
    """Mapper for persisted meal plans."""

    @staticmethod
    def to_row(plan: MealPlan) -> Dict[str, Any]:
        """Column values for a MealPlanRecord, JSON columns as plain data."""
        data = plan.model_dump(mode="json")
        return {
            "id": plan.id,
            "user_id": plan.user_id,
            "date": plan.date,
            "meals": data["meals"],
            "total_calories": plan.total_calories,
            "total_protein": plan.total_protein,
            "total_carbs": plan.total_carbs,
            "total_fat": plan.total_fat,
            "targets": data["targets"],
            "source": data["source"],
            "created_at": plan.created_at,
            "updated_at": plan.updated_at,
        }

    @staticmethod
    def to_schema(record: MealPlanRecord) -> MealPlan:
        return MealPlan(
            id=record.id,
            user_id=record.user_id,
            date=record.date,
            meals=record.meals or [],
            total_calories=record.total_calories or 0,
            total_protein=record.total_protein or 0,
            total_carbs=record.total_carbs or 0,
            total_fat=record.total_fat or 0,
            targets=record.targets,
            source=record.source or "pantry",
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
