"""
Meal Plan Repository - Data access layer for meal plan operations
"""

from typing import List, Optional
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.mappers import MealPlanMapper
from domain.models import MealPlanRecord
from domain.schemas.plan_schemas import MealPlan


class MealPlanRepository(BaseRepository[MealPlanRecord]):
    """Repository for meal plan data access"""

    def __init__(self, db: Session):
        super().__init__(db, MealPlanRecord)

    def upsert(self, plan: MealPlan) -> MealPlanRecord:
        """Insert or overwrite the plan stored under ``plan.id``"""
        values = MealPlanMapper.to_row(plan)
        record = self.get_by_id(plan.id)
        if record is None:
            record = MealPlanRecord(**values)
            self.db.add(record)
        else:
            # Keep the original creation time when a plan is regenerated
            values.pop("created_at")
            for key, value in values.items():
                setattr(record, key, value)
        return self.commit(record)

    def get_by_user_and_date(self, user_id: str, date: str) -> Optional[MealPlan]:
        record = (
            self.db.query(MealPlanRecord)
            .filter(MealPlanRecord.user_id == user_id, MealPlanRecord.date == date)
            .first()
        )
        return MealPlanMapper.to_schema(record) if record else None

    def get_history(self, user_id: str, limit: int = 7) -> List[MealPlan]:
        """Most recent plans first"""
        records = (
            self.db.query(MealPlanRecord)
            .filter(MealPlanRecord.user_id == user_id)
            .order_by(MealPlanRecord.date.desc())
            .limit(limit)
            .all()
        )
        return [MealPlanMapper.to_schema(r) for r in records]
