"""
Pantry Repository - Data access layer for pantry operations
"""

from typing import List
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.mappers import ProfileMapper
from domain.models import PantryItemRecord
from domain.schemas.profile_schemas import PantryItem


class PantryRepository(BaseRepository[PantryItemRecord]):
    """Repository for pantry item data access"""

    def __init__(self, db: Session):
        super().__init__(db, PantryItemRecord)

    def get_by_user_id(self, user_id: str) -> List[PantryItemRecord]:
        """Get all pantry rows for a user"""
        return (
            self.db.query(PantryItemRecord)
            .filter(PantryItemRecord.user_id == user_id)
            .all()
        )

    def get_available(self, user_id: str) -> List[PantryItem]:
        """Pantry items with quantity > 0, oldest first"""
        rows = (
            self.db.query(PantryItemRecord)
            .filter(
                PantryItemRecord.user_id == user_id,
                PantryItemRecord.quantity > 0,
            )
            .order_by(PantryItemRecord.created_at, PantryItemRecord.id)
            .all()
        )
        return [ProfileMapper.to_pantry_item(r) for r in rows]

    def add_item(self, user_id: str, item: PantryItem) -> PantryItemRecord:
        values = item.model_dump(mode="json", exclude={"expiration_date"})
        record = PantryItemRecord(
            **values, user_id=user_id, expiration_date=item.expiration_date
        )
        return self.create(record)
