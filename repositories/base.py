"""
Base repository for the SQL store.
Services receive repositories, never sessions, so the planner can be tested
against in-memory SQLite or fakes.
"""

from typing import Generic, TypeVar, Optional, List, Type
from sqlalchemy.orm import Session
from abc import ABC

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType], ABC):
    """
    Primary-key CRUD shared by the profile, pantry and meal plan repositories.
    Writes commit immediately; a failed commit is rolled back and re-raised.
    """

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def commit(self, entity: Optional[ModelType] = None) -> Optional[ModelType]:
        """Commit the session and refresh ``entity`` from the database"""
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        if entity is not None:
            self.db.refresh(entity)
        return entity

    def get_by_id(self, entity_id: str) -> Optional[ModelType]:
        return self.db.get(self.model, entity_id)

    def get_all(self, skip: int = 0, limit: int = 100) -> List[ModelType]:
        return self.db.query(self.model).offset(skip).limit(limit).all()

    def create(self, entity: ModelType) -> ModelType:
        self.db.add(entity)
        return self.commit(entity)

    def delete(self, entity_id: str) -> bool:
        entity = self.get_by_id(entity_id)
        if entity is None:
            return False
        self.db.delete(entity)
        self.commit()
        return True

    def exists(self, entity_id: str) -> bool:
        return self.get_by_id(entity_id) is not None
