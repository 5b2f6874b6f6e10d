"""
Profile Repository - Data access layer for user profiles
"""

from typing import Optional
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.mappers import ProfileMapper
from domain.models import ProfileRecord
from domain.schemas.profile_schemas import UserProfile


class ProfileRepository(BaseRepository[ProfileRecord]):
    """Repository for user profile data access"""

    def __init__(self, db: Session):
        super().__init__(db, ProfileRecord)

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        """Get the profile schema for a user, or None if missing"""
        record = self.get_by_id(user_id)
        if record is None:
            return None
        return ProfileMapper.to_profile(record)

    def save(self, profile: UserProfile) -> ProfileRecord:
        """Insert or replace a profile keyed by ``profile.user_id``"""
        values = profile.model_dump()
        record = self.get_by_id(profile.user_id)
        if record is None:
            record = ProfileRecord(**values)
            self.db.add(record)
        else:
            for key, value in values.items():
                setattr(record, key, value)
        return self.commit(record)
