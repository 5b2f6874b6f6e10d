"""
Pantry inventory model.
"""

from sqlalchemy import (
    Column,
    Text,
    TIMESTAMP,
    ForeignKey,
    Float,
    Date,
    JSON,
    Index,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base


class PantryItemRecord(Base):
    """User pantry items (available ingredients)"""

    __tablename__ = "pantry_item"

    id = Column(Text, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(
        Text,
        ForeignKey("user_profile.user_id", ondelete="CASCADE"),
        nullable=False,
    )
    name = Column(Text, nullable=False)
    category = Column(Text)
    quantity = Column(Float, nullable=False, default=0)
    unit = Column(Text)
    expiration_date = Column(Date)
    nutritional_info = Column(JSON)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    profile = relationship("ProfileRecord", back_populates="pantry_items")

    __table_args__ = (Index("ix_pantry_item_user", "user_id"),)
