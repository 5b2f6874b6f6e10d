"""Pydantic schemas for user profiles and pantry items."""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.enums import PantryCategory


class UserProfile(BaseModel):
    """Read-only profile snapshot every calculation starts from.

    Biometric fields are optional: the nutrition services fall back to
    fixed defaults instead of rejecting incomplete onboarding data.
    ``activity_level`` and ``gender`` are kept as plain strings so unknown
    values degrade to defaults rather than failing validation.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    user_id: Optional[str] = None
    age: Optional[int] = Field(None, ge=0, le=130)
    gender: Optional[str] = None
    height_cm: Optional[float] = Field(None, ge=0)
    weight_kg: Optional[float] = Field(None, ge=0)
    activity_level: Optional[str] = None
    health_goals: List[str] = []
    dietary_restrictions: List[str] = Field(
        default=[], description="Allergens (gluten, dairy, nuts, ...)"
    )
    dietary_preferences: List[str] = Field(
        default=[], description="Diet and religious rules (vegan, halal, keto, ...)"
    )
    cuisine_preferences: List[str] = Field(
        default=[], description="Preferred cuisines, most preferred first"
    )
    cooking_skill_level: Optional[str] = None
    location: Optional[str] = None
    cultural_background: Optional[str] = None
    cultural_preferences: List[str] = []

    @field_validator(
        "health_goals",
        "dietary_restrictions",
        "dietary_preferences",
        "cuisine_preferences",
        "cultural_preferences",
        mode="before",
    )
    @classmethod
    def none_to_empty(cls, v):
        return [] if v is None else v

    @field_validator("gender", "activity_level", mode="before")
    @classmethod
    def normalize_tag(cls, v):
        if v is None:
            return None
        return str(v).strip().lower() or None


class NutritionalInfo(BaseModel):
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0


class PantryItem(BaseModel):
    """A single pantry row.

    ``category`` accepts any string but only keeps values that name a
    ``PantryCategory``; anything else is dropped so the keyword classifier
    decides instead.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    category: Optional[PantryCategory] = None
    quantity: float = 0
    unit: str = ""
    expiration_date: Optional[date] = None
    nutritional_info: Optional[NutritionalInfo] = None

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, v):
        if v is None or isinstance(v, PantryCategory):
            return v
        value = str(v).strip().lower()
        if value in PantryCategory._value2member_map_:
            return value
        return None

    @field_validator("unit", mode="before")
    @classmethod
    def none_unit(cls, v):
        return v or ""
