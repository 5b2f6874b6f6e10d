"""
Domain enums for SmartPantry application.
Contains all enumeration types used across the domain models.
"""

import enum


class Gender(str, enum.Enum):
    """Biological sex used by the BMR equations"""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(str, enum.Enum):
    """Physical activity levels"""

    SEDENTARY = "sedentary"
    LIGHTLY_ACTIVE = "lightly_active"
    MODERATELY_ACTIVE = "moderately_active"
    VERY_ACTIVE = "very_active"
    EXTRA_ACTIVE = "extra_active"


class GoalType(str, enum.Enum):
    """Health goal tags with a dedicated rule somewhere in the engine"""

    WEIGHT_LOSS = "weight_loss"
    MUSCLE_GAIN = "muscle_gain"
    MAINTENANCE = "maintenance"
    HEART_HEALTH = "heart_health"
    BLOOD_SUGAR_CONTROL = "blood_sugar_control"


class MealSlot(str, enum.Enum):
    """Meal slots of a single day"""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class PantryCategory(str, enum.Enum):
    """Pantry buckets used for meal combination templates"""

    PROTEINS = "proteins"
    VEGETABLES = "vegetables"
    FRUITS = "fruits"
    GRAINS = "grains"
    DAIRY = "dairy"
    SPICES = "spices"
    OILS = "oils"
    OTHERS = "others"


class Region(str, enum.Enum):
    """Coarse living region inferred from a free-text location"""

    COASTAL = "coastal"
    INLAND = "inland"
    URBAN = "urban"
    RURAL = "rural"


class BreakfastSeafoodMode(str, enum.Enum):
    """Whether fish/seafood may be suggested at breakfast"""

    ALLOW = "allow"
    AVOID = "avoid"
    CONTEXTUAL = "contextual"


class ApiProvider(str, enum.Enum):
    """Supported recipe API providers"""

    SPOONACULAR = "spoonacular"
    THEMEALDB = "themealdb"


class PlanSource(str, enum.Enum):
    """How a meal plan was assembled"""

    PANTRY = "pantry"
    FALLBACK = "fallback"
