"""
Cultural profile inference and breakfast seafood rules.

Everything here is a pure function of the profile (plus the configured
seafood default), so it can be called from any request without locking.
"""

import logging
import re
from typing import Dict, Iterable, List, Optional

from app.config import settings
from domain.enums import BreakfastSeafoodMode, Region
from domain.schemas.policy_schemas import (
    ConstraintLevel,
    CulturalProfile,
    HierarchicalConstraints,
)
from domain.schemas.profile_schemas import UserProfile

logger = logging.getLogger("smartpantry.cultural")

DEFAULT_CUISINE = "mediterranean"

COASTAL_KEYWORDS = [
    "coast", "beach", "seaside", "ocean", "harbor", "harbour", "bay", "port",
    "island", "istanbul", "izmir", "antalya", "barcelona", "lisbon", "athens",
    "naples", "marseille", "tokyo", "osaka", "busan", "miami", "san francisco",
]
RURAL_KEYWORDS = ["rural", "village", "farm", "countryside", "ranch", "hamlet"]
INLAND_KEYWORDS = ["inland", "interior", "plateau", "mountain", "valley", "anatolia"]

RELIGIOUS_RULES: Dict[str, List[str]] = {
    "halal": ["no_pork", "halal_meat_only", "no_alcohol"],
    "muslim": ["no_pork", "halal_meat_only", "no_alcohol"],
    "kosher": ["no_pork", "no_shellfish", "kosher_certified"],
    "jewish": ["no_pork", "no_shellfish", "kosher_certified"],
    "hindu": ["no_beef", "vegetarian_preferred"],
}

MEAL_TIMING_HINTS: Dict[str, List[str]] = {
    "mediterranean": ["late_dinner", "light_breakfast"],
    "turkish": ["late_dinner", "light_breakfast"],
    "greek": ["late_dinner", "light_breakfast"],
    "italian": ["late_dinner", "light_breakfast"],
    "spanish": ["late_dinner", "light_breakfast"],
    "japanese": ["early_dinner", "balanced_breakfast"],
}

CANONICAL_BREAKFAST: Dict[str, List[str]] = {
    "turkish": [
        "assorted cheeses", "beyaz peynir", "kasar", "olives", "eggs", "sucuk",
        "pastirma", "honey", "jams", "fresh vegetables", "simit", "pide",
        "turkish tea",
    ],
    "japanese": [
        "steamed rice", "miso soup", "grilled fish", "natto",
        "pickled vegetables", "seaweed", "green tea",
    ],
    "american": [
        "eggs", "cheese", "bacon", "toast", "pancakes with syrup", "waffles",
        "avocado toast", "bagels", "coffee", "orange juice",
    ],
    "mediterranean": [
        "yogurt with honey", "fresh fruit", "bread", "pastries", "olive oil",
        "tomatoes", "cheese", "coffee",
    ],
    "indian": ["aloo paratha", "chole", "idli", "dosa", "pongal", "chutneys", "tea"],
    "chinese": [
        "soybean milk", "youtiao", "congee", "baozi", "jian bing", "rice noodles",
    ],
    "middle_eastern": [
        "ful medames", "shakshuka", "labneh", "hummus", "zataar bread",
        "fatayer", "cheese", "olives",
    ],
    "european": [
        "eggs", "sausages", "bread", "pastries", "cold cuts", "cheese",
    ],
}

# {cuisine}_{region} -> (consumption level, preferred types)
REGIONAL_SEAFOOD: Dict[str, Dict[str, object]] = {
    "japanese_coastal": {
        "level": "very_high",
        "preferred_types": ["salmon", "tuna", "mackerel", "sea bream", "eel"],
    },
    "mediterranean_coastal": {
        "level": "high",
        "preferred_types": ["sardines", "sea bass", "anchovies", "shellfish"],
    },
    "turkish_coastal": {
        "level": "moderate",
        "preferred_types": ["anchovy", "sardine", "mackerel", "sea bream", "sea bass"],
    },
    "chinese_coastal": {
        "level": "high",
        "preferred_types": ["freshwater fish", "shellfish", "diverse marine species"],
    },
    "indian_coastal": {
        "level": "high",
        "preferred_types": ["local coastal varieties", "freshwater fish"],
    },
    "turkish_inland": {
        "level": "low",
        "preferred_types": ["preserved fish", "freshwater fish"],
    },
    "american_inland": {
        "level": "low",
        "preferred_types": ["canned fish", "frozen varieties"],
    },
}

# Cuisines where fish or seafood at breakfast is customary
BREAKFAST_SEAFOOD_CUISINES = {"japanese", "korean", "chinese", "vietnamese", "thai", "russian"}

PLANT_BASED_DIETS = {"vegan", "vegetarian"}

SEAFOOD_PATTERN = re.compile(
    r"(salmon|tuna|fish|cod|anchovy|mackerel|sardine|trout|prawn|shrimp|crab|"
    r"lobster|oyster|clam|mussel|scallop)",
    re.IGNORECASE,
)


def _lower_all(values: Optional[Iterable[str]]) -> List[str]:
    return [str(v).strip().lower() for v in (values or []) if v]


def _dedupe(values: Iterable[str]) -> List[str]:
    seen: List[str] = []
    for v in values:
        if v not in seen:
            seen.append(v)
    return seen


class CulturalProfileBuilder:
    @staticmethod
    def detect_region(location: Optional[str]) -> Region:
        text = (location or "").lower()
        if any(k in text for k in COASTAL_KEYWORDS):
            return Region.COASTAL
        if any(k in text for k in RURAL_KEYWORDS):
            return Region.RURAL
        if any(k in text for k in INLAND_KEYWORDS):
            return Region.INLAND
        return Region.URBAN

    @staticmethod
    def build_cultural_profile(profile: UserProfile) -> CulturalProfile:
        background = (profile.cultural_background or "").strip().lower()
        cuisines = _lower_all(profile.cuisine_preferences)
        primary = background or (cuisines[0] if cuisines else DEFAULT_CUISINE)

        sources = _lower_all(profile.dietary_preferences)
        if background:
            sources.append(background)
        religious: List[str] = []
        for tag in sources:
            religious.extend(RELIGIOUS_RULES.get(tag, []))

        preferences = _lower_all(profile.cultural_preferences)
        preferences.extend(MEAL_TIMING_HINTS.get(primary, []))

        return CulturalProfile(
            primary_cuisine=primary,
            region=CulturalProfileBuilder.detect_region(profile.location),
            religious_restrictions=_dedupe(religious),
            cultural_preferences=_dedupe(preferences),
        )

    @staticmethod
    def build_hierarchical_constraints(
        cultural: CulturalProfile, profile: UserProfile
    ) -> HierarchicalConstraints:
        """
        Four precedence-ordered levels: religious, cultural, regional, personal.

        Levels are only collected here. Consumers decide what happens when a
        lower level contradicts a higher one.
        """
        cuisine = cultural.primary_cuisine
        seafood = REGIONAL_SEAFOOD.get(f"{cuisine}_{cultural.region.value}")
        regional_rules: List[str] = []
        if seafood:
            regional_rules.append(f"seafood_{seafood['level']}")
            regional_rules.extend(seafood["preferred_types"])

        personal = _dedupe(
            _lower_all(profile.dietary_preferences)
            + _lower_all(profile.cultural_preferences)
        )

        return HierarchicalConstraints(
            religious=ConstraintLevel(
                level=1, name="religious", rules=list(cultural.religious_restrictions)
            ),
            cultural=ConstraintLevel(
                level=2, name="cultural", rules=list(CANONICAL_BREAKFAST.get(cuisine, []))
            ),
            regional=ConstraintLevel(level=3, name="regional", rules=regional_rules),
            personal=ConstraintLevel(level=4, name="personal", rules=personal),
        )


# ==================== Breakfast seafood rules ====================


def breakfast_seafood_allow_list(cuisines: Optional[Iterable[str]]) -> List[str]:
    """The subset of ``cuisines`` where seafood at breakfast is customary."""
    return [c for c in _lower_all(cuisines) if c in BREAKFAST_SEAFOOD_CUISINES]


def _plant_based(diet_rules: Optional[Iterable[str]]) -> bool:
    return any(r in PLANT_BASED_DIETS for r in _lower_all(diet_rules))


def breakfast_seafood_mode(
    cuisines: Optional[Iterable[str]] = None,
    diet_rules: Optional[Iterable[str]] = None,
    default: Optional[str] = None,
) -> BreakfastSeafoodMode:
    if _plant_based(diet_rules):
        return BreakfastSeafoodMode.AVOID

    mode = (default or settings.breakfast_seafood_default).strip().lower()
    if mode in (BreakfastSeafoodMode.ALLOW.value, BreakfastSeafoodMode.AVOID.value):
        return BreakfastSeafoodMode(mode)

    if breakfast_seafood_allow_list(cuisines):
        return BreakfastSeafoodMode.CONTEXTUAL
    return BreakfastSeafoodMode.AVOID


def breakfast_seafood_allowed(
    primary_cuisine: str,
    mode: BreakfastSeafoodMode,
    cuisines: Optional[Iterable[str]] = None,
    diet_rules: Optional[Iterable[str]] = None,
) -> bool:
    if _plant_based(diet_rules):
        return False
    if mode == BreakfastSeafoodMode.ALLOW:
        return True
    if mode == BreakfastSeafoodMode.AVOID:
        return False
    return (primary_cuisine or "").lower() in breakfast_seafood_allow_list(cuisines)


def includes_seafood(ingredients: Optional[Iterable[object]]) -> bool:
    """True when any ingredient name mentions fish or shellfish.

    Accepts plain strings or objects/dicts with a ``name``.
    """
    for item in ingredients or []:
        if isinstance(item, dict):
            name = item.get("name", "")
        else:
            name = getattr(item, "name", item)
        if SEAFOOD_PATTERN.search(str(name or "")):
            return True
    return False
