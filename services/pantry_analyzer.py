"""
Pantry analysis: keyword classification, allergy/diet filtering, meal
combination templates and stock-based "use first" recommendations.

The keyword matching is a best-effort substring heuristic. It lives in
``classify_pantry_item`` so callers never depend on how a category is found.
"""

import logging
from datetime import date
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from domain.enums import MealSlot, PantryCategory
from domain.schemas.plan_schemas import (
    MealCombination,
    PantryAnalysis,
    StockRecommendations,
)
from domain.schemas.profile_schemas import PantryItem

logger = logging.getLogger("smartpantry.pantry")

# Fewer combinations than this and the planner uses the fallback plan
FALLBACK_THRESHOLD = 3

EXPIRY_WINDOW_DAYS = 3
LOW_STOCK_QUANTITY = 2

# Checked in order; the first category with a matching keyword wins
CATEGORY_KEYWORDS: List[Tuple[PantryCategory, List[str]]] = [
    (
        PantryCategory.PROTEINS,
        ["chicken", "beef", "fish", "tofu", "eggs", "turkey", "salmon", "tuna",
         "lentils", "beans", "quinoa"],
    ),
    (
        PantryCategory.VEGETABLES,
        ["broccoli", "spinach", "tomato", "carrot", "pepper", "onion", "lettuce",
         "cucumber", "potato", "garlic", "ginger"],
    ),
    (
        PantryCategory.FRUITS,
        ["apple", "banana", "orange", "berry", "grape", "mango", "avocado",
         "lemon", "lime"],
    ),
    (
        PantryCategory.GRAINS,
        ["rice", "pasta", "bread", "oats", "wheat", "quinoa", "barley", "couscous"],
    ),
    (PantryCategory.DAIRY, ["milk", "cheese", "yogurt", "butter", "cream"]),
    (PantryCategory.SPICES, ["salt", "pepper", "spice", "herb", "oregano", "basil"]),
    (PantryCategory.OILS, ["oil", "olive", "coconut"]),
]

ALLERGEN_KEYWORDS: Dict[str, List[str]] = {
    "gluten": ["wheat", "bread", "pasta", "barley", "rye"],
    "dairy": ["milk", "cheese", "yogurt", "butter", "cream"],
    "nuts": ["peanut", "almond", "walnut", "cashew", "pecan"],
    "eggs": ["egg", "omelet", "quiche"],
    "soy": ["tofu", "soy", "edamame"],
    "fish": ["fish", "salmon", "tuna", "seafood"],
    "shellfish": ["shrimp", "crab", "lobster", "shellfish"],
}

MEAT_KEYWORDS = ["chicken", "beef", "pork", "fish", "turkey", "lamb", "salmon", "tuna"]
ANIMAL_KEYWORDS = [
    "meat", "chicken", "beef", "fish", "milk", "cheese", "yogurt", "eggs", "butter",
]
KETO_EXCLUDED = ["rice", "bread", "pasta", "potato", "sugar", "banana", "apple"]
PALEO_EXCLUDED = ["bread", "pasta", "rice", "beans", "lentils", "dairy", "cheese"]
LOW_CARB_EXCLUDED = ["rice", "pasta", "bread", "potato", "sugar", "honey"]


def _mentions(name: str, keywords: Iterable[str]) -> bool:
    lowered = (name or "").lower()
    return any(k in lowered for k in keywords)


def classify_pantry_item(
    name: str, category: Optional[PantryCategory] = None
) -> PantryCategory:
    """
    Category for a pantry item name.

    Keyword lists are tried in a fixed order. With no keyword hit the
    preset ``category`` is kept if it names a known bucket, otherwise the
    item lands in ``others``.
    """
    for bucket, keywords in CATEGORY_KEYWORDS:
        if _mentions(name, keywords):
            return bucket
    if category is None:
        return PantryCategory.OTHERS
    try:
        return PantryCategory(category)
    except ValueError:
        return PantryCategory.OTHERS


DIET_FILTERS: Dict[str, Callable[[str], bool]] = {
    "vegetarian": lambda name: not _mentions(name, MEAT_KEYWORDS),
    "vegan": lambda name: not _mentions(name, ANIMAL_KEYWORDS),
    "keto": lambda name: not _mentions(name, KETO_EXCLUDED),
    "paleo": lambda name: not _mentions(name, PALEO_EXCLUDED),
    "low-carb": lambda name: not _mentions(name, LOW_CARB_EXCLUDED),
    "low_carb": lambda name: not _mentions(name, LOW_CARB_EXCLUDED),
}


def _first_names(*buckets: List[PantryItem]) -> List[str]:
    return [bucket[0].name for bucket in buckets]


class PantryAnalyzer:
    @staticmethod
    def categorize_pantry_items(
        items: Sequence[PantryItem],
    ) -> Dict[str, List[PantryItem]]:
        categories: Dict[str, List[PantryItem]] = {c.value: [] for c in PantryCategory}
        for item in items:
            bucket = classify_pantry_item(item.name, item.category)
            categories[bucket.value].append(item)
        return categories

    @staticmethod
    def filter_by_allergies(
        items: Sequence[PantryItem], allergies: Optional[Iterable[str]]
    ) -> List[PantryItem]:
        """Drop items whose name contains a keyword of any listed allergen."""
        keyword_lists = [
            ALLERGEN_KEYWORDS[a.lower()]
            for a in (allergies or [])
            if a and a.lower() in ALLERGEN_KEYWORDS
        ]
        return [
            item
            for item in items
            if not any(_mentions(item.name, kws) for kws in keyword_lists)
        ]

    @staticmethod
    def filter_by_dietary_preferences(
        items: Sequence[PantryItem], preferences: Optional[Iterable[str]]
    ) -> List[PantryItem]:
        filtered = list(items)
        for pref in preferences or []:
            keep = DIET_FILTERS.get((pref or "").lower())
            if keep:
                filtered = [item for item in filtered if keep(item.name)]
        return filtered

    @staticmethod
    def generate_meal_combinations(
        items: Sequence[PantryItem],
        dietary_preferences: Optional[Iterable[str]] = None,
        allergies: Optional[Iterable[str]] = None,
    ) -> PantryAnalysis:
        available = PantryAnalyzer.filter_by_allergies(
            PantryAnalyzer.filter_by_dietary_preferences(items, dietary_preferences),
            allergies,
        )
        categories = PantryAnalyzer.categorize_pantry_items(available)

        proteins = categories[PantryCategory.PROTEINS.value]
        vegetables = categories[PantryCategory.VEGETABLES.value]
        fruits = categories[PantryCategory.FRUITS.value]
        grains = categories[PantryCategory.GRAINS.value]
        dairy = categories[PantryCategory.DAIRY.value]

        breakfast: List[MealCombination] = []
        if dairy and fruits:
            breakfast.append(
                MealCombination(
                    name="Yogurt & Fruit Bowl",
                    ingredients=_first_names(dairy, fruits),
                    calories=250, protein=15, carbs=30, fat=8,
                )
            )
        if grains and fruits:
            breakfast.append(
                MealCombination(
                    name="Oatmeal with Berries",
                    ingredients=_first_names(grains, fruits),
                    calories=280, protein=8, carbs=45, fat=6,
                )
            )

        lunch: List[MealCombination] = []
        if proteins and vegetables:
            lunch.append(
                MealCombination(
                    name="Grilled Protein with Vegetables",
                    ingredients=_first_names(proteins, vegetables),
                    calories=400, protein=35, carbs=25, fat=12,
                )
            )

        dinner: List[MealCombination] = []
        if proteins and grains and vegetables:
            dinner.append(
                MealCombination(
                    name="Balanced Protein Bowl",
                    ingredients=_first_names(proteins, grains, vegetables),
                    calories=450, protein=30, carbs=40, fat=15,
                )
            )

        snack: List[MealCombination] = []
        if fruits:
            snack.append(
                MealCombination(
                    name="Fresh Fruit",
                    ingredients=_first_names(fruits),
                    calories=80, protein=1, carbs=20, fat=0,
                )
            )

        combinations = {
            MealSlot.BREAKFAST.value: breakfast,
            MealSlot.LUNCH.value: lunch,
            MealSlot.DINNER.value: dinner,
            MealSlot.SNACK.value: snack,
        }
        total = sum(len(c) for c in combinations.values())
        logger.debug(
            "Pantry analysis: %d/%d items usable, %d combinations",
            len(available),
            len(items),
            total,
        )
        return PantryAnalysis(
            combinations=combinations,
            available_ingredients=categories,
            total_combinations=total,
        )

    @staticmethod
    def get_stock_based_recommendations(
        items: Sequence[PantryItem], today: Optional[date] = None
    ) -> StockRecommendations:
        """
        Items to use first: expiring within three days (already expired
        included) followed by low-stock items. An item in both lists
        appears twice in ``use_first``.
        """
        today = today or date.today()
        expiring = [
            item
            for item in items
            if item.expiration_date is not None
            and (item.expiration_date - today).days <= EXPIRY_WINDOW_DAYS
        ]
        low_stock = [item for item in items if item.quantity <= LOW_STOCK_QUANTITY]
        return StockRecommendations(
            expiring_soon=expiring,
            low_stock=low_stock,
            use_first=expiring + low_stock,
        )
