"""
Cuisine identification strategies used by the meal agent.

``CulturalIntelligenceProvider`` is the seam: the agent only talks to the
interface, so a model-backed classifier can replace the keyword one without
touching prompt code.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence

logger = logging.getLogger("smartpantry.cultural_ai")


@dataclass
class AuthenticityReport:
    authenticity_score: int = 0
    authentic_elements: List[str] = field(default_factory=list)
    missing_elements: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class CuisineMarkers:
    ingredients: Sequence[str]
    dishes: Sequence[str]
    methods: Sequence[str]
    spices: Sequence[str]

    def all(self) -> List[str]:
        return [*self.ingredients, *self.dishes, *self.methods, *self.spices]


CUISINE_MARKERS: Dict[str, CuisineMarkers] = {
    "turkish": CuisineMarkers(
        ingredients=["sumac", "bulgur", "yogurt", "cumin", "mint", "pepper paste",
                     "tahini", "beyaz peynir", "kasar", "olives", "pomegranate molasses",
                     "turkish tea", "simit", "pide"],
        dishes=["menemen", "börek", "dolma", "kebab", "pilaki", "cacık", "meze",
                "baklava", "turkish delight"],
        methods=["grilling (izgara)", "stewing (güveç)",
                 "olive oil cooking (zeytinyağlı)", "fermentation"],
        spices=["sumac", "red pepper flakes (pul biber)", "cumin (kimyon)",
                "allspice", "cinnamon", "mint"],
    ),
    "japanese": CuisineMarkers(
        ingredients=["miso", "soy sauce", "mirin", "dashi", "nori", "wasabi", "ginger",
                     "rice", "sake", "miso paste", "katsuobushi", "kombu", "natto",
                     "pickled vegetables"],
        dishes=["sushi", "tempura", "ramen", "donburi", "yakitori", "udon", "soba",
                "onigiri", "miso soup"],
        methods=["steaming (mushimono)", "grilling (yakimono)", "raw preparation",
                 "light frying (tempura)", "simmering (nimono)", "fermentation"],
        spices=["ginger", "wasabi", "shichimi", "sesame"],
    ),
    "american": CuisineMarkers(
        ingredients=["bbq sauce", "ranch", "cheddar", "bacon", "cornbread",
                     "maple syrup", "hot sauce", "peanut butter", "corn", "potatoes",
                     "beef", "chicken"],
        dishes=["burger", "bbq ribs", "mac and cheese", "fried chicken", "pancakes",
                "apple pie", "coleslaw", "chili", "sandwich"],
        methods=["grilling", "barbecuing", "deep frying", "roasting", "baking",
                 "slow cooking"],
        spices=["black pepper", "garlic powder", "paprika", "cayenne",
                "barbecue spice blends"],
    ),
    "mediterranean": CuisineMarkers(
        ingredients=["olive oil", "oregano", "feta", "lemon", "tomatoes", "basil",
                     "garlic", "capers", "pine nuts", "anchovies", "olives",
                     "fresh herbs"],
        dishes=["greek salad", "paella", "pasta", "risotto", "pizza", "gazpacho",
                "ratatouille", "tapenade"],
        methods=["grilling", "roasting", "sautéing with olive oil", "steaming",
                 "light preparation"],
        spices=["oregano", "basil", "thyme", "rosemary", "parsley", "mint",
                "black pepper"],
    ),
    "indian": CuisineMarkers(
        ingredients=["turmeric", "cumin", "coriander", "garam masala", "curry leaves",
                     "coconut", "rice", "lentils", "chickpeas", "yogurt", "ghee",
                     "tamarind"],
        dishes=["curry", "biryani", "dal", "chapati", "dosa", "idli", "samosa",
                "tandoori", "raita"],
        methods=["tandoor cooking", "dum (slow cooking)", "tempering (tadka)",
                 "steaming", "deep frying"],
        spices=["turmeric", "cumin", "coriander", "cardamom", "cinnamon", "cloves",
                "mustard seeds", "curry powder", "chili powder", "garam masala"],
    ),
    "chinese": CuisineMarkers(
        ingredients=["soy sauce", "ginger", "garlic", "scallions", "sesame oil",
                     "rice wine", "star anise", "sichuan peppercorns",
                     "black bean sauce", "oyster sauce"],
        dishes=["stir fry", "fried rice", "dim sum", "hot pot", "peking duck",
                "kung pao", "sweet and sour", "congee", "dumplings"],
        methods=["stir-frying (wok)", "steaming", "braising", "deep frying", "smoking",
                 "red cooking"],
        spices=["ginger", "star anise", "sichuan peppercorns", "five-spice powder",
                "white pepper"],
    ),
    "middle_eastern": CuisineMarkers(
        ingredients=["tahini", "sumac", "za'atar", "pomegranate molasses", "bulgur",
                     "chickpeas", "lamb", "dates", "rose water", "orange blossom water"],
        dishes=["hummus", "falafel", "tabbouleh", "kebab", "shawarma", "pilaf",
                "baklava", "fattoush"],
        methods=["grilling (kebab)", "stewing", "slow roasting", "frying",
                 "mezze preparation"],
        spices=["cumin", "sumac", "baharat", "cardamom", "cinnamon", "allspice",
                "turmeric"],
    ),
    "european": CuisineMarkers(
        ingredients=["butter", "cream", "wine", "herbs", "potatoes", "bread",
                     "cheese varieties", "cold cuts", "mushrooms", "cabbage"],
        dishes=["pasta", "risotto", "coq au vin", "schnitzel", "paella",
                "fish and chips", "stew", "soup"],
        methods=["sautéing", "braising", "roasting", "baking", "poaching",
                 "sauce making"],
        spices=["herbs (thyme, rosemary)", "black pepper", "paprika", "bay leaves",
                "nutmeg"],
    ),
}


def _field(meal: Any, name: str, default: Any = None) -> Any:
    if isinstance(meal, dict):
        return meal.get(name, default)
    return getattr(meal, name, default)


def _ingredient_names(meal: Any) -> List[str]:
    names = []
    for item in _field(meal, "ingredients", None) or []:
        name = _field(item, "name", None) if not isinstance(item, str) else item
        names.append(str(name or "").lower())
    return names


def meal_text(meal: Any) -> str:
    """Lowercased bag of words from a meal's ingredients, tags, steps and name."""
    tags = _field(meal, "tags", None) or _field(meal, "dietary_tags", None) or []
    parts = [
        " ".join(_ingredient_names(meal)),
        " ".join(str(t).lower() for t in tags),
        " ".join(str(s) for s in (_field(meal, "instructions", None) or [])).lower(),
        str(_field(meal, "name", "") or "").lower(),
    ]
    return " ".join(parts)


class CulturalIntelligenceProvider(ABC):
    @abstractmethod
    def identify_primary_cuisine(self, meal: Any, preferences: Iterable[str]) -> str:
        """Best-guess cuisine of ``meal``, favouring the user's preferences."""

    @abstractmethod
    def detect_cultural_authenticity(self, meal: Any, cuisine: str) -> AuthenticityReport:
        """How closely ``meal`` follows the conventions of ``cuisine``."""


class StubCulturalIntelligence(CulturalIntelligenceProvider):
    """Placeholder strategy: first preference (or 'modern'), zero authenticity."""

    def identify_primary_cuisine(self, meal: Any, preferences: Iterable[str]) -> str:
        prefs = list(preferences or [])
        return prefs[0] if prefs else "modern"

    def detect_cultural_authenticity(self, meal: Any, cuisine: str) -> AuthenticityReport:
        return AuthenticityReport()


class MarkerCulturalIntelligence(CulturalIntelligenceProvider):
    """Keyword-marker classifier over ingredients, dishes, methods and spices."""

    def __init__(self, markers: Dict[str, CuisineMarkers] = None):
        self.markers = markers or CUISINE_MARKERS

    def cultural_hits(self, meal: Any) -> List[Dict[str, Any]]:
        """Cuisines with at least one marker in the meal, best score first."""
        bag = meal_text(meal)
        hits = []
        for cuisine, markers in self.markers.items():
            matches = [m for m in markers.all() if m.lower() in bag]
            if matches:
                hits.append({"cuisine": cuisine, "score": len(matches), "matches": matches})
        # sorted() is stable, so ties keep table order
        return sorted(hits, key=lambda h: h["score"], reverse=True)

    def identify_primary_cuisine(self, meal: Any, preferences: Iterable[str]) -> str:
        prefs = list(preferences or [])
        hits = self.cultural_hits(meal)
        for hit in hits:
            if hit["cuisine"] in prefs:
                return hit["cuisine"]
        if hits:
            return hits[0]["cuisine"]
        return prefs[0] if prefs else "modern"

    def detect_cultural_authenticity(self, meal: Any, cuisine: str) -> AuthenticityReport:
        markers = self.markers.get((cuisine or "").lower())
        if markers is None:
            return AuthenticityReport(suggestions=["Unknown cuisine type"])

        content = meal_text(meal)
        elements: List[str] = []
        for ingredient in markers.ingredients:
            if ingredient.lower() in content:
                elements.append(f"ingredient: {ingredient}")
        for method in markers.methods:
            # "grilling (izgara)" matches on "grilling"
            if method.lower().split(" ")[0] in content:
                elements.append(f"method: {method}")
        for spice in markers.spices:
            if spice.lower() in content:
                elements.append(f"spice: {spice}")

        missing = []
        if not any(e.startswith("spice:") for e in elements):
            missing.append("characteristic spices")
        if not any(e.startswith("method:") for e in elements):
            missing.append("traditional cooking methods")

        score = min(100.0, len(elements) / max(len(markers.ingredients) * 0.3, 3) * 100)

        suggestions = []
        if score < 70:
            suggestions.append(f"Consider adding {' and '.join(markers.spices[:2])}")
            suggestions.append(f"Try using {markers.methods[0]} cooking method")
            suggestions.append(
                f"Include {' or '.join(markers.ingredients[:2])} for authenticity"
            )

        return AuthenticityReport(
            authenticity_score=round(score),
            authentic_elements=elements,
            missing_elements=missing,
            suggestions=suggestions,
        )
