"""Normalized recipe shapes returned by every recipe API adapter."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from domain.enums import ApiProvider


class RecipeIngredient(BaseModel):
    """One ingredient line of a normalized recipe."""

    id: Optional[int] = None
    name: str
    amount: float = 0
    unit: str = ""
    original: str = ""


class InstructionStep(BaseModel):
    number: int
    step: str


class AnalyzedInstruction(BaseModel):
    name: str = ""
    steps: List[InstructionStep] = []


class Recipe(BaseModel):
    """Provider-independent recipe.

    Adapters own the mapping from their payloads into this shape; fields a
    provider does not supply keep their defaults.
    """

    id: str
    title: str
    image: Optional[str] = None
    servings: int = 1
    ready_in_minutes: int = 0
    cuisines: List[str] = []
    diets: List[str] = []
    dish_types: List[str] = []
    extended_ingredients: List[RecipeIngredient] = []
    analyzed_instructions: List[AnalyzedInstruction] = []
    summary: Optional[str] = None
    source_url: Optional[str] = None
    api_source: ApiProvider
    calories: Optional[float] = None
    protein: Optional[float] = None
    carbs: Optional[float] = None
    fat: Optional[float] = None


class RecipeSearchParams(BaseModel):
    query: Optional[str] = None
    cuisine: Optional[str] = None
    diet: Optional[str] = None
    intolerances: List[str] = []
    include_ingredients: List[str] = []
    exclude_ingredients: List[str] = []
    type: Optional[str] = None
    max_ready_time: Optional[int] = Field(None, ge=0)
    offset: int = Field(0, ge=0)
    number: int = Field(10, ge=1, le=100)

    def cache_params(self) -> Dict[str, Any]:
        """Parameters that identify the request, for cache keys."""
        return self.model_dump(exclude_none=True)


class RecipeSearchResult(BaseModel):
    results: List[Recipe] = []
    offset: int = 0
    number: int = 0
    total_results: int = 0
