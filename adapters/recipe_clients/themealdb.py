"""TheMealDB adapter.

TheMealDB has no paging, nutrition or timing data; paging is applied to the
returned list and nutrition fields stay empty.
"""

import logging
from typing import Any, Dict, List, Optional

from adapters.recipe_clients.base import RecipeApiClient
from app.exceptions import NotFoundError
from domain.enums import ApiProvider
from domain.schemas.recipe_schemas import (
    AnalyzedInstruction,
    InstructionStep,
    Recipe,
    RecipeIngredient,
    RecipeSearchParams,
    RecipeSearchResult,
)

logger = logging.getLogger("smartpantry.recipes")

MAX_INGREDIENTS = 20


def to_recipe(meal: Dict[str, Any]) -> Recipe:
    ingredients = []
    for i in range(1, MAX_INGREDIENTS + 1):
        name = (meal.get(f"strIngredient{i}") or "").strip()
        if not name:
            continue
        measure = (meal.get(f"strMeasure{i}") or "").strip()
        ingredients.append(
            RecipeIngredient(name=name, amount=1, unit=measure, original=f"{measure} {name}".strip())
        )

    lines = [
        line.strip()
        for line in (meal.get("strInstructions") or "").splitlines()
        if line.strip()
    ]
    tags = [t.strip() for t in (meal.get("strTags") or "").split(",") if t.strip()]

    return Recipe(
        id=str(meal["idMeal"]),
        title=meal.get("strMeal") or "",
        image=meal.get("strMealThumb"),
        servings=4,
        cuisines=[meal["strArea"]] if meal.get("strArea") else [],
        dish_types=[meal["strCategory"]] if meal.get("strCategory") else [],
        diets=tags,
        extended_ingredients=ingredients,
        analyzed_instructions=(
            [
                AnalyzedInstruction(
                    steps=[InstructionStep(number=n, step=s) for n, s in enumerate(lines, 1)]
                )
            ]
            if lines
            else []
        ),
        source_url=meal.get("strSource") or None,
        api_source=ApiProvider.THEMEALDB,
    )


class TheMealDBClient(RecipeApiClient):
    provider = ApiProvider.THEMEALDB

    def _path(self, endpoint: str) -> str:
        return f"/{self.api_key or '1'}/{endpoint}"

    async def fetch_search(self, params: RecipeSearchParams) -> RecipeSearchResult:
        if params.query or not params.cuisine:
            data = await self.get_json(self._path("search.php"), {"s": params.query or ""})
        else:
            data = await self.get_json(self._path("filter.php"), {"a": params.cuisine})

        meals = data.get("meals") or []
        page = meals[params.offset: params.offset + params.number]
        return RecipeSearchResult(
            results=[to_recipe(m) for m in page],
            offset=params.offset,
            number=len(page),
            total_results=len(meals),
        )

    async def fetch_recipe(self, recipe_id: str) -> Recipe:
        data = await self.get_json(self._path("lookup.php"), {"i": recipe_id})
        meals = data.get("meals") or []
        if not meals:
            raise NotFoundError(f"Recipe {recipe_id} not found on TheMealDB")
        return to_recipe(meals[0])

    async def fetch_random(
        self, tags: Optional[List[str]], number: Optional[int]
    ) -> List[Recipe]:
        if tags:
            logger.debug("TheMealDB random ignores tags %s", tags)
        recipes: List[Recipe] = []
        # random.php returns a single meal per call
        for _ in range(number or 1):
            data = await self.get_json(self._path("random.php"))
            recipes.extend(to_recipe(m) for m in data.get("meals") or [])
        return recipes
