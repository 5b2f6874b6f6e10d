"""Spoonacular adapter."""

from typing import Any, Dict, List, Optional

from adapters.recipe_clients.base import RecipeApiClient
from app.exceptions import ExternalServiceError
from domain.enums import ApiProvider
from domain.schemas.recipe_schemas import (
    AnalyzedInstruction,
    InstructionStep,
    Recipe,
    RecipeIngredient,
    RecipeSearchParams,
    RecipeSearchResult,
)

NUTRIENT_FIELDS = {
    "Calories": "calories",
    "Protein": "protein",
    "Carbohydrates": "carbs",
    "Fat": "fat",
}


def _join(values: List[str]) -> Optional[str]:
    return ",".join(values) if values else None


def to_recipe(data: Dict[str, Any]) -> Recipe:
    nutrients = {}
    for n in (data.get("nutrition") or {}).get("nutrients") or []:
        field = NUTRIENT_FIELDS.get(n.get("name"))
        if field:
            nutrients[field] = round(float(n.get("amount") or 0), 2)

    return Recipe(
        id=str(data["id"]),
        title=data.get("title") or "",
        image=data.get("image"),
        servings=data.get("servings") or 1,
        ready_in_minutes=data.get("readyInMinutes") or 0,
        cuisines=data.get("cuisines") or [],
        diets=data.get("diets") or [],
        dish_types=data.get("dishTypes") or [],
        extended_ingredients=[
            RecipeIngredient(
                id=i.get("id"),
                name=i.get("name") or "",
                amount=i.get("amount") or 0,
                unit=i.get("unit") or "",
                original=i.get("original") or "",
            )
            for i in data.get("extendedIngredients") or []
        ],
        analyzed_instructions=[
            AnalyzedInstruction(
                name=block.get("name") or "",
                steps=[
                    InstructionStep(number=s.get("number", idx + 1), step=s.get("step", ""))
                    for idx, s in enumerate(block.get("steps") or [])
                ],
            )
            for block in data.get("analyzedInstructions") or []
        ],
        summary=data.get("summary"),
        source_url=data.get("sourceUrl"),
        api_source=ApiProvider.SPOONACULAR,
        **nutrients,
    )


class SpoonacularClient(RecipeApiClient):
    provider = ApiProvider.SPOONACULAR

    def _auth(self, params: Dict[str, Any]) -> Dict[str, Any]:
        if not self.api_key:
            raise ExternalServiceError(
                "Spoonacular API key is not configured", provider=self.provider.value
            )
        return {**params, "apiKey": self.api_key}

    async def fetch_search(self, params: RecipeSearchParams) -> RecipeSearchResult:
        data = await self.get_json(
            "/recipes/complexSearch",
            self._auth(
                {
                    "query": params.query,
                    "cuisine": params.cuisine,
                    "diet": params.diet,
                    "intolerances": _join(params.intolerances),
                    "includeIngredients": _join(params.include_ingredients),
                    "excludeIngredients": _join(params.exclude_ingredients),
                    "type": params.type,
                    "maxReadyTime": params.max_ready_time,
                    "offset": params.offset,
                    "number": params.number,
                    "addRecipeInformation": "true",
                    "addRecipeNutrition": "true",
                    "fillIngredients": "true",
                }
            ),
        )
        return RecipeSearchResult(
            results=[to_recipe(r) for r in data.get("results") or []],
            offset=data.get("offset", params.offset),
            number=data.get("number", params.number),
            total_results=data.get("totalResults", 0),
        )

    async def fetch_recipe(self, recipe_id: str) -> Recipe:
        data = await self.get_json(
            f"/recipes/{recipe_id}/information", self._auth({"includeNutrition": "true"})
        )
        return to_recipe(data)

    async def fetch_random(
        self, tags: Optional[List[str]], number: Optional[int]
    ) -> List[Recipe]:
        data = await self.get_json(
            "/recipes/random",
            self._auth({"number": number or 1, "tags": _join(tags or [])}),
        )
        return [to_recipe(r) for r in data.get("recipes") or []]
