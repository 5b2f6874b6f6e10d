"""Recipe API proxy routes backed by the shared cache"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from adapters.cache_manager import CacheManager
from adapters.recipe_clients import RecipeApiClient
from api.dependencies import get_cache_manager, get_recipe_client
from api.schemas import CacheInvalidationResponse
from app.exceptions import ExternalServiceError
from domain.schemas.recipe_schemas import Recipe, RecipeSearchParams, RecipeSearchResult

router = APIRouter(prefix="/recipes", tags=["Recipes"])
logger = logging.getLogger("smartpantry.api.recipes")


def _split(value: Optional[str]) -> List[str]:
    return [v.strip() for v in (value or "").split(",") if v.strip()]


@router.get("/{provider}/search", response_model=RecipeSearchResult)
async def search_recipes(
    query: Optional[str] = None,
    cuisine: Optional[str] = None,
    diet: Optional[str] = None,
    intolerances: Optional[str] = Query(None, description="Comma separated"),
    include_ingredients: Optional[str] = Query(None, description="Comma separated"),
    exclude_ingredients: Optional[str] = Query(None, description="Comma separated"),
    type: Optional[str] = None,
    max_ready_time: Optional[int] = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    number: int = Query(10, ge=1, le=100),
    client: RecipeApiClient = Depends(get_recipe_client),
):
    params = RecipeSearchParams(
        query=query,
        cuisine=cuisine,
        diet=diet,
        intolerances=_split(intolerances),
        include_ingredients=_split(include_ingredients),
        exclude_ingredients=_split(exclude_ingredients),
        type=type,
        max_ready_time=max_ready_time,
        offset=offset,
        number=number,
    )
    return await client.search_recipes(params)


@router.get("/{provider}/random", response_model=List[Recipe])
async def random_recipes(
    tags: Optional[str] = Query(None, description="Comma separated"),
    number: int = Query(1, ge=1, le=100),
    client: RecipeApiClient = Depends(get_recipe_client),
):
    return await client.get_random_recipes(_split(tags) or None, number)


@router.get("/{provider}/{recipe_id}", response_model=Recipe)
async def get_recipe(recipe_id: str, client: RecipeApiClient = Depends(get_recipe_client)):
    try:
        return await client.get_recipe_by_id(recipe_id)
    except ExternalServiceError as e:
        if e.status_code == status.HTTP_404_NOT_FOUND:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
        raise


@router.delete("/cache/{namespace}", response_model=CacheInvalidationResponse)
def invalidate_cache(namespace: str, cache: CacheManager = Depends(get_cache_manager)):
    """Drop every cached entry under ``namespace``, e.g. spoonacular:searchRecipes."""
    removed = cache.invalidate_by_namespace(namespace)
    return CacheInvalidationResponse(namespace=namespace, removed=removed)
