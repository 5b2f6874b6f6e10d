"""Common contract for recipe API adapters.

Each adapter implements three raw fetches; the public methods wrap them with
the shared cache under ``"{provider}:{operationName}"`` namespaces.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional

import httpx

from adapters.cache_decorator import with_cache
from adapters.cache_manager import CacheManager
from app.exceptions import ExternalServiceError
from domain.enums import ApiProvider
from domain.schemas.recipe_schemas import Recipe, RecipeSearchParams, RecipeSearchResult

logger = logging.getLogger("smartpantry.recipes")

SEARCH_OPERATION = "searchRecipes"
DETAIL_OPERATION = "getRecipeById"
RANDOM_OPERATION = "getRandomRecipes"


def cache_namespace(provider: ApiProvider, operation: str) -> str:
    return f"{provider.value}:{operation}"


class RecipeApiClient(ABC):
    provider: ApiProvider

    def __init__(
        self,
        cache: CacheManager,
        base_url: str,
        api_key: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 15.0,
        ttl: Optional[int] = None,
    ):
        self.cache = cache
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self._owns_client = http_client is None
        self.http = http_client or httpx.AsyncClient(timeout=timeout)

        self._search = with_cache(
            cache, cache_namespace(self.provider, SEARCH_OPERATION), self._cached_search, ttl
        )
        self._detail = with_cache(
            cache, cache_namespace(self.provider, DETAIL_OPERATION), self._cached_detail, ttl
        )
        self._random = with_cache(
            cache, cache_namespace(self.provider, RANDOM_OPERATION), self._cached_random, ttl
        )

    # ---------- public contract ----------

    async def search_recipes(self, params: RecipeSearchParams) -> RecipeSearchResult:
        return await self._search(params.cache_params())

    async def get_recipe_by_id(self, recipe_id: str) -> Recipe:
        return await self._detail({"id": str(recipe_id)})

    async def get_random_recipes(
        self, tags: Optional[List[str]] = None, number: Optional[int] = None
    ) -> List[Recipe]:
        params: Dict[str, Any] = {}
        if tags:
            params["tags"] = list(tags)
        if number is not None:
            params["number"] = number
        return await self._random(params)

    def namespaces(self) -> List[str]:
        return [
            cache_namespace(self.provider, op)
            for op in (SEARCH_OPERATION, DETAIL_OPERATION, RANDOM_OPERATION)
        ]

    async def aclose(self) -> None:
        if self._owns_client:
            await self.http.aclose()

    # ---------- cache adapters ----------

    async def _cached_search(self, params: Mapping[str, Any]) -> RecipeSearchResult:
        return await self.fetch_search(RecipeSearchParams(**params))

    async def _cached_detail(self, params: Mapping[str, Any]) -> Recipe:
        return await self.fetch_recipe(params["id"])

    async def _cached_random(self, params: Mapping[str, Any]) -> List[Recipe]:
        return await self.fetch_random(params.get("tags"), params.get("number"))

    # ---------- provider specific ----------

    @abstractmethod
    async def fetch_search(self, params: RecipeSearchParams) -> RecipeSearchResult:
        ...

    @abstractmethod
    async def fetch_recipe(self, recipe_id: str) -> Recipe:
        ...

    @abstractmethod
    async def fetch_random(
        self, tags: Optional[List[str]], number: Optional[int]
    ) -> List[Recipe]:
        ...

    # ---------- HTTP ----------

    async def get_json(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """GET ``base_url + path`` and decode JSON.

        Raises:
            ExternalServiceError: transport failure, non-2xx status or invalid JSON
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        query = {k: v for k, v in (params or {}).items() if v is not None}
        try:
            response = await self.http.get(url, params=query)
        except httpx.HTTPError as e:
            logger.warning("%s request to %s failed: %s", self.provider.value, path, e)
            raise ExternalServiceError(
                f"{self.provider.value} request failed: {e}", provider=self.provider.value
            ) from e

        if not response.is_success:
            logger.warning(
                "%s returned %d for %s", self.provider.value, response.status_code, path
            )
            raise ExternalServiceError(
                f"{self.provider.value} returned HTTP {response.status_code}",
                details={"body": response.text[:500]},
                provider=self.provider.value,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise ExternalServiceError(
                f"{self.provider.value} returned invalid JSON",
                provider=self.provider.value,
                status_code=response.status_code,
            ) from e
