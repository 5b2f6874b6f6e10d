"""Build recipe clients for a provider from settings."""

from typing import Dict, Optional

import httpx

from adapters.cache_manager import CacheManager
from adapters.recipe_clients.base import RecipeApiClient
from adapters.recipe_clients.spoonacular import SpoonacularClient
from adapters.recipe_clients.themealdb import TheMealDBClient
from app.config import Settings, settings as default_settings
from app.exceptions import ServiceValidationError
from domain.enums import ApiProvider


def create_recipe_client(
    provider,
    cache: CacheManager,
    config: Optional[Settings] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> RecipeApiClient:
    """
    Create the adapter for ``provider`` sharing ``cache``.

    Raises:
        ServiceValidationError: unknown provider name
    """
    config = config or default_settings
    try:
        provider = ApiProvider(str(getattr(provider, "value", provider)).lower())
    except ValueError:
        raise ServiceValidationError(
            f"Unknown recipe provider: {provider}",
            details={"supported": [p.value for p in ApiProvider]},
        )

    if provider == ApiProvider.SPOONACULAR:
        return SpoonacularClient(
            cache,
            base_url=config.spoonacular_base_url,
            api_key=config.spoonacular_api_key,
            http_client=http_client,
            timeout=config.recipe_api_timeout_sec,
        )
    return TheMealDBClient(
        cache,
        base_url=config.themealdb_base_url,
        api_key=config.themealdb_api_key or "1",
        http_client=http_client,
        timeout=config.recipe_api_timeout_sec,
    )


def create_recipe_clients(
    cache: CacheManager,
    config: Optional[Settings] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> Dict[str, RecipeApiClient]:
    """One client per provider, keyed by provider name."""
    return {
        p.value: create_recipe_client(p, cache, config, http_client) for p in ApiProvider
    }
