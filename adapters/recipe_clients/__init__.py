"""Recipe API adapters sharing one cache."""

from adapters.recipe_clients.base import RecipeApiClient, cache_namespace
from adapters.recipe_clients.spoonacular import SpoonacularClient
from adapters.recipe_clients.themealdb import TheMealDBClient
from adapters.recipe_clients.factory import create_recipe_client, create_recipe_clients

__all__ = [
    "RecipeApiClient",
    "cache_namespace",
    "SpoonacularClient",
    "TheMealDBClient",
    "create_recipe_client",
    "create_recipe_clients",
]
