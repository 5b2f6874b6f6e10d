"""
API dependencies for dependency injection
"""

import logging
from typing import Dict, Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from adapters.cache_manager import CacheManager
from adapters.recipe_clients import RecipeApiClient, create_recipe_client
from app.config import settings
from domain.models import get_db_session

logger = logging.getLogger("smartpantry.api.dependencies")


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_db_session()


def get_cache_manager(request: Request) -> CacheManager:
    """The application-wide cache created in the lifespan handler."""
    state = request.app.state
    cache = getattr(state, "cache_manager", None)
    if cache is None:
        # App used without its lifespan (scripts, bare TestClient)
        cache = CacheManager(settings.cache_default_ttl_ms)
        state.cache_manager = cache
    return cache


def get_recipe_client(
    provider: str,
    request: Request,
    cache: CacheManager = Depends(get_cache_manager),
) -> RecipeApiClient:
    """One client per provider, created on first use and kept on app.state."""
    state = request.app.state
    clients: Dict[str, RecipeApiClient] = getattr(state, "recipe_clients", None)
    if clients is None:
        clients = {}
        state.recipe_clients = clients

    key = provider.lower()
    if key not in clients:
        clients[key] = create_recipe_client(key, cache)
        logger.info("Created %s recipe client", key)
    return clients[key]
