"""
Adapters package - External service connections.
In-memory cache and the recipe API clients built on it.
"""

from adapters.cache_manager import CacheManager
from adapters.cache_decorator import with_cache

__all__ = [
    "CacheManager",
    "with_cache",
]
