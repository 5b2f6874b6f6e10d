"""Get-or-compute wrapper for async lookups."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, TypeVar

from adapters.cache_manager import CacheManager

logger = logging.getLogger("smartpantry.cache")

T = TypeVar("T")


def with_cache(
    cache: CacheManager,
    namespace: str,
    fn: Callable[[Mapping[str, Any]], Awaitable[T]],
    ttl: Optional[int] = None,
    coalesce: bool = False,
) -> Callable[[Mapping[str, Any]], Awaitable[T]]:
    """
    Wrap ``fn(params)`` so results are cached under
    ``cache.generate_key(namespace, params)``.

    Exceptions from ``fn`` propagate and nothing is stored, so the next call
    retries. ``None`` results are stored but read back as a miss.

    Without ``coalesce`` two identical calls that overlap both run ``fn``.
    With ``coalesce=True`` the second caller awaits the first call's task.
    """
    pending: Dict[str, "asyncio.Future[T]"] = {}

    async def compute(key: str, params: Mapping[str, Any]) -> T:
        result = await fn(params)
        cache.set(key, result, ttl=ttl)
        return result

    async def wrapper(params: Optional[Mapping[str, Any]] = None) -> T:
        params = params or {}
        key = cache.generate_key(namespace, params)

        cached = cache.get(key)
        if cached is not None:
            logger.debug("Cache hit %s", key)
            return cached

        if not coalesce:
            return await compute(key, params)

        task = pending.get(key)
        if task is None:
            task = asyncio.ensure_future(compute(key, params))
            pending[key] = task
            task.add_done_callback(lambda _t: pending.pop(key, None))
        # shield: one caller being cancelled must not cancel the shared fetch
        return await asyncio.shield(task)

    wrapper.namespace = namespace
    return wrapper
