"""In-memory TTL cache for external lookups.

One instance is built per application (see ``main.py``) and handed to the
recipe clients. Times are epoch milliseconds; pass ``clock`` to control time
in tests.
"""

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

logger = logging.getLogger("smartpantry.cache")

DEFAULT_TTL_MS = 3_600_000


def _now_ms() -> float:
    return time.time() * 1000


@dataclass
class CacheEntry:
    data: Any
    expiry: float  # absolute epoch ms


class CacheManager:
    """
    Key/value store with per-entry expiry.

    Expired entries are dropped lazily when read; nothing sweeps the map in
    the background, so keys that are never requested again stay in memory
    until their namespace is invalidated or the cache is cleared.
    """

    def __init__(
        self,
        default_ttl: int = DEFAULT_TTL_MS,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.default_ttl = default_ttl
        self._clock = clock or _now_ms
        self._entries: Dict[str, CacheEntry] = {}

    @staticmethod
    def generate_key(namespace: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """``namespace:`` followed by the params as key-sorted compact JSON."""
        payload = json.dumps(
            dict(params or {}), sort_keys=True, separators=(",", ":"), default=str
        )
        return f"{namespace}:{payload}"

    def _live_entry(self, key: str) -> Optional[CacheEntry]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expiry < self._clock():
            del self._entries[key]
            return None
        return entry

    def get(self, key: str) -> Any:
        """Cached value, or None when missing or expired."""
        entry = self._live_entry(key)
        return entry.data if entry else None

    def set(self, key: str, data: Any, ttl: Optional[int] = None) -> None:
        ttl = self.default_ttl if ttl is None else ttl
        self._entries[key] = CacheEntry(data=data, expiry=self._clock() + ttl)

    def has(self, key: str) -> bool:
        return self._live_entry(key) is not None

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)

    def invalidate_by_namespace(self, namespace: str) -> int:
        """Drop every key under ``namespace``; returns how many were removed."""
        prefix = f"{namespace}:"
        doomed = [k for k in self._entries if k.startswith(prefix)]
        for key in doomed:
            del self._entries[key]
        logger.info("Invalidated %d cache entries in namespace %s", len(doomed), namespace)
        return len(doomed)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        # Includes expired entries that have not been read yet
        return len(self._entries)
