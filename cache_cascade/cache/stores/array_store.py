"""
Array Cache Store
Stores cache entries in process memory (tests, single-process apps)
"""
import copy
import time
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from cache_cascade.cache.cache_interface import CacheStoreInterface


class ArrayStore(CacheStoreInterface):
    """
    In-memory cache storage with TTL and tag support

    Values are deep-copied on the way in and out so callers never share
    mutable state with the cache.

    WARNING: Entries are lost when the process restarts and are not
    shared between processes.
    """

    def __init__(self):
        """Initialize array cache store"""
        # key -> (value, expires_at); expires_at -1 means forever
        self._storage: Dict[str, Tuple[Any, float]] = {}
        self._tags: Dict[str, Set[str]] = {}

    def _is_expired(self, expires_at: float) -> bool:
        return expires_at != -1 and time.time() > expires_at

    async def get(self, key: str, default: Any = None) -> Any:
        """Get cached value"""
        entry = self._storage.get(key)
        if entry is None:
            return default

        value, expires_at = entry
        if self._is_expired(expires_at):
            self._drop(key)
            return default

        return copy.deepcopy(value)

    async def put(self, key: str, value: Any, ttl: int = None) -> bool:
        """Put value in cache"""
        if ttl is None:
            from cache_cascade.defaults import DEFAULT_CACHE_TTL
            ttl = DEFAULT_CACHE_TTL

        expires_at = time.time() + ttl if ttl > 0 else -1
        self._storage[key] = (copy.deepcopy(value), expires_at)
        return True

    async def has(self, key: str) -> bool:
        """Check if key exists and is not expired"""
        entry = self._storage.get(key)
        if entry is None:
            return False
        if self._is_expired(entry[1]):
            self._drop(key)
            return False
        return True

    async def forget(self, key: str) -> bool:
        """Remove key from cache and from every tag it belongs to"""
        return self._drop(key)

    def _drop(self, key: str) -> bool:
        removed = self._storage.pop(key, None) is not None
        for name in [name for name, members in self._tags.items() if key in members]:
            self._tags[name].discard(key)
            if not self._tags[name]:
                del self._tags[name]
        return removed

    async def flush(self) -> bool:
        """Clear all cache"""
        self._storage.clear()
        self._tags.clear()
        return True

    def keys(self) -> List[str]:
        """Get all stored keys (useful for testing)"""
        return list(self._storage.keys())

    # ====================
    # Tagging
    # ====================

    def supports_tags(self) -> bool:
        return True

    async def tag_key(self, names: Iterable[str], key: str, ttl: Optional[int] = None) -> None:
        for name in names:
            self._tags.setdefault(name, set()).add(key)

    async def tagged_keys(self, names: Iterable[str]) -> List[str]:
        keys: Set[str] = set()
        for name in names:
            keys.update(self._tags.get(name, set()))
        return sorted(keys)

    async def forget_tags(self, names: Iterable[str]) -> None:
        for name in names:
            self._tags.pop(name, None)
