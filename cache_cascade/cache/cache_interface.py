"""
Cache Store Interface
Abstract base class for all cache stores
"""
import inspect
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, List, Optional

from cache_cascade.exceptions import TagsNotSupportedException


class CacheStoreInterface(ABC):
    """
    Interface that all cache stores must implement

    This ensures consistent API across array, file, redis, etc.
    """

    @abstractmethod
    async def get(self, key: str, default: Any = None) -> Any:
        """
        Get cached value

        Args:
            key: Cache key
            default: Default value if not found

        Returns:
            Cached value or default
        """
        pass

    @abstractmethod
    async def put(self, key: str, value: Any, ttl: int = None) -> bool:
        """
        Put value in cache

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time to live in seconds (None = use DEFAULT_CACHE_TTL, 0 = forever)

        Returns:
            bool: True if successful
        """
        pass

    @abstractmethod
    async def has(self, key: str) -> bool:
        """
        Check if key exists in cache

        Args:
            key: Cache key

        Returns:
            bool: True if exists
        """
        pass

    @abstractmethod
    async def forget(self, key: str) -> bool:
        """
        Remove key from cache

        Args:
            key: Cache key

        Returns:
            bool: True if removed
        """
        pass

    @abstractmethod
    async def flush(self) -> bool:
        """
        Clear all cache

        Returns:
            bool: True if successful
        """
        pass

    async def remember(self, key: str, ttl: int, callback: Callable) -> Any:
        """
        Get cached value or compute and cache it

        Presence is checked with has(), so falsy values (None, [], 0) are
        served from cache once stored.

        Args:
            key: Cache key
            ttl: Time to live in seconds
            callback: Function to call if cache miss (can be sync or async)

        Returns:
            Cached or computed value
        """
        if await self.has(key):
            return await self.get(key)

        value = callback()
        if inspect.isawaitable(value):
            value = await value

        await self.put(key, value, ttl)

        return value

    async def remember_forever(self, key: str, callback: Callable) -> Any:
        """
        Get cached value or compute and cache it forever

        Args:
            key: Cache key
            callback: Function to call if cache miss

        Returns:
            Cached or computed value
        """
        return await self.remember(key, 0, callback)

    # ====================
    # Tagging
    # ====================

    def supports_tags(self) -> bool:
        """Whether this store can group keys under tags"""
        return False

    def tags(self, *names: str):
        """
        Get a tag-scoped view of this store

        Raises:
            TagsNotSupportedException: If the store cannot tag keys
        """
        if not self.supports_tags():
            raise TagsNotSupportedException(
                f"{self.__class__.__name__} does not support tagging"
            )
        from cache_cascade.cache.tagged_cache import TaggedCache
        return TaggedCache(self, self._flatten_names(names))

    async def tag_key(self, names: Iterable[str], key: str, ttl: Optional[int] = None) -> None:
        """
        Record key as a member of every tag in names (tag-capable stores)

        ttl is the lifetime of the entry being tagged; stores may use it to
        expire the membership index.
        """
        raise TagsNotSupportedException()

    async def tagged_keys(self, names: Iterable[str]) -> List[str]:
        """Get every key that is a member of any tag in names (tag-capable stores)"""
        raise TagsNotSupportedException()

    async def forget_tags(self, names: Iterable[str]) -> None:
        """Drop the membership index of every tag in names (tag-capable stores)"""
        raise TagsNotSupportedException()

    @staticmethod
    def _flatten_names(names) -> List[str]:
        flat = []
        for name in names:
            if isinstance(name, (list, tuple, set)):
                flat.extend(name)
            else:
                flat.append(name)
        return flat
