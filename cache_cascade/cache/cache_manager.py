"""
Cache Manager
Laravel-style cache manager with swappable drivers
"""
from typing import Any, Optional, Callable, Dict
from cache_cascade.cache.cache_interface import CacheStoreInterface
from cache_cascade.cache.stores.array_store import ArrayStore
from cache_cascade.cache.stores.file_store import FileStore
from cache_cascade.cache.stores.redis_store import RedisStore
from cache_cascade.exceptions import UnknownCacheDriverException


class CacheManager:
    """
    Cache Manager - fronts the configured cache store

    Usage:
        # Initialize with driver from config
        manager = CacheManager(driver='redis', config={'url': 'redis://localhost:6379/1'})

        # Use cache
        await manager.get('key')
        await manager.put('key', value, ttl=3600)
        await manager.remember('key', 3600, callback)

        # Tags (array and redis drivers)
        if manager.supports_tags():
            await manager.tags('cache-cascade').flush()
    """

    def __init__(self, driver: str = 'array', config: Dict = None,
                 store: Optional[CacheStoreInterface] = None):
        """
        Initialize cache manager

        Args:
            driver: 'array', 'file' or 'redis'
            config: Driver options ('path' for file, 'url' for redis)
            store: Pre-built store, bypasses driver creation
        """
        self.driver_name = driver
        self.config = config or {}
        self._store: Optional[CacheStoreInterface] = store
        self._initialized = store is not None

    def _ensure_initialized(self):
        """Lazy initialization of cache store"""
        if not self._initialized:
            self._store = self._create_store(self.driver_name, self.config)
            self._initialized = True

    def _create_store(self, driver: str, config: Dict) -> CacheStoreInterface:
        """
        Create cache store instance based on driver
        """
        if driver == 'array':
            return ArrayStore()

        elif driver == 'file':
            return FileStore(cache_dir=config.get('path'))

        elif driver == 'redis':
            from cache_cascade.defaults import DEFAULT_REDIS_URL
            redis_url = config.get('url') or DEFAULT_REDIS_URL
            return RedisStore(redis_url=redis_url)

        else:
            raise UnknownCacheDriverException(f"Unknown cache driver: {driver}")

    @property
    def store(self) -> CacheStoreInterface:
        """The underlying cache store"""
        self._ensure_initialized()
        return self._store

    async def get(self, key: str, default: Any = None) -> Any:
        """Get cached value"""
        return await self.store.get(key, default)

    async def put(self, key: str, value: Any, ttl: int = None) -> bool:
        """Put value in cache"""
        return await self.store.put(key, value, ttl)

    async def has(self, key: str) -> bool:
        """Check if key exists"""
        return await self.store.has(key)

    async def forget(self, key: str) -> bool:
        """Remove key from cache"""
        return await self.store.forget(key)

    async def flush(self) -> bool:
        """Clear all cache"""
        return await self.store.flush()

    async def remember(self, key: str, ttl: int, callback: Callable) -> Any:
        """Get cached value or compute and cache it"""
        return await self.store.remember(key, ttl, callback)

    async def remember_forever(self, key: str, callback: Callable) -> Any:
        """Get cached value or compute and cache it forever"""
        return await self.store.remember_forever(key, callback)

    def supports_tags(self) -> bool:
        """Whether the configured store can group keys under tags"""
        return self.store.supports_tags()

    def tags(self, *names: str):
        """Get a tag-scoped view of the store"""
        return self.store.tags(*names)

    async def close(self) -> None:
        """Release the store's connection, if it holds one"""
        if self._store is not None and hasattr(self._store, 'disconnect'):
            await self._store.disconnect()
