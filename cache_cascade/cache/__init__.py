"""
Cache Package
Laravel-style caching with swappable drivers (array, file, redis)
"""
from cache_cascade.cache.cache_manager import CacheManager
from cache_cascade.cache.cache_interface import CacheStoreInterface
from cache_cascade.cache.tagged_cache import TaggedCache
from cache_cascade.cache.stores.array_store import ArrayStore
from cache_cascade.cache.stores.file_store import FileStore
from cache_cascade.cache.stores.redis_store import RedisStore

__all__ = [
    'CacheManager',
    'CacheStoreInterface',
    'TaggedCache',
    'ArrayStore',
    'FileStore',
    'RedisStore',
]
