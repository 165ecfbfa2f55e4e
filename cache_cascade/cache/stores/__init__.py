"""
Cache Stores
Different cache storage backends
"""
from cache_cascade.cache.stores.array_store import ArrayStore
from cache_cascade.cache.stores.file_store import FileStore
from cache_cascade.cache.stores.redis_store import RedisStore

__all__ = [
    'ArrayStore',
    'FileStore',
    'RedisStore',
]
