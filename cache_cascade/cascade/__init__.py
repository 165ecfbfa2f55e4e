"""
Cascade Package
Fallback resolution, write propagation and key naming
"""
from cache_cascade.cascade.cache_key import CacheKeyResolver
from cache_cascade.cascade.file_layer import FileLayer
from cache_cascade.cascade.cascade_manager import CacheCascadeManager

__all__ = [
    'CacheKeyResolver',
    'FileLayer',
    'CacheCascadeManager',
]
