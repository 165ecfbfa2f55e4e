"""
Cache Cascade Package
Export commonly used classes and helpers for easy import
"""
from cache_cascade.cascade import CacheCascadeManager, CacheKeyResolver, FileLayer
from cache_cascade.support.config import CascadeConfig
from cache_cascade.support.facades import CacheCascade

# Export helper functions for easy access
from cache_cascade.helpers import (
    cache_cascade,
    get_file_storage_keys,
    get_static_config_files,
)

__all__ = [
    'CacheCascadeManager',
    'CacheKeyResolver',
    'FileLayer',
    'CascadeConfig',
    'CacheCascade',
    'cache_cascade',
    'get_file_storage_keys',
    'get_static_config_files',
]
