"""
Facades Package
Laravel-style facades for static access to services
"""
from cache_cascade.support.facades.facade import Facade
from cache_cascade.support.facades.cache_cascade import CacheCascade

__all__ = [
    'Facade',
    'CacheCascade',
]
