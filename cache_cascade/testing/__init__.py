"""
Testing Package
Test doubles for code that uses the cascade
"""
from cache_cascade.testing.cache_cascade_fake import CacheCascadeFake

__all__ = ['CacheCascadeFake']
