"""
Exceptions Package
"""
from cache_cascade.exceptions.custom import (
    CacheCascadeException,
    CorruptFileException,
    UnknownCacheDriverException,
    TagsNotSupportedException,
)

__all__ = [
    'CacheCascadeException',
    'CorruptFileException',
    'UnknownCacheDriverException',
    'TagsNotSupportedException',
]
