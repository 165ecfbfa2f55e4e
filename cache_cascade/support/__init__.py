"""
Package Support Classes
"""

from cache_cascade.support.storage import Storage
from cache_cascade.support.env_helper import EnvHelper
from cache_cascade.support.config import CascadeConfig
from cache_cascade.support.class_loader import ClassLoader
from cache_cascade.support.str import Str

__all__ = [
    'Storage',
    'EnvHelper',
    'CascadeConfig',
    'ClassLoader',
    'Str',
]
