"""
Database Package
Tortoise ORM models, seeders and the relational layer of the cascade
"""
from cache_cascade.database.model import Model, SoftDeletes
from cache_cascade.database.cascade_invalidation import CascadeInvalidation, register_cascade_hooks
from cache_cascade.database.database_layer import DatabaseLayer
from cache_cascade.database.model_registry import ModelRegistry
from cache_cascade.database.seeder import Seeder

__all__ = [
    'Model',
    'SoftDeletes',
    'CascadeInvalidation',
    'register_cascade_hooks',
    'DatabaseLayer',
    'ModelRegistry',
    'Seeder',
]
