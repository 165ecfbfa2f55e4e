"""Shared fixtures: in-memory Tortoise database, cascade managers and request context."""

import pytest
from tortoise import Tortoise
from tortoise.connection import connections

from cache_cascade.cascade import CacheCascadeManager
from cache_cascade.support.config import CascadeConfig
from cache_cascade.support.context import clear_context
from cache_cascade.support.facades import Facade
from tests.fixtures.models import PlainItem, PricedItem, TestModel


@pytest.fixture
async def db():
    """Fresh in-memory SQLite schema with the fixture models."""
    await Tortoise.init(
        db_url='sqlite://:memory:',
        modules={'models': ['tests.fixtures.models']},
    )
    await Tortoise.generate_schemas()
    yield
    await connections.close_all(discard=True)


@pytest.fixture(autouse=True)
def isolate_globals():
    """Unbind managers, facade roots and request context between tests."""
    yield
    for model in (TestModel, PlainItem, PricedItem):
        model._cascade_manager = None
        model._cascade_cache_key = None
    Facade.clear_resolved_instances()
    clear_context()


@pytest.fixture
def storage_path(tmp_path):
    return tmp_path / 'dynamic'


@pytest.fixture
def config(storage_path):
    return CascadeConfig({
        'config_path': str(storage_path),
        'cache_prefix': 'cascade:',
        'default_ttl': 3600,
    })


@pytest.fixture
def manager(config):
    """Manager without database backing for any key."""
    return CacheCascadeManager(config)


@pytest.fixture
async def db_manager(db, config):
    """Manager with TestModel observed under 'test_models' (no seeder)."""
    manager = CacheCascadeManager(config)
    manager.observe(TestModel)
    return manager
