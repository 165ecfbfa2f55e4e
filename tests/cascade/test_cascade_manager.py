"""CacheCascadeManager fallback, propagation and invalidation with a mocked relational layer."""

import json
import logging
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from cache_cascade.cascade import CacheCascadeManager
from cache_cascade.database import DatabaseLayer
from cache_cascade.support.config import CascadeConfig

ROWS = [{'id': 1, 'question': 'Why?', 'order': 1}, {'id': 2, 'question': 'How?', 'order': 2}]


class Faq:
    """Stand-in model type; the mocked database layer never touches it."""


class Visitor:
    def __init__(self, identity=None):
        self.identity = identity

    def __call__(self):
        return self.identity


@pytest.fixture
def database():
    database = MagicMock(spec=DatabaseLayer)
    database.load = AsyncMock(return_value=ROWS)
    database.replace = AsyncMock()
    return database


def make_manager(storage_path, database=None, visitor=None, **options):
    config = CascadeConfig({
        'config_path': str(storage_path),
        'cache_prefix': 'cascade:',
        'default_ttl': 3600,
        **options,
    })
    return CacheCascadeManager(
        config,
        database=database,
        visitor_resolver=visitor,
        session_resolver=lambda: None,
    )


@pytest.fixture
def db_backed(storage_path, database):
    manager = make_manager(storage_path, database)
    manager.registry.register('faqs', Faq)
    return manager


# ==================== get ====================

async def test_miss_returns_default_and_mutates_nothing(manager, storage_path):
    assert await manager.get('absent', 'fallback') == 'fallback'

    assert manager.get_stats()['misses'] == 1
    assert await manager.cache.has('cascade:absent') is False
    assert not storage_path.exists()


async def test_transform_applies_to_default_and_hits(manager):
    double = {'transform': lambda value: value * 2}

    assert await manager.get('absent', 2, double) == 4

    await manager.set('number', 5)
    assert await manager.get('number', None, double) == 10


async def test_async_transform_is_awaited(manager):
    async def wrap(value):
        return {'wrapped': value}

    await manager.set('key', 1)

    assert await manager.get('key', None, {'transform': wrap}) == {'wrapped': 1}


async def test_cache_hit_is_served_first(manager):
    await manager.cache.put('cascade:faqs', ['cached'], 60)
    manager.files.write('faqs', ['file'])

    assert await manager.get('faqs') == ['cached']
    assert manager.get_stats()['hits'] == {'cache': 1, 'file': 0, 'database': 0}


async def test_falsy_cached_values_are_hits(manager):
    await manager.cache.put('cascade:empty', [], 60)

    assert await manager.get('empty', 'default') == []
    assert manager.get_stats()['hits']['cache'] == 1


async def test_file_hit_promotes_into_cache(manager):
    manager.files.write('settings', {'theme': 'dark'})

    assert await manager.get('settings') == {'theme': 'dark'}
    assert await manager.cache.get('cascade:settings') == {'theme': 'dark'}

    manager.files.delete('settings')

    assert await manager.get('settings') == {'theme': 'dark'}
    assert manager.get_stats()['hits'] == {'cache': 1, 'file': 1, 'database': 0}


async def test_corrupt_file_falls_through_to_default(manager, caplog):
    manager.files.root.mkdir(parents=True)
    manager.files.path_for('broken').write_text('<?php return [];')

    with caplog.at_level(logging.ERROR):
        assert await manager.get('broken', 'default') == 'default'

    assert manager.get_stats()['misses'] == 1
    assert 'Error reading file for broken' in caplog.text


async def test_database_hit_promotes_into_cache_and_file(db_backed, database):
    assert await db_backed.get('faqs') == ROWS

    assert await db_backed.cache.get('cascade:faqs') == ROWS
    assert db_backed.files.read('faqs') == ROWS
    database.replace.assert_not_called()

    stats = db_backed.get_stats()
    assert stats['hits']['database'] == 1
    assert stats['writes'] == 0


async def test_database_hit_is_then_served_from_cache(db_backed, database):
    await db_backed.get('faqs')
    await db_backed.get('faqs')

    assert database.load.await_count == 1
    assert db_backed.get_stats()['hits'] == {'cache': 1, 'file': 0, 'database': 1}


async def test_auto_seed_runs_seeder_and_requeries(storage_path, database):
    runs = []

    class FaqSeeder:
        async def run(self):
            runs.append(True)

    database.load = AsyncMock(side_effect=[[], ROWS])
    manager = make_manager(storage_path, database)
    manager.registry.register('faqs', Faq, seeder=FaqSeeder)

    assert await manager.get('faqs') == ROWS
    assert runs == [True]
    assert manager.files.read('faqs') == ROWS


async def test_sync_seeder_is_supported(storage_path, database):
    class FaqSeeder:
        def run(self):
            pass

    database.load = AsyncMock(side_effect=[[], ROWS])
    manager = make_manager(storage_path, database)
    manager.registry.register('faqs', Faq, seeder=FaqSeeder)

    assert await manager.get('faqs') == ROWS


async def test_failing_seeder_is_a_miss(storage_path, database, caplog):
    class FaqSeeder:
        async def run(self):
            raise RuntimeError('boom')

    database.load = AsyncMock(return_value=[])
    manager = make_manager(storage_path, database)
    manager.registry.register('faqs', Faq, seeder=FaqSeeder)

    with caplog.at_level(logging.ERROR):
        assert await manager.get('faqs', 'default') == 'default'

    assert 'Failed to run seeder for faqs' in caplog.text
    assert manager.get_stats()['misses'] == 1
    assert not manager.files.exists('faqs')


async def test_empty_table_without_seeder_is_a_miss(db_backed, database):
    database.load = AsyncMock(return_value=[])

    assert await db_backed.get('faqs', []) == []
    assert db_backed.get_stats()['misses'] == 1
    assert not db_backed.files.exists('faqs')


async def test_auto_seed_disabled(storage_path, database):
    seeder = MagicMock()
    database.load = AsyncMock(return_value=[])
    manager = make_manager(storage_path, database, auto_seed=False)
    manager.registry.register('faqs', Faq, seeder=seeder)

    assert await manager.get('faqs', 'default') == 'default'
    seeder.assert_not_called()


async def test_database_errors_never_reach_the_caller(db_backed, database, caplog):
    database.load = AsyncMock(side_effect=ConnectionError('database is down'))

    with caplog.at_level(logging.ERROR):
        assert await db_backed.get('faqs', 'default') == 'default'

    assert 'Error loading faqs from database' in caplog.text


async def test_database_disabled_skips_relational_layer(storage_path, database):
    manager = make_manager(storage_path, database, use_database=False)
    manager.registry.register('faqs', Faq)

    assert await manager.get('faqs', 'default') == 'default'
    database.load.assert_not_called()


# ==================== set ====================

async def test_set_writes_file_cache_and_database(db_backed, database):
    await db_backed.set('faqs', ROWS)

    assert db_backed.files.read('faqs') == ROWS
    assert await db_backed.cache.get('cascade:faqs') == ROWS
    database.replace.assert_awaited_once_with(Faq, ROWS)
    assert db_backed.get_stats()['writes'] == 1


async def test_set_rejects_values_json_cannot_represent(manager, caplog):
    with caplog.at_level(logging.ERROR), pytest.raises(TypeError):
        await manager.set('prices', [{'amount': Decimal('9.99')}])

    assert await manager.cache.has('cascade:prices') is False
    assert not manager.files.exists('prices')
    assert 'Error setting prices' in caplog.text


async def test_set_skip_database(db_backed, database):
    await db_backed.set('faqs', ROWS, skip_database=True)

    assert db_backed.files.read('faqs') == ROWS
    database.replace.assert_not_called()


async def test_set_without_model_only_writes_cache_and_file(manager):
    await manager.set('settings', {'theme': 'light'})

    assert manager.files.read('settings') == {'theme': 'light'}
    assert await manager.get('settings') == {'theme': 'light'}


async def test_set_errors_are_logged_and_raised(db_backed, database, caplog):
    database.replace = AsyncMock(side_effect=RuntimeError('constraint failed'))

    with caplog.at_level(logging.ERROR), pytest.raises(RuntimeError, match='constraint failed'):
        await db_backed.set('faqs', ROWS)

    assert 'Error setting faqs' in caplog.text


async def test_set_is_idempotent(db_backed):
    await db_backed.set('faqs', ROWS)
    first = db_backed.files.path_for('faqs').read_text()

    await db_backed.set('faqs', ROWS)

    assert db_backed.files.path_for('faqs').read_text() == first
    assert await db_backed.get('faqs') == ROWS


# ==================== refresh / invalidate ====================

async def test_refresh_rebuilds_from_database(db_backed):
    await db_backed.set('faqs', ['stale'], skip_database=True)

    assert await db_backed.refresh('faqs') == ROWS
    assert db_backed.files.read('faqs') == ROWS
    assert await db_backed.cache.get('cascade:faqs') == ROWS


async def test_refresh_without_rows_clears_and_never_seeds(storage_path, database):
    seeder = MagicMock()
    database.load = AsyncMock(return_value=[])
    manager = make_manager(storage_path, database)
    manager.registry.register('faqs', Faq, seeder=seeder)
    await manager.set('faqs', ROWS, skip_database=True)

    assert await manager.refresh('faqs') is None
    assert not manager.files.exists('faqs')
    assert await manager.cache.has('cascade:faqs') is False
    seeder.assert_not_called()


async def test_invalidate_leaves_database_untouched(db_backed, database):
    await db_backed.set('faqs', ROWS)
    database.replace.reset_mock()

    await db_backed.invalidate('faqs')

    assert not db_backed.files.exists('faqs')
    assert await db_backed.cache.has('cascade:faqs') is False
    database.replace.assert_not_called()


async def test_clear_cache_keeps_file(manager):
    await manager.set('settings', 1)

    await manager.clear_cache('settings')

    assert await manager.cache.has('cascade:settings') is False
    assert manager.files.exists('settings')


async def test_clear_all_cache_flushes_cache_and_files(manager):
    await manager.set('a', 1)
    await manager.set('b', 2)
    await manager.cache.put('unrelated', 'x', 60)

    await manager.clear_all_cache()

    assert manager.files.keys() == []
    assert await manager.cache.has('cascade:a') is False
    assert await manager.cache.has('unrelated') is False


async def test_clear_all_cache_with_tags_spares_foreign_entries(storage_path):
    manager = make_manager(storage_path, use_tags=True)
    await manager.set('a', 1)
    await manager.cache.put('unrelated', 'x', 60)

    await manager.clear_all_cache()

    assert await manager.cache.has('cascade:a') is False
    assert await manager.cache.get('unrelated') == 'x'
    assert manager.files.keys() == []


# ==================== remember ====================

async def test_remember_invokes_producer_once(manager):
    calls = []

    def producer():
        calls.append(1)
        return {'computed': True}

    assert await manager.remember('report', producer) == {'computed': True}
    assert await manager.remember('report', producer) == {'computed': True}

    assert len(calls) == 1
    assert not manager.files.exists('report')


async def test_remember_uses_physical_key_only(manager):
    manager.files.write('report', 'from file')

    assert await manager.remember('report', lambda: 'produced') == 'produced'


# ==================== isolation ====================

async def test_isolated_visitors_see_independent_values(storage_path):
    visitor = Visitor('alice')
    manager = make_manager(storage_path, visitor=visitor)

    assert await manager.remember('cart', lambda: ['alice item'], visitor_isolation=True) == ['alice item']

    visitor.identity = 'bob'
    assert await manager.remember('cart', lambda: ['bob item'], visitor_isolation=True) == ['bob item']

    visitor.identity = 'alice'
    assert await manager.get('cart', None, {'visitor_isolation': True}) == ['alice item']


async def test_without_isolation_visitors_share_values(storage_path):
    visitor = Visitor('alice')
    manager = make_manager(storage_path, visitor=visitor)

    await manager.remember('cart', lambda: ['shared'])

    visitor.identity = 'bob'
    assert await manager.remember('cart', lambda: ['other']) == ['shared']


async def test_camel_case_isolation_option(storage_path):
    visitor = Visitor('alice')
    manager = make_manager(storage_path, visitor=visitor)
    isolated_key = manager.cache_key('cart', True)
    await manager.cache.put(isolated_key, 'isolated', 60)

    assert await manager.get('cart', None, {'visitorIsolation': True}) == 'isolated'
    assert await manager.get('cart', 'shared-miss') == 'shared-miss'


async def test_isolated_set_with_tags_flushes_isolation_group(storage_path):
    visitor = Visitor('alice')
    manager = make_manager(storage_path, visitor=visitor, use_tags=True, visitor_isolation=True)
    await manager.remember('cart', lambda: 'old', visitor_isolation=True)
    isolated_key = manager.cache_key('cart', True)

    await manager.set('cart', 'new', skip_database=True)

    assert await manager.cache.has(isolated_key) is False
    assert await manager.cache.has('cascade:cart') is False
    assert await manager.get('cart') == 'new'


async def test_isolated_set_without_tags_warns_about_stale_copies(storage_path, caplog):
    visitor = Visitor('alice')
    manager = make_manager(storage_path, visitor=visitor, visitor_isolation=True)
    await manager.remember('cart', lambda: 'old', visitor_isolation=True)

    with caplog.at_level(logging.WARNING):
        await manager.set('cart', 'new', skip_database=True)

    assert 'Unable to clear all visitor caches for cart' in caplog.text
    assert await manager.cache.get(manager.cache_key('cart', True)) == 'old'


# ==================== stats and logging ====================

async def test_stats_snapshot_and_reset(manager):
    await manager.set('a', 1)
    await manager.get('a')
    await manager.get('missing')

    stats = manager.get_stats()
    stats['hits']['cache'] = 99

    assert manager.get_stats() == {'hits': {'cache': 1, 'file': 0, 'database': 0}, 'misses': 1, 'writes': 1}

    manager.reset_stats()
    assert manager.get_stats() == {'hits': {'cache': 0, 'file': 0, 'database': 0}, 'misses': 0, 'writes': 0}


async def test_operational_logging_disabled_by_default(manager, caplog):
    with caplog.at_level(logging.DEBUG, logger='cache_cascade'):
        await manager.get('missing')

    assert 'Cache miss' not in caplog.text


async def test_operational_logging_uses_channel_and_toggles(storage_path, caplog):
    manager = make_manager(storage_path, logging={
        'enabled': True,
        'channel': 'cascade_test_channel',
        'level': 'debug',
        'log_hits': False,
    })

    with caplog.at_level(logging.DEBUG, logger='cascade_test_channel'):
        await manager.set('a', 1)
        await manager.get('a')
        await manager.get('missing')

    messages = [record.getMessage() for record in caplog.records if record.name == 'cascade_test_channel']
    assert 'CacheCascade: Data written for key: a' in messages
    assert 'CacheCascade: Cache miss for key: missing' in messages
    assert not any('hit' in message for message in messages)


async def test_operational_logging_minimum_level(storage_path, caplog):
    manager = make_manager(storage_path, logging={'enabled': True, 'channel': 'cascade_level_test', 'level': 'info'})

    with caplog.at_level(logging.DEBUG, logger='cascade_level_test'):
        await manager.set('a', 1)
        await manager.get('missing')

    messages = [record.getMessage() for record in caplog.records if record.name == 'cascade_level_test']
    assert messages == ['CacheCascade: Cache miss for key: missing']


async def test_operational_logging_to_file(storage_path, tmp_path):
    log_file = tmp_path / 'logs' / 'cascade.log'
    manager = make_manager(storage_path, logging={
        'enabled': True,
        'channel': 'cascade_file_test',
        'file': str(log_file),
    })

    await manager.get('missing')
    for handler in manager.logger.handlers:
        handler.flush()

    entry = json.loads(log_file.read_text().splitlines()[-1])
    assert entry['message'] == 'CacheCascade: Cache miss for key: missing'
    assert entry['context'] == {'key': 'missing', 'default_used': True}

    for handler in list(manager.logger.handlers):
        handler.close()
        manager.logger.removeHandler(handler)


# ==================== construction ====================

def test_accepts_plain_dict_config(storage_path):
    manager = CacheCascadeManager({'config_path': str(storage_path), 'cache_prefix': 'x:'})

    assert manager.cache_key('faqs') == 'x:faqs'
    assert manager.files.root == storage_path


def test_tagging_requires_store_support(storage_path, tmp_path):
    manager = make_manager(storage_path, use_tags=True, cache={'driver': 'file', 'path': str(tmp_path / 'c')})

    assert manager.tagging_enabled() is False
