"""RedisStore against a mocked async client."""

import json
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from cache_cascade.cache import RedisStore


@pytest.fixture
def client():
    redis = AsyncMock()
    redis.get = AsyncMock(return_value=None)
    redis.exists = AsyncMock(return_value=0)
    redis.smembers = AsyncMock(return_value=set())
    redis.ttl = AsyncMock(return_value=-2)
    return redis


@pytest.fixture
def store(client):
    return RedisStore(client=client)


async def test_put_serializes_json_with_setex(store, client):
    assert await store.put('cascade:faqs', [{'id': 1}], 60) is True

    client.setex.assert_awaited_once_with('cascade:faqs', 60, json.dumps([{'id': 1}]))


async def test_put_without_ttl_uses_plain_set(store, client):
    await store.put('key', 'value', 0)

    client.set.assert_awaited_once_with('key', '"value"')
    client.setex.assert_not_called()


async def test_get_decodes_json(store, client):
    client.get.return_value = '{"a": 1}'

    assert await store.get('key') == {'a': 1}


async def test_get_returns_default_when_missing_or_unreadable(store, client):
    assert await store.get('key', 'default') == 'default'

    client.get.return_value = 'not json'
    assert await store.get('key', 'default') == 'default'


async def test_connection_errors_are_logged_not_raised(store, client):
    client.get.side_effect = RedisConnectionError('down')
    client.setex.side_effect = RedisConnectionError('down')

    assert await store.get('key', 'default') == 'default'
    assert await store.put('key', 'value', 60) is False


async def test_has_and_forget(store, client):
    client.exists.return_value = 1

    assert await store.has('key') is True
    assert await store.forget('key') is True
    client.delete.assert_awaited_once_with('key')


async def test_tag_membership_uses_sets(store, client):
    await store.tags('cache-cascade', 'cache-cascade:faqs').put('cascade:faqs', [], 60)

    client.sadd.assert_any_await('tag:cache-cascade', 'cascade:faqs')
    client.sadd.assert_any_await('tag:cache-cascade:faqs', 'cascade:faqs')


async def test_tag_flush_deletes_members_and_index(store, client):
    client.smembers.return_value = {'cascade:faqs', 'cascade:faqs:abc'}

    await store.tags('cache-cascade:faqs').flush()

    client.delete.assert_any_await('cascade:faqs')
    client.delete.assert_any_await('cascade:faqs:abc')
    client.delete.assert_any_await('tag:cache-cascade:faqs')


async def test_new_tag_sets_expire_with_their_member(store, client):
    await store.tags('cache-cascade').put('cascade:faqs', [], 60)

    client.expire.assert_awaited_once_with('tag:cache-cascade', 60)


async def test_tag_set_ttl_only_grows(store, client):
    client.ttl.return_value = 3600
    await store.tags('cache-cascade').put('cascade:faqs', [], 60)
    client.expire.assert_not_awaited()

    client.ttl.return_value = 30
    await store.tags('cache-cascade').put('cascade:settings', [], 60)
    client.expire.assert_awaited_once_with('tag:cache-cascade', 60)


async def test_forever_entries_make_tag_sets_persistent(store, client):
    await store.tags('cache-cascade').put('cascade:faqs', [], 0)

    client.persist.assert_awaited_once_with('tag:cache-cascade')
    client.expire.assert_not_awaited()


async def test_persistent_tag_sets_keep_no_expiry(store, client):
    client.ttl.return_value = -1

    await store.tags('cache-cascade').put('cascade:faqs', [], 60)

    client.expire.assert_not_awaited()
    client.persist.assert_not_awaited()
