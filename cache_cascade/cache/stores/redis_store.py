"""
Redis Cache Store
High-performance in-memory caching shared between processes
"""
import json
from typing import Any, Dict, Iterable, List, Optional
from redis import asyncio as aioredis
from redis.exceptions import RedisError

from cache_cascade.cache.cache_interface import CacheStoreInterface
from cache_cascade.logging import getLogger

logger = getLogger(__name__)


class RedisStore(CacheStoreInterface):

    def __init__(self, redis_url: str = None, client: Optional[aioredis.Redis] = None,
                 tag_prefix: str = None):
        """
        Initialize Redis cache store

        Args:
            redis_url: Redis connection URL
            client: Pre-built async Redis client (skips connecting from the URL)
            tag_prefix: Prefix of the sets that index tag members
        """
        from cache_cascade.defaults import DEFAULT_REDIS_URL, DEFAULT_REDIS_TAG_PREFIX
        if redis_url is None:
            redis_url = DEFAULT_REDIS_URL
        self.redis_url = redis_url
        self.tag_prefix = tag_prefix or DEFAULT_REDIS_TAG_PREFIX
        self.redis: Optional[aioredis.Redis] = client
        self._connected = client is not None

    async def _ensure_connected(self):
        """Ensure connection to Redis"""
        if not self._connected:
            self.redis = aioredis.from_url(
                self.redis_url,
                encoding='utf-8',
                decode_responses=True
            )
            self._connected = True

    async def disconnect(self):
        """Disconnect from Redis"""
        if self.redis:
            await self.redis.aclose()
            self._connected = False

    async def get(self, key: str, default: Any = None) -> Any:
        """Get cached value"""
        await self._ensure_connected()

        try:
            value = await self.redis.get(key)
        except RedisError as e:
            logger.error(f"Redis get failed for {key}: {e}")
            return default

        if value is None:
            return default

        try:
            return json.loads(value)
        except ValueError:
            return default

    async def put(self, key: str, value: Any, ttl: int = None) -> bool:
        """Put value in cache"""
        if ttl is None:
            from cache_cascade.defaults import DEFAULT_CACHE_TTL
            ttl = DEFAULT_CACHE_TTL
        await self._ensure_connected()

        try:
            serialized = json.dumps(value, ensure_ascii=False)

            if ttl > 0:
                await self.redis.setex(key, ttl, serialized)
            else:
                await self.redis.set(key, serialized)

            return True
        except (RedisError, TypeError, ValueError) as e:
            logger.error(f"Redis put failed for {key}: {e}")
            return False

    async def has(self, key: str) -> bool:
        """Check if key exists in cache"""
        await self._ensure_connected()

        try:
            return await self.redis.exists(key) > 0
        except RedisError:
            return False

    async def forget(self, key: str) -> bool:
        """Remove key from cache"""
        await self._ensure_connected()

        try:
            await self.redis.delete(key)
            return True
        except RedisError:
            return False

    async def flush(self) -> bool:
        """Clear all cache"""
        await self._ensure_connected()

        try:
            await self.redis.flushdb()
            return True
        except RedisError:
            return False

    async def info(self) -> Dict[str, Any]:
        """Server information (used memory, connected clients, ...)"""
        await self._ensure_connected()
        return await self.redis.info()

    # ====================
    # Tagging
    # ====================

    def supports_tags(self) -> bool:
        return True

    def _tag_set(self, name: str) -> str:
        return f"{self.tag_prefix}{name}"

    async def tag_key(self, names: Iterable[str], key: str, ttl: Optional[int] = None) -> None:
        """
        Add key to every tag set

        A tag set expires with its longest-lived member. Tagging a key that
        never expires makes the set persistent.
        """
        if ttl is None:
            from cache_cascade.defaults import DEFAULT_CACHE_TTL
            ttl = DEFAULT_CACHE_TTL
        await self._ensure_connected()

        for name in names:
            tag_set = self._tag_set(name)
            remaining = await self.redis.ttl(tag_set)
            await self.redis.sadd(tag_set, key)

            if ttl <= 0:
                await self.redis.persist(tag_set)
            elif remaining == -2 or 0 <= remaining < ttl:
                # -2: the set was just created; -1: persistent, left as is
                await self.redis.expire(tag_set, ttl)

    async def tagged_keys(self, names: Iterable[str]) -> List[str]:
        await self._ensure_connected()
        keys = set()
        for name in names:
            members = await self.redis.smembers(self._tag_set(name))
            keys.update(members)
        return sorted(keys)

    async def forget_tags(self, names: Iterable[str]) -> None:
        await self._ensure_connected()
        await self.redis.delete(*[self._tag_set(name) for name in names])
