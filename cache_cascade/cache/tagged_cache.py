"""
Tagged Cache
Tag-scoped view over a tag-capable cache store
"""
import inspect
from typing import Any, Callable, List


class TaggedCache:
    """
    Groups cache keys under one or more tags

    Keys written through a tagged view are stored under their plain key and
    recorded as members of every tag, so they stay readable through the
    store's normal get()/has(). Flushing the view forgets every member key
    of every tag.

    Usage:
        tagged = store.tags('cache-cascade', 'cache-cascade:faqs')
        await tagged.put('cascade:faqs', rows, 3600)
        await tagged.flush()
    """

    def __init__(self, store, names: List[str]):
        self.store = store
        self.names = list(names)

    async def get(self, key: str, default: Any = None) -> Any:
        return await self.store.get(key, default)

    async def has(self, key: str) -> bool:
        return await self.store.has(key)

    async def put(self, key: str, value: Any, ttl: int = None) -> bool:
        """Put value in cache and record it under every tag"""
        stored = await self.store.put(key, value, ttl)
        if stored:
            await self.store.tag_key(self.names, key, ttl)
        return stored

    async def forget(self, key: str) -> bool:
        return await self.store.forget(key)

    async def remember(self, key: str, ttl: int, callback: Callable) -> Any:
        """Get cached value or compute and cache it under the tags"""
        if await self.store.has(key):
            return await self.store.get(key)

        value = callback()
        if inspect.isawaitable(value):
            value = await value

        await self.put(key, value, ttl)
        return value

    async def flush(self) -> bool:
        """Forget every key tagged with any of the tags"""
        keys = await self.store.tagged_keys(self.names)
        for key in keys:
            await self.store.forget(key)
        await self.store.forget_tags(self.names)
        return True
