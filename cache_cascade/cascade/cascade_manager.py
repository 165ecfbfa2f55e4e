"""
Cache Cascade Manager
Resolves keys through cache -> file -> database -> seeder and writes back up
"""
import copy
import inspect
import logging
from typing import Any, Callable, Dict, List, Optional, Type

from cache_cascade.cache import CacheManager
from cache_cascade.cascade.cache_key import CacheKeyResolver
from cache_cascade.cascade.file_layer import FileLayer
from cache_cascade.database.cascade_invalidation import register_cascade_hooks
from cache_cascade.defaults import DEFAULT_CACHE_TAG, DEFAULT_CACHE_TTL
from cache_cascade.database.database_layer import DatabaseLayer
from cache_cascade.database.model_registry import ModelRegistry
from cache_cascade.logging import LoggerConfig, getLogger
from cache_cascade.support.config import CascadeConfig
from cache_cascade.support.storage import Storage

logger = getLogger(__name__)


async def _resolve(value):
    if inspect.isawaitable(value):
        return await value
    return value


class CacheCascadeManager:
    """
    Layered cache with fallback and write propagation

    Reads walk the layers until one has the key, promoting the value into
    the faster layers on the way back:

        cache -> file (<config_path>/<key>.json) -> database -> seeder

    Writes go file -> cache -> database. The file layer is shared by every
    visitor; only cache keys carry the isolation suffix.

    Usage:
        manager = CacheCascadeManager(CascadeConfig({'config_path': 'storage/dynamic'}))
        manager.observe(Faq, seeder=FaqSeeder)

        faqs = await manager.get('faqs', [])
        await manager.set('faqs', rows)
        await manager.refresh('faqs')
    """

    def __init__(
        self,
        config: Optional[CascadeConfig] = None,
        cache: Optional[CacheManager] = None,
        registry: Optional[ModelRegistry] = None,
        database: Optional[DatabaseLayer] = None,
        files: Optional[FileLayer] = None,
        visitor_resolver: Optional[Callable[[], Optional[str]]] = None,
        session_resolver: Optional[Callable[[], Optional[str]]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        if config is None:
            config = CascadeConfig()
        elif isinstance(config, dict):
            config = CascadeConfig(config)

        self.config = config
        self.cache = cache or CacheManager(
            driver=config.get('cache.driver', 'array'),
            config=config.get('cache', {}) or {},
        )
        self.registry = registry or ModelRegistry(
            model_namespace=config.get('model_namespace'),
            seeder_namespace=config.get('seeder_namespace'),
        )
        self.database = database or DatabaseLayer()
        self.files = files or FileLayer(Storage.resolve(config.get('config_path')))
        self.key_resolver = CacheKeyResolver(
            prefix=config.get('cache_prefix', ''),
            visitor_resolver=visitor_resolver,
            session_resolver=session_resolver,
        )
        self.logger = logger or LoggerConfig.from_options(config.get('logging', {}) or {})

        self._stats: Dict[str, Any] = {}
        self.reset_stats()

    # ==================== Reads ====================

    async def get(self, key: str, default: Any = None, options: Optional[Dict[str, Any]] = None) -> Any:
        """
        Get a value, falling back through every layer

        Args:
            key: Logical key, e.g. 'faqs'
            default: Returned (transformed) when no layer has the key
            options: 'ttl', 'transform' and 'visitor_isolation'
                     ('visitorIsolation' is accepted too)
        """
        options = options or {}
        ttl = options.get('ttl') or self.default_ttl
        transform = options.get('transform')
        isolation = self._isolation_option(options)

        cache_key = self.cache_key(key, isolation)

        if await self.cache.has(cache_key):
            data = await self.cache.get(cache_key)
            self._stats['hits']['cache'] += 1
            self._log('hits', 'debug', f"Cache hit for key: {key}", {'layer': 'cache', 'key': key})
            return await self._transform(transform, data)

        data = self._read_file(key)
        if data is not None:
            await self._put_cache(key, cache_key, data, ttl)
            self._stats['hits']['file'] += 1
            self._log('hits', 'debug', f"File hit for key: {key}", {'layer': 'file', 'key': key})
            return await self._transform(transform, data)

        if self.config.get('use_database', True):
            data = await self._load_from_database(key, seed=self.config.get('auto_seed', True))
            if data is not None:
                await self._put_cache(key, cache_key, data, ttl)
                self._write_file(key, data)
                self._stats['hits']['database'] += 1
                self._log('hits', 'debug', f"Database hit for key: {key}", {'layer': 'database', 'key': key})
                return await self._transform(transform, data)

        self._stats['misses'] += 1
        self._log('misses', 'info', f"Cache miss for key: {key}", {'key': key, 'default_used': True})
        return await self._transform(transform, default)

    async def remember(self, key: str, producer: Callable, ttl: Optional[int] = None,
                       visitor_isolation: bool = False) -> Any:
        """
        Cache-aside on the cache layer only

        The producer runs at most once per call. Concurrent callers that
        miss together each run it.
        """
        cache_key = self.cache_key(key, visitor_isolation)
        return await self._cache_view(key).remember(cache_key, ttl or self.default_ttl, producer)

    # ==================== Writes ====================

    async def set(self, key: str, data: Any, skip_database: bool = False) -> None:
        """
        Write a value through every layer

        Order is file, cache, then database (full replace) unless
        skip_database is set or the database layer is disabled. Errors are
        logged and re-raised.
        """
        try:
            self._stats['writes'] += 1

            self.files.write(key, data)

            if self.config.get('visitor_isolation', False):
                await self._clear_visitor_caches(key)
            else:
                await self._put_cache(key, self.cache_key(key), data, self.default_ttl)

            if skip_database or not self.config.get('use_database', True):
                self._log('writes', 'debug', f"Data written for key: {key}",
                          {'key': key, 'layers': ['cache', 'file']})
                return

            await self._save_to_database(key, data)
            self._log('writes', 'debug', f"Data written for key: {key}",
                      {'key': key, 'layers': ['cache', 'file', 'database']})
        except Exception as e:
            logger.error(f"CacheCascade: Error setting {key}: {e}", exc_info=True)
            raise

    async def refresh(self, key: str) -> Optional[List[Dict[str, Any]]]:
        """
        Rebuild the cache and file layers from the database

        Never seeds. Returns the fresh rows, or None when the database has
        nothing for the key.
        """
        await self.invalidate(key)

        data = await self._load_from_database(key, seed=False)

        if data is not None:
            self._write_file(key, data)
            await self._put_cache(key, self.cache_key(key), data, self.default_ttl)

        return data

    async def invalidate(self, key: str) -> None:
        """Drop the key from the cache and file layers (database untouched)"""
        await self.clear_cache(key)
        self.files.delete(key)

    async def clear_cache(self, key: str) -> None:
        if self.config.get('visitor_isolation', False):
            await self._clear_visitor_caches(key)
        else:
            await self.cache.forget(self.cache_key(key))

    async def clear_all_cache(self) -> None:
        """Flush the cascade's cache entries and delete every stored file"""
        if self.tagging_enabled():
            await self.cache.tags(self.cache_tag).flush()
        else:
            await self.cache.flush()

        self.files.clear()

    # ==================== Models ====================

    def observe(self, model: Type, key: Optional[str] = None, seeder: Optional[Type] = None) -> None:
        """
        Back a key with a model and keep it fresh on model lifecycle events

        The key defaults to the model's table name.
        """
        key = key or model._meta.db_table
        self.registry.register(key, model, seeder=seeder)
        register_cascade_hooks(model, self, key)

    # ==================== Statistics ====================

    def get_stats(self) -> Dict[str, Any]:
        return copy.deepcopy(self._stats)

    def reset_stats(self) -> None:
        self._stats = {
            'hits': {'cache': 0, 'file': 0, 'database': 0},
            'misses': 0,
            'writes': 0,
        }

    # ==================== Keys and tags ====================

    @property
    def default_ttl(self) -> int:
        return self.config.get('default_ttl') or DEFAULT_CACHE_TTL

    @property
    def cache_tag(self) -> str:
        return self.config.get('cache_tag', DEFAULT_CACHE_TAG)

    def cache_key(self, key: str, visitor_isolation: bool = False) -> str:
        """Physical cache key for a logical key"""
        return self.key_resolver.resolve(key, visitor_isolation)

    def tagging_enabled(self) -> bool:
        """Tags are used only when configured and the store supports them"""
        return bool(self.config.get('use_tags', False)) and self.cache.supports_tags()

    def _cache_view(self, key: str):
        if self.tagging_enabled():
            return self.cache.tags(self.cache_tag, self.key_resolver.group_tag(self.cache_tag, key))
        return self.cache

    async def _put_cache(self, key: str, cache_key: str, data: Any, ttl: int) -> None:
        await self._cache_view(key).put(cache_key, data, ttl)

    async def _clear_visitor_caches(self, key: str) -> None:
        if self.tagging_enabled():
            await self.cache.tags(self.key_resolver.group_tag(self.cache_tag, key)).flush()
        else:
            await self.cache.forget(self.cache_key(key))
            logger.warning(f"CacheCascade: Unable to clear all visitor caches for {key} without tag support")

    def _isolation_option(self, options: Dict[str, Any]) -> bool:
        for name in ('visitor_isolation', 'visitorIsolation'):
            if options.get(name) is not None:
                return bool(options[name])
        return bool(self.config.get('visitor_isolation', False))

    # ==================== Layers ====================

    def _read_file(self, key: str) -> Any:
        if not self.files.exists(key):
            return None

        try:
            return self.files.read(key)
        except Exception as e:
            logger.error(f"CacheCascade: Error reading file for {key}: {e}")
            return None

    def _write_file(self, key: str, data: Any) -> None:
        try:
            self.files.write(key, data)
        except Exception as e:
            logger.error(f"CacheCascade: Error writing file for {key}: {e}")

    async def _load_from_database(self, key: str, seed: bool = True) -> Optional[List[Dict[str, Any]]]:
        """Rows for the key, seeding an empty table first when allowed"""
        try:
            model = self.registry.model_for(key)
            if model is None:
                return None

            data = await self.database.load(model)
            if data:
                return data

            if seed:
                return await self._auto_seed(key, model)
        except Exception as e:
            logger.error(f"CacheCascade: Error loading {key} from database: {e}", exc_info=True)

        return None

    async def _save_to_database(self, key: str, data: Any) -> None:
        model = self.registry.model_for(key)
        if model is None:
            return

        try:
            await self.database.replace(model, data)
        except Exception as e:
            logger.error(f"CacheCascade: Error saving {key} to database: {e}")
            raise

    async def _auto_seed(self, key: str, model: Type) -> Optional[List[Dict[str, Any]]]:
        seeder_class = self.registry.seeder_for(key)
        if seeder_class is None:
            return None

        try:
            await _resolve(seeder_class().run())
            data = await self.database.load(model)
        except Exception as e:
            logger.error(f"CacheCascade: Failed to run seeder for {key}: {e}", exc_info=True)
            return None

        return data or None

    @staticmethod
    async def _transform(transform: Optional[Callable], value: Any) -> Any:
        if transform is None:
            return value
        return await _resolve(transform(value))

    # ==================== Logging ====================

    def _log(self, event: str, level: str, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Operational log honouring the logging.* options

        event is one of 'hits', 'misses' or 'writes' and is checked against
        the matching logging.log_<event> toggle.
        """
        if not self.config.get('logging.enabled', False):
            return
        if not self.config.get(f'logging.log_{event}', True):
            return

        log_level = LoggerConfig.level_from_name(level)
        if log_level < LoggerConfig.level_from_name(self.config.get('logging.level', 'debug')):
            return

        self.logger.log(log_level, f"CacheCascade: {message}", extra={'context': context or {}})
