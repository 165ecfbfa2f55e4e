"""
Config Manager - Laravel-style configuration access
Access package configuration using dot notation
"""

import copy
import importlib
import threading
from typing import Any, Optional, Dict

from cache_cascade.defaults import DEFAULT_CONFIG, ENV_PREFIX


class CascadeConfig:
    """
    Configuration holder with dot notation access

    Usage:
        config = CascadeConfig({'default_ttl': 600, 'logging': {'enabled': True}})

        # Get config value
        ttl = config.get('default_ttl')
        log_hits = config.get('logging.log_hits', True)

        # Set runtime value
        config.set('visitor_isolation', True)

        # Check existence
        if config.has('cache.url'):
            ...

    User values are merged over DEFAULT_CONFIG, nested dicts are merged key by key.
    """

    def __init__(self, overrides: Optional[Dict[str, Any]] = None):
        self._lock = threading.Lock()
        self._items: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
        if overrides:
            self.merge(overrides)

    @classmethod
    def from_module(cls, module_path: str = 'config.cache_cascade',
                    overrides: Optional[Dict[str, Any]] = None) -> 'CascadeConfig':
        """
        Load configuration from a config module exposing a CACHE_CASCADE dict

        Missing modules fall back to the defaults.

        Example:
            # config/cache_cascade.py
            CACHE_CASCADE = {'config_path': 'storage/dynamic'}

            config = CascadeConfig.from_module('config.cache_cascade')
        """
        config = cls()
        try:
            module = importlib.import_module(module_path)
        except ImportError:
            module = None

        if module is not None:
            config.merge(getattr(module, 'CACHE_CASCADE', {}) or {})

        if overrides:
            config.merge(overrides)
        return config

    @classmethod
    def from_env(cls, env_path=None, overrides: Optional[Dict[str, Any]] = None) -> 'CascadeConfig':
        """
        Build configuration from CACHE_CASCADE_* environment variables

        Nested options use a double underscore:
            CACHE_CASCADE_DEFAULT_TTL=600
            CACHE_CASCADE_LOGGING__ENABLED=true
            CACHE_CASCADE_CACHE__DRIVER=redis
        """
        from cache_cascade.support.env_helper import EnvHelper

        if env_path is not None:
            EnvHelper.load(env_path)

        config = cls()
        for name, value in EnvHelper.with_prefix(ENV_PREFIX).items():
            key = name[len(ENV_PREFIX):].lower().replace('__', '.')
            config.set(key, EnvHelper.cast(value))

        if overrides:
            config.merge(overrides)
        return config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation (case-insensitive)

        Example:
            config.get('logging.channel', 'cache_cascade')
            config.get('LOGGING.Channel')  # Same result
        """
        value: Any = self._items

        for part in key.lower().split('.'):
            if not isinstance(value, dict):
                return default

            found = False
            for dict_key in value.keys():
                if dict_key.lower() == part:
                    value = value[dict_key]
                    found = True
                    break
            if not found:
                return default

        return value

    def set(self, key: str, value: Any):
        """
        Set configuration value at runtime

        Example:
            config.set('logging.enabled', True)
        """
        parts = key.lower().split('.')

        with self._lock:
            target = self._items
            for part in parts[:-1]:
                if not isinstance(target.get(part), dict):
                    target[part] = {}
                target = target[part]
            target[parts[-1]] = value

    def has(self, key: str) -> bool:
        """Check if configuration key exists and is not None"""
        return self.get(key) is not None

    def merge(self, values: Dict[str, Any]):
        """Deep-merge a dict of values into the configuration"""
        with self._lock:
            self._merge_into(self._items, values)

    def all(self) -> Dict[str, Any]:
        """Get a copy of every configuration value"""
        return copy.deepcopy(self._items)

    @classmethod
    def _merge_into(cls, target: Dict[str, Any], values: Dict[str, Any]):
        for key, value in values.items():
            key = key.lower()
            if isinstance(value, dict) and isinstance(target.get(key), dict):
                cls._merge_into(target[key], value)
            else:
                target[key] = copy.deepcopy(value)
