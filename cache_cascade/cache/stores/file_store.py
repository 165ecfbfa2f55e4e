"""
File Cache Store
File-based caching implementation (no tag support)
"""
import hashlib
import json
import time
import threading
from typing import Any
from pathlib import Path

from cache_cascade.cache.cache_interface import CacheStoreInterface


class FileStore(CacheStoreInterface):

    def __init__(self, cache_dir: Path = None):
        """
        Initialize file cache store

        Args:
            cache_dir: Directory for cache files (default: storage/cache/data)
        """
        if cache_dir is None:
            from cache_cascade.support.storage import Storage
            cache_dir = Storage.base('storage', 'cache', 'data')

        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _get_cache_file(self, key: str) -> Path:
        """Get cache file path for key"""
        # Physical keys contain ':' and visitor digests, hash them for the filesystem
        digest = hashlib.sha1(key.encode('utf-8')).hexdigest()
        return self.cache_dir / f"{digest}.cache"

    def _is_expired(self, cache_data: dict) -> bool:
        """Check if cache data is expired"""
        if cache_data.get('ttl') == 0 or cache_data.get('ttl') == -1:
            return False  # Never expires

        expires_at = cache_data.get('expires_at', 0)
        return time.time() > expires_at

    def _read(self, key: str):
        """Read a live cache entry, returns (found, value)"""
        cache_file = self._get_cache_file(key)

        if not cache_file.exists():
            return False, None

        try:
            with open(cache_file, 'r', encoding='utf-8') as f:
                cache_data = json.load(f)
        except (OSError, ValueError):
            return False, None

        if self._is_expired(cache_data):
            cache_file.unlink(missing_ok=True)
            return False, None

        return True, cache_data.get('value')

    async def get(self, key: str, default: Any = None) -> Any:
        """Get cached value"""
        with self._lock:
            found, value = self._read(key)
            return value if found else default

    async def put(self, key: str, value: Any, ttl: int = None) -> bool:
        """Put value in cache"""
        if ttl is None:
            from cache_cascade.defaults import DEFAULT_CACHE_TTL
            ttl = DEFAULT_CACHE_TTL
        with self._lock:
            cache_file = self._get_cache_file(key)

            cache_data = {
                'key': key,
                'value': value,
                'ttl': ttl,
                'expires_at': time.time() + ttl if ttl > 0 else -1,
                'created_at': time.time()
            }

            try:
                payload = json.dumps(cache_data, indent=2, ensure_ascii=False)
                with open(cache_file, 'w', encoding='utf-8') as f:
                    f.write(payload)
                return True
            except (OSError, TypeError, ValueError):
                return False

    async def has(self, key: str) -> bool:
        """Check if key exists and is not expired"""
        with self._lock:
            found, _ = self._read(key)
            return found

    async def forget(self, key: str) -> bool:
        """Remove key from cache"""
        with self._lock:
            cache_file = self._get_cache_file(key)

            if cache_file.exists():
                try:
                    cache_file.unlink()
                    return True
                except OSError:
                    return False

            return False

    async def flush(self) -> bool:
        """Clear all cache in this store"""
        with self._lock:
            try:
                for cache_file in self.cache_dir.glob('*.cache'):
                    cache_file.unlink()
                return True
            except OSError:
                return False
