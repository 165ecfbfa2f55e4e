"""
Helper functions
Laravel-style shortcuts around the CacheCascade facade
"""
from pathlib import Path
from typing import Any, List, Optional, Union

from cache_cascade.cascade.file_layer import FileLayer
from cache_cascade.support.config import CascadeConfig
from cache_cascade.support.facades import CacheCascade
from cache_cascade.support.storage import Storage


def cache_cascade(key: Optional[str] = None, default: Any = None):
    """
    Get a value from the cascade, or the cascade itself

    Examples:
        manager = cache_cascade()
        faqs = await cache_cascade('faqs', [])
        stats = await cache_cascade('stats', lambda: compute_stats())

    A callable default is used as a remember() producer. Anything else is
    the get() default. Both return a coroutine.
    """
    if key is None:
        return CacheCascade.get_facade_root()

    if callable(default):
        return CacheCascade.remember(key, default)

    return CacheCascade.get(key, default)


def _storage_root(config: Optional[CascadeConfig] = None) -> Path:
    config = config or CascadeConfig()
    return Storage.resolve(config.get('config_path'))


def get_file_storage_keys(config: Optional[CascadeConfig] = None) -> List[str]:
    """Logical keys that currently have a file in the storage root"""
    return FileLayer(_storage_root(config)).keys()


def get_static_config_files(config_dir: Union[str, Path, None] = None,
                            config: Optional[CascadeConfig] = None) -> List[str]:
    """
    Python config modules under config_dir, excluding the cascade's storage root

    Useful when snapshotting application config without the dynamic files.
    """
    config_dir = Path(config_dir) if config_dir is not None else Storage.config()
    dynamic_path = _storage_root(config).resolve()

    if not config_dir.is_dir():
        return []

    files = []
    for file in sorted(config_dir.rglob('*.py')):
        resolved = file.resolve()
        if resolved == dynamic_path or dynamic_path in resolved.parents:
            continue
        files.append(str(file))

    return files
