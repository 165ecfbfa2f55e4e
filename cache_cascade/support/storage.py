"""
Storage - Centralized path management (Laravel-style)
Resolves configured relative paths against the application base path
"""

import os
from pathlib import Path
from typing import Union


class Storage:
    """
    Centralized path management helper (Laravel-style)

    Relative paths such as the default 'config/dynamic' storage root are
    resolved against the base path, which defaults to the working directory.
    """

    _base_path: Path = None

    @classmethod
    def initialize(cls, base_path: Union[str, Path] = None):
        """
        Initialize paths (should be called during app startup)

        Args:
            base_path: Application base directory (defaults to current working directory)
        """
        if base_path is None:
            base_path = os.getcwd()

        cls._base_path = Path(base_path).resolve()

    @classmethod
    def base(cls, *paths: str) -> Path:
        """
        Get application base path

        Example:
            Storage.base('config', 'dynamic')  # /project/config/dynamic
        """
        if cls._base_path is None:
            cls.initialize()

        if paths:
            clean_paths = [p.lstrip('/') for p in paths]
            return cls._base_path.joinpath(*clean_paths)
        return cls._base_path

    @classmethod
    def config(cls, *paths: str) -> Path:
        """Get config path (config/)"""
        return cls.base('config', *paths)

    @classmethod
    def resolve(cls, path: Union[str, Path]) -> Path:
        """Absolute paths are returned as-is, relative ones are anchored at the base path"""
        path = Path(path)
        if path.is_absolute():
            return path
        return cls.base(str(path))

    @staticmethod
    def ensure_directory(path: Union[str, Path]) -> Path:
        """Create directory (and parents) if it doesn't exist"""
        path = Path(path)
        path.mkdir(parents=True, exist_ok=True)
        return path
