"""
EnvHelper - Read .env files
Laravel-style environment variable access
"""

import os
import threading
from pathlib import Path
from typing import Optional, Any, Dict
from dotenv import load_dotenv


class EnvHelper:
    """
    Environment variable reader with .env file support

    Usage:
        # Load
        EnvHelper.load('/path/to/.env')

        # Read
        value = EnvHelper.get('CACHE_CASCADE_DEFAULT_TTL', 86400)

        # Collect prefixed variables
        EnvHelper.with_prefix('CACHE_CASCADE_')
    """

    _lock = threading.Lock()
    _loaded: bool = False

    @classmethod
    def load(cls, env_path=None, override: bool = False) -> bool:
        """
        Load .env file into environment

        Args:
            env_path: Path to .env file (defaults to .env in the working directory)
            override: Whether to override existing environment variables

        Returns:
            bool: True if a file was loaded
        """
        with cls._lock:
            env_path = Path(env_path) if env_path else Path.cwd() / '.env'
            if not env_path.exists():
                return False

            load_dotenv(env_path, override=override)
            cls._loaded = True
            return True

    @classmethod
    def get(cls, key: str, default: Any = None) -> Optional[Any]:
        """Get environment variable, cast to bool/int/None where it looks like one"""
        value = os.environ.get(key)
        if value is None:
            return default
        return cls.cast(value)

    @classmethod
    def with_prefix(cls, prefix: str) -> Dict[str, str]:
        """Get all raw environment variables starting with prefix"""
        return {
            name: value
            for name, value in os.environ.items()
            if name.startswith(prefix)
        }

    @staticmethod
    def cast(value: str) -> Any:
        """
        Cast an environment string to a Python value

        'true'/'false' -> bool, 'null'/'none' -> None, digits -> int
        """
        lowered = value.strip().lower()
        if lowered in ('true', '(true)'):
            return True
        if lowered in ('false', '(false)'):
            return False
        if lowered in ('null', '(null)', 'none'):
            return None
        if lowered.lstrip('-').isdigit():
            return int(lowered)
        return value
