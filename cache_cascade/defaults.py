"""
Package Default Values
All hardcoded values should be defined here and accessed via CascadeConfig.get()
This file contains sensible defaults that can be overridden in .env or a config module
"""

# ============================================================================
# FILE STORAGE DEFAULTS
# ============================================================================

# Relative to the application base path
DEFAULT_CONFIG_PATH = 'config/dynamic'
DEFAULT_FILE_EXTENSION = '.json'

# ============================================================================
# CACHE DEFAULTS
# ============================================================================

DEFAULT_CACHE_PREFIX = 'cascade:'
DEFAULT_CACHE_TTL = 86400  # seconds (24 hours)
DEFAULT_CACHE_TAG = 'cache-cascade'
DEFAULT_CACHE_DRIVER = 'array'

# ============================================================================
# REDIS DEFAULTS
# ============================================================================

DEFAULT_REDIS_URL = 'redis://localhost:6379/0'
DEFAULT_REDIS_TAG_PREFIX = 'tag:'

# ============================================================================
# LOGGING DEFAULTS
# ============================================================================

DEFAULT_LOG_CHANNEL = 'cache_cascade'
DEFAULT_LOG_LEVEL = 'debug'
DEFAULT_LOG_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_LOG_BACKUP_COUNT = 5

# ============================================================================
# ENVIRONMENT
# ============================================================================

ENV_PREFIX = 'CACHE_CASCADE_'

# ============================================================================
# PACKAGE CONFIGURATION
# ============================================================================

DEFAULT_CONFIG = {
    # Where persisted key files live (relative paths resolve against the base path)
    'config_path': DEFAULT_CONFIG_PATH,

    # Cache settings
    'cache_prefix': DEFAULT_CACHE_PREFIX,
    'default_ttl': DEFAULT_CACHE_TTL,
    'use_tags': False,
    'cache_tag': DEFAULT_CACHE_TAG,

    # Per-visitor cache keys to prevent data leakage between users
    'visitor_isolation': False,

    # Database integration
    'use_database': True,
    'auto_seed': True,
    'model_namespace': None,
    'seeder_namespace': None,

    # Fast cache backend
    'cache': {
        'driver': DEFAULT_CACHE_DRIVER,
        'path': None,
        'url': DEFAULT_REDIS_URL,
    },

    'logging': {
        'enabled': False,
        'channel': DEFAULT_LOG_CHANNEL,
        'level': DEFAULT_LOG_LEVEL,
        'log_hits': True,
        'log_misses': True,
        'log_writes': True,
        # Rotating log file for the channel; None leaves handlers to the host app
        'file': None,
        'format': 'json',
    },
}
