"""
Logging Package
Structured logging for the cascade

Provides a drop-in replacement for logging.getLogger so every module
logs under the package namespace.
"""
from cache_cascade.logging.logger_config import (
    LoggerConfig,
    JSONFormatter,
)
import logging
from typing import Optional

__all__ = [
    'LoggerConfig',
    'JSONFormatter',
    'getLogger',
    'INFO',
    'DEBUG',
    'WARNING',
    'ERROR',
    'CRITICAL',
]

# Export logging levels for convenience
INFO = logging.INFO
DEBUG = logging.DEBUG
WARNING = logging.WARNING
ERROR = logging.ERROR
CRITICAL = logging.CRITICAL


def getLogger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance (drop-in replacement for logging.getLogger)

    Module-based names (containing '.') are used as-is. Bare names
    are treated as channels and used as-is as well; None returns the
    package logger rather than the root logger.

    Example:
        from cache_cascade.logging import getLogger
        logger = getLogger(__name__)

        logger.info("Something happened")
        logger.error("Error occurred", exc_info=True)
        logger.warning("Warning message", extra={'key': 'faqs'})
    """
    if name is None:
        name = 'cache_cascade'
    return logging.getLogger(name)
