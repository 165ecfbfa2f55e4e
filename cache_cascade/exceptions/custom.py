"""
Custom Exception Classes
Package-specific exceptions
"""
from typing import Optional


class CacheCascadeException(Exception):
    """Base exception for all cache cascade exceptions"""
    message = "A cache cascade error occurred"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.__class__.message
        super().__init__(self.message)


class CorruptFileException(CacheCascadeException):
    """
    Persisted key file could not be parsed

    Raised by the file layer when a file exists but is not a valid
    {"data": ...} envelope. The cascade treats it as a file layer miss.

    Example:
        raise CorruptFileException("Invalid JSON in config/dynamic/faqs.json")
    """
    message = "Cache file is corrupt"


class UnknownCacheDriverException(CacheCascadeException):
    """
    Unknown cache driver requested

    Example:
        raise UnknownCacheDriverException("Unknown cache driver: memcached")
    """
    message = "Unknown cache driver"


class TagsNotSupportedException(CacheCascadeException):
    """
    Tagged cache operations requested on a store without tag support
    """
    message = "This cache store does not support tagging"
