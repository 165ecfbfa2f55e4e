"""
Cache Key Resolver
Derives physical cache keys from logical keys
"""
import hashlib
from typing import Callable, Optional

from cache_cascade.support.context import get_current_session, get_current_visitor


class CacheKeyResolver:
    """
    Builds the key used against the cache backend

        prefix + key                      (shared)
        prefix + key + ':' + md5(visitor) (visitor isolation)

    The visitor comes from the injected visitor resolver when it yields an
    identifier, else from the session resolver. Without either, isolated
    keys degrade to the shared key.
    """

    def __init__(
        self,
        prefix: str = '',
        visitor_resolver: Optional[Callable[[], Optional[str]]] = None,
        session_resolver: Optional[Callable[[], Optional[str]]] = None,
    ):
        self.prefix = prefix
        self.visitor_resolver = visitor_resolver or get_current_visitor
        self.session_resolver = session_resolver or get_current_session

    def resolve(self, key: str, visitor_isolation: bool = False) -> str:
        cache_key = f"{self.prefix}{key}"

        if visitor_isolation:
            visitor_id = self.visitor_id()
            if visitor_id:
                cache_key += ':' + self.digest(visitor_id)

        return cache_key

    def visitor_id(self) -> Optional[str]:
        visitor_id = self.visitor_resolver()
        if visitor_id:
            return str(visitor_id)

        session_id = self.session_resolver()
        return str(session_id) if session_id else None

    @staticmethod
    def digest(value: str) -> str:
        return hashlib.md5(str(value).encode('utf-8')).hexdigest()

    @staticmethod
    def group_tag(tag: str, key: str) -> str:
        """Tag grouping every physical key of one logical key"""
        return f"{tag}:{key}"
