"""
Cascade Invalidation
Keeps the cascade warm when models are written outside CacheCascadeManager.set()
"""
from typing import Any, Optional, TYPE_CHECKING

from tortoise.signals import Signals

from cache_cascade.logging import getLogger

if TYPE_CHECKING:
    from cache_cascade.cascade.cascade_manager import CacheCascadeManager

logger = getLogger(__name__)


class CascadeInvalidation:
    """
    Model mixin exposing the cascade hooks

    Mix in before Model (and after SoftDeletes when used):

        class Faq(SoftDeletes, CascadeInvalidation, Model):
            fillable = ['question', 'order']

            class Meta:
                table = 'faqs'

        manager.observe(Faq)

    Overridable hooks:
        get_cascade_cache_key()         -> cache key for this row's data set (None opts out)
        scope_for_cascade_cache(query)  -> subset/order of rows to cache
    """

    # Bound by register_cascade_hooks()
    _cascade_manager: Optional['CacheCascadeManager'] = None
    _cascade_cache_key: Optional[str] = None

    def get_cascade_cache_key(self) -> Optional[str]:
        """
        Get the cache key for this model

        Defaults to the key the model was observed under, else the table
        name (the 'faqs' table becomes the 'faqs' cache key). Return None
        to skip invalidation.
        """
        return observed_cache_key(type(self))

    @classmethod
    def scope_for_cascade_cache(cls, query):
        """
        Narrow/order the rows that get cached

        Default: order by 'order' if it is fillable
        """
        if 'order' in getattr(cls, 'fillable', []):
            return query.order_by('order')
        return query

    @classmethod
    def cascade_query(cls):
        """Query loaded by the cascade: live rows passed through the scope hook"""
        if hasattr(cls, 'without_trashed'):
            query = cls.without_trashed()
        else:
            query = cls.all()
        return cls.scope_for_cascade_cache(query)

    @classmethod
    def cascade_manager(cls, required: bool = True) -> Optional['CacheCascadeManager']:
        """
        The manager bound by observe(), else the facade root

        Raises RuntimeError when neither exists, unless required is False
        (then None is returned).
        """
        if cls._cascade_manager is not None:
            return cls._cascade_manager

        from cache_cascade.support.facades import CacheCascade
        if not required and not CacheCascade.has_facade_root():
            return None
        return CacheCascade.get_facade_root()

    async def invalidate_cascade_cache(self) -> None:
        """Refresh the cascade for this model's cache key (skipped without a manager)"""
        cache_key = self.get_cascade_cache_key()
        if not cache_key:
            return

        manager = self.cascade_manager(required=False)
        if manager is None:
            logger.debug(f"No cascade manager bound for {cache_key}, skipping refresh")
            return

        await manager.refresh(cache_key)

    async def refresh_cascade_cache(self) -> Any:
        """
        Manually refresh the cascade cache

        Returns:
            Fresh rows, or None when the model opts out
        """
        cache_key = self.get_cascade_cache_key()

        if not cache_key:
            return None

        return await self.cascade_manager().refresh(cache_key)


def observed_cache_key(model) -> str:
    """The key a model was observed under, else its table name"""
    return getattr(model, '_cascade_cache_key', None) or model._meta.db_table


async def _refresh_cascade(sender, instance, *args) -> None:
    """Signal listener shared by the saved, deleted and restored events"""
    logger.debug(f"Lifecycle event on {sender.__name__}, refreshing cascade")

    if isinstance(instance, CascadeInvalidation):
        await instance.invalidate_cascade_cache()
        return

    # Models observed without the mixin refresh their registered key
    manager = getattr(sender, '_cascade_manager', None)
    if manager is None:
        logger.debug(f"No cascade manager bound for {sender.__name__}, skipping refresh")
        return

    await manager.refresh(observed_cache_key(sender))


def register_cascade_hooks(model, manager: 'CacheCascadeManager', key: Optional[str] = None) -> None:
    """
    Attach the invalidation hook to a model type

    Registers Tortoise post_save and post_delete listeners and, for soft
    deleting models, a restored listener. The model does not need the
    CascadeInvalidation mixin. key defaults to the table name. Registering
    again only rebinds the manager and key.
    """
    model._cascade_manager = manager
    model._cascade_cache_key = key or model._meta.db_table

    model.register_listener(Signals.post_save, _refresh_cascade)
    model.register_listener(Signals.post_delete, _refresh_cascade)

    if hasattr(model, 'register_restored_listener'):
        model.register_restored_listener(_refresh_cascade)
