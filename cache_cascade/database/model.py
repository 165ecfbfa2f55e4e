"""
Base Model
Provides Laravel-style base model and soft deletes for Tortoise ORM
"""
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict, List, Optional
from uuid import UUID

from tortoise import fields, timezone
from tortoise.models import Model as TortoiseModel


def to_json_value(value: Any) -> Any:
    """
    Plain JSON value for a model field

    Dates and times become ISO strings. Decimals and UUIDs become strings so
    no precision is lost. Enums collapse to their value.
    """
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (Decimal, UUID)):
        return str(value)
    if isinstance(value, Enum):
        return to_json_value(value.value)
    return value


# Restore listeners per model class, mirroring Tortoise's per-class signal listeners
_restored_listeners: Dict[type, List[Callable]] = {}


class Model(TortoiseModel):
    """
    Laravel-style base model class

    All cascade-backed models should inherit from this class
    instead of Tortoise's Model directly

    Examples:
        class Faq(Model):
            id = fields.IntField(pk=True)
            question = fields.CharField(max_length=255)
            order = fields.IntField(default=0)

            fillable = ['question', 'order']

            class Meta:
                table = 'faqs'

        data = faq.to_dict()
    """

    # Mass-assignable fields; 'order' here enables ordered cascade loads
    fillable: List[str] = []

    class Meta:
        abstract = True

    @classmethod
    def has_fillable(cls, field: str) -> bool:
        return field in cls.fillable

    def to_dict(self, exclude: Optional[List[str]] = None) -> Dict[str, Any]:
        """
        Convert model to a plain dictionary of its database fields

        Args:
            exclude: Fields to exclude

        Returns:
            Dictionary of JSON-ready values (see to_json_value)
        """
        exclude = exclude or []
        data = {}

        for field in self._meta.fields_map.keys():
            if field in exclude or field not in self._meta.db_fields:
                continue

            data[field] = to_json_value(getattr(self, field, None))

        return data

    def __repr__(self) -> str:
        """String representation"""
        if hasattr(self, 'id'):
            return f"<{self.__class__.__name__} id={self.id}>"
        return f"<{self.__class__.__name__}>"


class SoftDeletes:
    """
    Laravel-style soft deletes

    delete() stamps deleted_at instead of removing the row; force_delete()
    removes it. Mix in before Model:

        class Faq(SoftDeletes, Model):
            ...

    Lifecycle:
        delete()       -> saves deleted_at (post_save signal)
        restore()      -> clears deleted_at (post_save signal), then restored listeners
        force_delete() -> removes the row (post_delete signal)
    """

    deleted_at = fields.DatetimeField(null=True, default=None)

    @classmethod
    def without_trashed(cls):
        """Query excluding soft-deleted rows"""
        return cls.filter(deleted_at__isnull=True)

    @classmethod
    def only_trashed(cls):
        """Query of soft-deleted rows only"""
        return cls.filter(deleted_at__isnull=False)

    @classmethod
    def with_trashed(cls):
        """Query including soft-deleted rows"""
        return cls.all()

    @classmethod
    def register_restored_listener(cls, listener: Callable) -> None:
        """
        Register a coroutine called as listener(sender, instance, using_db) after restore()
        """
        listeners = _restored_listeners.setdefault(cls, [])
        if listener not in listeners:
            listeners.append(listener)

    def trashed(self) -> bool:
        """Whether this instance is soft-deleted"""
        return self.deleted_at is not None

    async def delete(self, using_db=None) -> None:
        """Soft delete the instance"""
        self.deleted_at = timezone.now()
        await self.save(using_db=using_db, update_fields=['deleted_at'])

    async def force_delete(self, using_db=None) -> None:
        """Permanently delete the instance"""
        await super().delete(using_db=using_db)

    async def restore(self, using_db=None) -> None:
        """Restore a soft-deleted instance"""
        self.deleted_at = None
        await self.save(using_db=using_db, update_fields=['deleted_at'])

        for listener in _restored_listeners.get(self.__class__, []):
            await listener(self.__class__, self, using_db)
