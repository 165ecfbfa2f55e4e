"""
Database Layer
Relational layer of the cascade, backed by Tortoise ORM models
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Type, Union

from tortoise.transactions import in_transaction

from cache_cascade.database.model import to_json_value


class DatabaseLayer:
    """
    Reads and replaces the rows behind a cache key

    Rows are plain dicts so they can be cached and written to files as-is.
    """

    @staticmethod
    def has_fillable(model: Type, field: str) -> bool:
        """Whether the model declares field as mass-assignable"""
        return field in getattr(model, 'fillable', [])

    def query(self, model: Type):
        """
        Base query for a model

        Models with the invalidation mixin provide cascade_query() (soft-deleted
        rows excluded, scope hook applied). Others load every row, ordered by
        'order' when it is fillable.
        """
        if hasattr(model, 'cascade_query'):
            return model.cascade_query()

        query = model.all()
        if self.has_fillable(model, 'order'):
            query = query.order_by('order')
        return query

    async def load(self, model: Type) -> List[Dict[str, Any]]:
        """Load every cached row of a model as plain records"""
        records = await self.query(model)
        return [self.to_record(record) for record in records]

    async def replace(self, model: Type, rows: Union[List[Dict[str, Any]], Dict[str, Any]]) -> None:
        """
        Replace every row of the model with rows

        Runs in a transaction. Keys that are not database fields of the model
        are dropped. Bulk operations don't fire model signals.
        """
        if isinstance(rows, dict):
            rows = [rows]

        db_fields = model._meta.db_fields
        instances = [
            model(**{key: value for key, value in row.items() if key in db_fields})
            for row in rows or []
        ]

        async with in_transaction(model._meta.default_connection) as connection:
            await model.all().using_db(connection).delete()
            if instances:
                await model.bulk_create(instances, using_db=connection)

    async def count(self, model: Type) -> int:
        return await self.query(model).count()

    async def latest_update(self, model: Type) -> Optional[datetime]:
        """Most recent updated_at of the model, if it has one"""
        if 'updated_at' not in model._meta.fields_map:
            return None
        record = await model.all().order_by('-updated_at').first()
        return record.updated_at if record else None

    @staticmethod
    def to_record(record) -> Dict[str, Any]:
        if hasattr(record, 'to_dict'):
            return record.to_dict()

        data = {}
        for field in record._meta.fields_map.keys():
            if field not in record._meta.db_fields:
                continue
            data[field] = to_json_value(getattr(record, field, None))
        return data
