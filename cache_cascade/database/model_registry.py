"""
Model Registry
Maps logical cache keys to the models and seeders backing them
"""
from typing import Dict, List, Optional, Type

from cache_cascade.support.class_loader import ClassLoader
from cache_cascade.support.str import Str


class ModelRegistry:
    """
    Resolves the model (and seeder) behind a cache key

    Explicit registrations win. Without one, names are derived from the
    key and imported from the configured namespaces:

        'faqs'        -> <model_namespace>.Faq,       <seeder_namespace>.FaqSeeder
        'test_models' -> <model_namespace>.TestModel, <seeder_namespace>.TestModelSeeder

    Usage:
        registry = ModelRegistry(model_namespace='app.models')
        registry.register('faqs', Faq, seeder=FaqSeeder)
        registry.model_for('faqs')  # Faq
    """

    def __init__(self, model_namespace: Optional[str] = None, seeder_namespace: Optional[str] = None):
        self.model_namespace = model_namespace
        self.seeder_namespace = seeder_namespace
        self._models: Dict[str, Type] = {}
        self._seeders: Dict[str, Type] = {}

    def register(self, key: str, model: Type, seeder: Optional[Type] = None) -> None:
        self._models[key] = model
        if seeder is not None:
            self._seeders[key] = seeder

    def unregister(self, key: str) -> None:
        self._models.pop(key, None)
        self._seeders.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._models.keys())

    @staticmethod
    def model_name(key: str) -> str:
        """Derived model class name, e.g. 'faqs' -> 'Faq'"""
        return Str.studly(Str.singular(key))

    @classmethod
    def seeder_name(cls, key: str) -> str:
        """Derived seeder class name, e.g. 'faqs' -> 'FaqSeeder'"""
        return f"{cls.model_name(key)}Seeder"

    def model_for(self, key: str) -> Optional[Type]:
        """Model backing the key, or None when the key has no relational backing"""
        if key in self._models:
            return self._models[key]
        if not self.model_namespace:
            return None
        return ClassLoader.try_load(f"{self.model_namespace}.{self.model_name(key)}")

    def seeder_for(self, key: str) -> Optional[Type]:
        """Seeder for the key, or None"""
        if key in self._seeders:
            return self._seeders[key]
        if not self.seeder_namespace:
            return None
        return ClassLoader.try_load(f"{self.seeder_namespace}.{self.seeder_name(key)}")
