"""
Facade System
Laravel-style facade pattern for static-like access to services
"""
from typing import Any, Dict


# Resolved facade roots, keyed by accessor name
_resolved_instances: Dict[str, Any] = {}


class FacadeMeta(type):
    """Metaclass for Facade to proxy class attribute access"""

    def __getattr__(cls, name: str) -> Any:
        """
        Proxy attribute/method access to the facade root

        Args:
            name: Attribute/method name

        Returns:
            Attribute or method from underlying instance
        """
        if name.startswith('__'):
            raise AttributeError(name)
        instance = cls.get_facade_root()
        return getattr(instance, name)


class Facade(metaclass=FacadeMeta):
    """
    Base Facade class

    Provides Laravel-style static access to an explicitly registered
    service instance. Nothing is resolved implicitly: the host application
    decides whether a process-wide instance exists by calling
    set_facade_root() during bootstrap.

    Example:
        class CacheCascade(Facade):
            @classmethod
            def get_facade_accessor(cls):
                return 'cache-cascade'

        CacheCascade.set_facade_root(manager)
        faqs = await CacheCascade.get('faqs', [])
    """

    @classmethod
    def get_facade_accessor(cls) -> str:
        """
        Get the accessor name for the facade

        Raises:
            NotImplementedError: Must be implemented by subclasses
        """
        raise NotImplementedError(
            f"Facade {cls.__name__} does not implement get_facade_accessor()"
        )

    @classmethod
    def get_facade_root(cls) -> Any:
        """
        Get the root object behind the facade

        Raises:
            RuntimeError: If no instance has been registered
        """
        accessor = cls.get_facade_accessor()

        if accessor not in _resolved_instances:
            raise RuntimeError(
                f"Facade {cls.__name__} has no root instance. "
                f"Make sure to call {cls.__name__}.set_facade_root(instance) during bootstrap."
            )

        return _resolved_instances[accessor]

    @classmethod
    def set_facade_root(cls, instance: Any) -> None:
        """Register the instance behind the facade"""
        _resolved_instances[cls.get_facade_accessor()] = instance

    @classmethod
    def has_facade_root(cls) -> bool:
        return cls.get_facade_accessor() in _resolved_instances

    @classmethod
    def swap(cls, instance: Any) -> Any:
        """Replace the facade root (e.g. with a fake) and return the new instance"""
        cls.set_facade_root(instance)
        return instance

    @classmethod
    def clear_resolved_instance(cls) -> None:
        _resolved_instances.pop(cls.get_facade_accessor(), None)

    @staticmethod
    def clear_resolved_instances() -> None:
        _resolved_instances.clear()
