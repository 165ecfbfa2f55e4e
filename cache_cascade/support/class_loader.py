"""
Class Loader
Dynamic class loading utility for importing classes from dotted paths
"""
from typing import Optional, Type


class ClassLoader:
    """
    Utility for dynamically loading classes from string paths

    Example:
        cls = ClassLoader.load('app.models.Faq')
        cls = ClassLoader.try_load('app.models.Missing')  # None
    """

    @staticmethod
    def load(class_path: str) -> Type:
        """
        Load a class from a dotted path string

        Raises:
            ImportError: If module cannot be imported
            AttributeError: If class doesn't exist in module
        """
        module_path, class_name = class_path.rsplit('.', 1)

        module = __import__(module_path, fromlist=[class_name])

        return getattr(module, class_name)

    @classmethod
    def try_load(cls, class_path: str) -> Optional[Type]:
        """Load a class, returning None when the module or attribute doesn't exist"""
        if '.' not in class_path:
            return None
        try:
            return cls.load(class_path)
        except (ImportError, AttributeError):
            return None
