"""
Database Seeder
Laravel-style seeders used to populate an empty table on first read
"""
import inspect
from abc import ABC, abstractmethod


class Seeder(ABC):
    """
    Base Seeder class

    Example:
        class FaqSeeder(Seeder):
            async def run(self):
                await Faq.create(question='How?', order=1)
    """

    @abstractmethod
    async def run(self):
        """Populate the database"""
        pass

    async def call(self, *seeders):
        """Run other seeder classes in order"""
        for seeder_class in seeders:
            result = seeder_class().run()
            if inspect.isawaitable(result):
                await result
