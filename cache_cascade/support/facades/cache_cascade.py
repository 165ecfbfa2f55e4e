"""
Cache Cascade Facade
Laravel-style facade for the cascade manager
"""
from cache_cascade.support.facades.facade import Facade


class CacheCascade(Facade):
    """
    Cache Cascade Facade

    Provides static-like access to the registered CacheCascadeManager

    Usage:
        # Read through cache -> file -> database -> seeder
        faqs = await CacheCascade.get('faqs', [])

        # Write through every layer
        await CacheCascade.set('faqs', rows)

        # Refresh from the database / invalidate
        await CacheCascade.refresh('faqs')
        await CacheCascade.invalidate('faqs')

        # In tests
        fake = CacheCascade.fake()
        ...
        fake.assert_called('get')
    """

    @classmethod
    def get_facade_accessor(cls) -> str:
        return 'cache-cascade'

    @classmethod
    def fake(cls):
        """Swap the facade root for an in-memory fake and return it"""
        from cache_cascade.testing.cache_cascade_fake import CacheCascadeFake

        return cls.swap(CacheCascadeFake())
