"""
Clear Command
Clears the cascade for one key, or every key
"""
from cache_cascade.console.command import Command


class ClearCommand(Command):
    """Clear cache cascade data"""

    name = "cache:cascade:clear"
    description = "Clear cache cascade data for a specific key or all keys"
    signature = "cache:cascade:clear [key] [--all] [--force]"

    async def handle(self, key: str = None, *args, **kwargs):
        if kwargs.get('all'):
            return await self.clear_all(force=bool(kwargs.get('force')))

        if not key:
            self.error("Please provide a cache key or use --all to clear all cache")
            return 1

        return await self.clear_key(key)

    async def clear_key(self, key: str) -> int:
        self.info(f"Clearing cache key: {key}")

        try:
            await self.cascade().invalidate(key)
        except Exception as e:
            self.error(f"Failed to clear cache: {e}")
            return 1

        self.success(f"Cache cleared successfully for key: {key}")
        return 0

    async def clear_all(self, force: bool = False) -> int:
        if not force and not self.confirm("Are you sure you want to clear ALL cascade cache?"):
            self.info("Operation cancelled.")
            return 0

        self.info("Clearing all cascade cache...")

        try:
            await self.cascade().clear_all_cache()
        except Exception as e:
            self.error(f"Failed to clear all cache: {e}")
            return 1

        self.success("All cascade cache cleared successfully")
        return 0
