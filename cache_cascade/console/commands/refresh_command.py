"""
Refresh Command
Reloads a key from the database into the file and cache layers
"""
import json

from cache_cascade.console.command import Command


class RefreshCommand(Command):
    """Refresh a cache key from the database"""

    name = "cache:cascade:refresh"
    description = "Refresh a cache key by reloading from database"
    signature = "cache:cascade:refresh <key> [--verbose]"

    async def handle(self, key: str = None, *args, **kwargs):
        if not key:
            self.error("Please provide the cache key to refresh")
            return 1

        self.info(f"Refreshing cache key: {key}")

        try:
            data = await self.cascade().refresh(key)
        except Exception as e:
            self.error(f"Failed to refresh cache: {e}")
            return 1

        if data is None:
            self.warning(f"No data found in database for key: {key}")
            return 1

        count = len(data) if hasattr(data, '__len__') else 1
        self.success(f"Cache refreshed successfully with {count} items")

        if kwargs.get('verbose'):
            self.line("Data preview:")
            self.line(json.dumps(data, indent=4, ensure_ascii=False, default=str))

        return 0
