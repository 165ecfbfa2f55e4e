"""
Stats Command
Shows per-layer information for a key, or the cascade's configuration and counters
"""
import json
from typing import Any, Dict

from cache_cascade.console.command import Command


class StatsCommand(Command):
    """Display cache cascade statistics"""

    name = "cache:cascade:stats"
    description = "Display cache cascade statistics and storage layer information"
    signature = "cache:cascade:stats [key]"

    async def handle(self, key: str = None, *args, **kwargs):
        if key:
            return await self.show_key_stats(key)
        return await self.show_general_stats()

    async def show_key_stats(self, key: str) -> int:
        self.info(f"Cache Cascade Statistics for: {key}")
        self.line("-" * 50)

        stats = await self.gather_key_stats(key)

        self.table(
            ['Layer', 'Status', 'Size', 'Last Modified'],
            [
                ['Cache', stats['cache']['status'], stats['cache']['size'], stats['cache']['modified']],
                ['File', stats['file']['status'], stats['file']['size'], stats['file']['modified']],
                ['Database', stats['database']['status'], f"{stats['database']['count']} records",
                 stats['database']['modified']],
            ]
        )
        return 0

    async def gather_key_stats(self, key: str) -> Dict[str, Dict[str, Any]]:
        manager = self.cascade()

        # Cache layer (shared key only)
        cache_key = manager.cache_key(key)
        cache_exists = await manager.cache.has(cache_key)
        cache_stats = {
            'status': '✓ Present' if cache_exists else '✗ Missing',
            'size': 'N/A',
            'modified': 'N/A',
        }
        if cache_exists:
            data = await manager.cache.get(cache_key)
            cache_stats['size'] = self.format_bytes(len(json.dumps(data, default=str).encode('utf-8')))

        # File layer
        file_exists = manager.files.exists(key)
        file_stats = {
            'status': '✓ Present' if file_exists else '✗ Missing',
            'size': self.format_bytes(manager.files.size(key)) if file_exists else 'N/A',
            'modified': 'N/A',
        }
        if file_exists:
            file_stats['modified'] = manager.files.modified_at(key).strftime('%Y-%m-%d %H:%M:%S')

        # Database layer
        db_stats = {'status': '✗ Unknown', 'count': 0, 'modified': 'N/A'}
        model = manager.registry.model_for(key)
        if model is None:
            db_stats['status'] = '✗ No Model'
        else:
            try:
                count = await manager.database.count(model)
                db_stats['count'] = count
                db_stats['status'] = '✓ Present' if count else '✗ Empty'

                latest = await manager.database.latest_update(model)
                if latest is not None:
                    db_stats['modified'] = latest.strftime('%Y-%m-%d %H:%M:%S')
            except Exception:
                db_stats['status'] = '✗ Error'

        return {'cache': cache_stats, 'file': file_stats, 'database': db_stats}

    async def show_general_stats(self) -> int:
        manager = self.cascade()
        config = manager.config

        self.info("Cache Cascade General Statistics")
        self.line("-" * 50)

        self.line("Configuration:")
        self.line(f"  Cache Driver: {config.get('cache.driver')}")
        self.line(f"  Default TTL: {config.get('default_ttl')} seconds")
        self.line(f"  Config Path: {config.get('config_path')}")
        self.line(f"  Visitor Isolation: {'Enabled' if config.get('visitor_isolation') else 'Disabled'}")
        self.line(f"  Auto-seeding: {'Enabled' if config.get('auto_seed') else 'Disabled'}")
        self.line(f"  Cache Tags: {'Enabled' if manager.tagging_enabled() else 'Disabled'}")

        self.line()
        self.line("File Storage:")
        files = manager.files.files()
        if files:
            self.line(f"  Files: {len(files)}")
            self.line(f"  Total Size: {self.format_bytes(manager.files.total_size())}")
        else:
            self.line("  No files found")

        store = manager.cache.store
        if hasattr(store, 'info'):
            self.line()
            self.line("Redis Cache:")
            try:
                info = await store.info()
                self.line(f"  Used Memory: {info.get('used_memory_human', 'N/A')}")
                self.line(f"  Connected Clients: {info.get('connected_clients', 'N/A')}")
            except Exception:
                self.line("  Unable to retrieve Redis stats")

        stats = manager.get_stats()
        self.line()
        self.line("Runtime:")
        self.line(f"  Cache Hits: {stats['hits']['cache']}")
        self.line(f"  File Hits: {stats['hits']['file']}")
        self.line(f"  Database Hits: {stats['hits']['database']}")
        self.line(f"  Misses: {stats['misses']}")
        self.line(f"  Writes: {stats['writes']}")

        return 0
