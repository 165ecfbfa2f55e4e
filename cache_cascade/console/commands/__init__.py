from cache_cascade.console.commands.clear_command import ClearCommand
from cache_cascade.console.commands.refresh_command import RefreshCommand
from cache_cascade.console.commands.stats_command import StatsCommand

__all__ = ['ClearCommand', 'RefreshCommand', 'StatsCommand']
