"""
Console Package
Artisan-style commands for inspecting and clearing the cascade
"""
from cache_cascade.console.command import Command
from cache_cascade.console.kernel import Kernel

__all__ = ['Command', 'Kernel']
