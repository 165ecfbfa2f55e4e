"""
Base Command Class
Artisan-style base for the cascade CLI commands
"""
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence


class Command(ABC):
    """
    A cascade console command

    Subclasses set name/description/signature and implement handle(),
    returning the exit code. The manager is injected by the Kernel; when
    it is missing the CacheCascade facade root is used.
    """

    name: str = ""
    description: str = ""
    signature: Optional[str] = None

    ICONS = {
        'info': 'ℹ',
        'success': '✅',
        'error': '❌',
        'warning': '⚠',
    }

    def __init__(self, manager=None):
        self.signature = self.signature or self.name
        self.manager = manager

    @abstractmethod
    async def handle(self, *args, **kwargs) -> int:
        pass

    def cascade(self):
        if self.manager is not None:
            return self.manager

        from cache_cascade.support.facades import CacheCascade
        return CacheCascade.get_facade_root()

    # ==================== Output ====================

    def line(self, message: str = ""):
        print(message)

    def _status(self, kind: str, message: str):
        self.line(f"{self.ICONS[kind]} {message}")

    def info(self, message: str):
        self._status('info', message)

    def success(self, message: str):
        self._status('success', message)

    def error(self, message: str):
        self._status('error', message)

    def warning(self, message: str):
        self._status('warning', message)

    def confirm(self, question: str, default: bool = False) -> bool:
        """Yes/no prompt; an empty answer returns the default"""
        answer = input(f"{question} [{'Y/n' if default else 'y/N'}]: ").strip().lower()
        if not answer:
            return default
        return answer in ('y', 'yes')

    def table(self, headers: Sequence[str], rows: List[Sequence[Any]]):
        """Pipe-separated columns padded to the widest cell"""
        cells = [[str(cell) for cell in row] for row in rows]
        widths = [
            max([len(header)] + [len(row[index]) for row in cells])
            for index, header in enumerate(headers)
        ]

        header_line = " | ".join(header.ljust(widths[index]) for index, header in enumerate(headers))
        self.line(header_line)
        self.line("-" * len(header_line))
        for row in cells:
            self.line(" | ".join(cell.ljust(widths[index]) for index, cell in enumerate(row)))

    @staticmethod
    def format_bytes(size: int) -> str:
        """Human readable size, e.g. 2048 -> '2 KB'"""
        units = ['B', 'KB', 'MB', 'GB', 'TB']
        value = float(max(size, 0))
        unit = 0
        while value >= 1024 and unit < len(units) - 1:
            value /= 1024
            unit += 1
        return f"{round(value, 2):g} {units[unit]}"
