"""
Console Kernel
Artisan-style dispatcher for the cascade commands
"""
import asyncio
import sys
import traceback
from typing import Dict, List, Optional, Tuple

from cache_cascade.console.command import Command
from cache_cascade.console.commands import ClearCommand, RefreshCommand, StatsCommand


class Kernel:
    """
    Registers the cascade commands and runs them from argv

    Usage:
        kernel = Kernel(manager)
        exit_code = await kernel.run(['cache-cascade', 'cache:cascade:refresh', 'faqs', '--verbose'])
    """

    COMMANDS = [RefreshCommand, ClearCommand, StatsCommand]

    def __init__(self, manager=None, commands: Optional[List[type]] = None):
        self.manager = manager
        self.commands: Dict[str, Command] = {}

        for command_class in commands or self.COMMANDS:
            self.register(command_class(manager))

    def register(self, command: Command) -> None:
        if command.manager is None:
            command.manager = self.manager
        self.commands[command.name] = command

    def show_help(self):
        """Show available commands"""
        print("Cache Cascade - available commands")
        print()

        for name in sorted(self.commands):
            cmd = self.commands[name]
            print(f"  {cmd.signature:<50} {cmd.description}")

        print()
        print("Run 'help <command>' for detailed information")

    async def run(self, argv: List[str]) -> int:
        """Run the command named by argv[1]; argv[0] is the program name"""
        if len(argv) < 2:
            self.show_help()
            return 0

        command_name = argv[1]

        if command_name in ['help', '--help', '-h']:
            if len(argv) > 2:
                cmd_name = argv[2]
                if cmd_name in self.commands:
                    cmd = self.commands[cmd_name]
                    print(f"\nCommand: {cmd.name}")
                    print(f"Description: {cmd.description}")
                    print(f"Signature: {cmd.signature}")
                    return 0
                print(f"Unknown command: {cmd_name}\n")
                self.show_help()
                return 1
            self.show_help()
            return 0

        if command_name not in self.commands:
            print(f"❌ Unknown command: {command_name}\n")
            self.show_help()
            return 1

        command = self.commands[command_name]
        args, kwargs = self._parse_args(argv[2:])

        try:
            exit_code = await command.handle(*args, **kwargs)
            return exit_code if exit_code is not None else 0

        except KeyboardInterrupt:
            print("\n\n⚠ Command interrupted by user")
            return 130
        except Exception as e:
            print(f"\n❌ Error executing command: {e}\n")
            traceback.print_exc()
            return 1

    def _parse_args(self, argv: List[str]) -> Tuple[list, dict]:
        """
        Parse command line arguments
        Returns tuple of (positional_args, keyword_args)
        """
        args = []
        kwargs = {}

        for arg in argv:
            if arg.startswith('--'):
                # Long option (--verbose, --name=value)
                if '=' in arg:
                    key, value = arg[2:].split('=', 1)
                    try:
                        kwargs[key] = int(value)
                    except ValueError:
                        if value.lower() in ('true', 'false'):
                            kwargs[key] = value.lower() == 'true'
                        else:
                            kwargs[key] = value
                else:
                    # Boolean flag
                    kwargs[arg[2:]] = True
            elif arg.startswith('-'):
                # Short option
                kwargs[arg[1:]] = True
            else:
                args.append(arg)

        return args, kwargs


def main(argv: Optional[List[str]] = None) -> int:
    """
    Console entry point

    Builds a manager from CACHE_CASCADE_* environment variables (.env is
    loaded with python-dotenv) and registers it as the facade root.
    """
    from cache_cascade.cascade.cascade_manager import CacheCascadeManager
    from cache_cascade.support.config import CascadeConfig
    from cache_cascade.support.facades import CacheCascade

    manager = CacheCascadeManager(CascadeConfig.from_env(env_path='.env'))
    CacheCascade.set_facade_root(manager)

    async def run() -> int:
        try:
            return await Kernel(manager).run(argv if argv is not None else sys.argv)
        finally:
            await manager.cache.close()

    return asyncio.run(run())


if __name__ == '__main__':
    sys.exit(main())
