"""
Interactive Shell Mode.

REPL that turns operator input into item service calls.
Uses Rich for output and input handling.

Commands:
    get <key>
    set <key> <value>
    delete <key>...
    ping [word...]
    help
    exit
"""

from typing import Any, Awaitable, Callable, TextIO

from rich.console import Console
from rich.table import Table

from item_client.client.calls import ItemCalls
from item_client.core.exceptions import CommandUsageError, InputStreamError
from item_client.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

PROMPT = "> "

CommandHandler = Callable[[list[str]], Awaitable[Any]]


class InteractiveShell:
    """
    Interactive shell bound to one set of call wrappers.

    Reads a line, splits it on whitespace, dispatches on the first token
    (exact, case-sensitive match) and prints the response. Runs until
    ``exit`` or end of input.

    Usage:
        shell = InteractiveShell(ItemCalls(handle))
        await shell.run()
    """

    def __init__(
        self,
        calls: ItemCalls,
        console: Console | None = None,
        stream: TextIO | None = None,
    ) -> None:
        """
        Initialize the interactive shell.

        Args:
            calls: Call wrappers used by every command.
            console: Output console. Defaults to stdout.
            stream: Input stream. Defaults to stdin via input().
        """
        self.calls = calls
        self.console = console or Console()
        self.stream = stream
        self.running = False
        self.commands: dict[str, tuple[CommandHandler, str]] = {
            "get": (self._cmd_get, "get <key>"),
            "set": (self._cmd_set, "set <key> <value>"),
            "delete": (self._cmd_delete, "delete <key>..."),
            "ping": (self._cmd_ping, "ping [message...]"),
            "help": (self._cmd_help, "help"),
            "exit": (self._cmd_exit, "exit"),
        }

    async def run(self) -> None:
        """
        Run the shell until ``exit`` or end of input.

        Raises:
            InputStreamError: If the input stream cannot be read.
        """
        self.running = True

        while self.running:
            try:
                line = self._read_line()
            except EOFError:
                break
            except KeyboardInterrupt:
                self.console.print("\n[dim]Use 'exit' to quit[/dim]")
                continue

            await self.execute(line)

        log_with_source(logger, "cli", "debug", "Shell stopped")

    async def execute(self, line: str) -> None:
        """Parse and dispatch one input line."""
        parts = line.split()
        if not parts:
            return

        command, args = parts[0], parts[1:]

        if command not in self.commands:
            self._print(f"unknown command: {command}")
            return

        handler, _ = self.commands[command]
        try:
            response = await handler(args)
        except CommandUsageError as e:
            self._print(e.message)
            return

        if response is not None:
            self._print(repr(response))

    def _read_line(self) -> str:
        try:
            line = self.console.input(PROMPT, markup=False, stream=self.stream)
        except OSError as e:
            raise InputStreamError(f"Failed to read from input stream: {e}") from e

        # stream.readline() signals end of input with "" instead of EOFError
        if self.stream is not None and not line:
            raise EOFError
        return line

    def _print(self, text: str) -> None:
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    async def _cmd_get(self, args: list[str]) -> Any:
        if len(args) != 1:
            raise CommandUsageError(self.commands["get"][1])
        return await self.calls.get(args[0])

    async def _cmd_set(self, args: list[str]) -> Any:
        if len(args) != 2:
            raise CommandUsageError(self.commands["set"][1])
        return await self.calls.set(args[0], args[1])

    async def _cmd_delete(self, args: list[str]) -> Any:
        return await self.calls.delete(args)

    async def _cmd_ping(self, args: list[str]) -> Any:
        message = " ".join(args) if args else None
        return await self.calls.ping(message)

    async def _cmd_help(self, args: list[str]) -> None:
        table = Table(title="Available Commands", show_header=True)
        table.add_column("Command", style="cyan")
        table.add_column("Description")

        table.add_row("get <key>", "Read the value stored under a key")
        table.add_row("set <key> <value>", "Store a value under a key")
        table.add_row("delete <key>...", "Delete keys, prints how many existed")
        table.add_row("ping [message...]", "Echo a message, or pong without one")
        table.add_row("help", "Show this help message")
        table.add_row("exit", "Exit the shell")

        self.console.print(table)

    async def _cmd_exit(self, args: list[str]) -> None:
        self.running = False
