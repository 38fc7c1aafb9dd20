"""``context.print``: coloured terminal output backed by Rich."""
from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.rule import Rule
from rich.table import Table

if TYPE_CHECKING:
    from gluekit.runtime.context import RunContext


class Printer:
    """Thin helpers over a pair of Rich consoles.

    Messages go to ``console``; ``error`` goes to ``err_console``.
    """

    def __init__(self, console: Console | None = None, err_console: Console | None = None) -> None:
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def info(self, message: Any) -> None:
        self.console.print(message)

    def success(self, message: Any) -> None:
        self.console.print(f"[green]{message}[/green]")

    def warning(self, message: Any) -> None:
        self.console.print(f"[yellow]{message}[/yellow]")

    def error(self, message: Any) -> None:
        self.err_console.print(f"[red]{message}[/red]")

    def muted(self, message: Any) -> None:
        self.console.print(f"[dim]{message}[/dim]")

    def newline(self) -> None:
        self.console.print()

    def divider(self) -> None:
        self.console.print(Rule(style="dim"))

    def table(
        self,
        rows: Sequence[Sequence[Any]],
        headers: Sequence[str] | None = None,
        title: str | None = None,
    ) -> None:
        """Print ``rows`` as a table; without ``headers`` no header row is shown."""
        if headers is None:
            table = Table(title=title, show_header=False, box=None)
        else:
            table = Table(title=title)
        width = max((len(row) for row in rows), default=len(headers or ()))
        for index in range(width):
            table.add_column(headers[index] if headers and index < len(headers) else "")
        for row in rows:
            table.add_row(*(str(cell) for cell in row))
        self.console.print(table)


def setup(context: RunContext) -> None:
    context.print = Printer()
