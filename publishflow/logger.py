"""Console output for the publish pipeline.

All user-facing output goes through Logger so that verbosity is decided
in one place and tests can capture output with a recording console.
"""

from collections.abc import Iterable

from rich.console import Console
from rich.markup import escape

# Matches the number of entries shown per change group before eliding
MAX_LISTED = 10


class Logger:
    """Leveled console output backed by a rich Console."""

    def __init__(self, verbose: bool = False, console: Console | None = None) -> None:
        self.verbose = verbose
        self.console = console or Console(highlight=False)

    def section(self, title: str) -> None:
        self.console.print(f"\n[bold]{escape(title)}[/bold]")

    def info(self, message: str) -> None:
        self.console.print(f"[blue]i[/blue] {escape(message)}")

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def warn(self, message: str) -> None:
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {escape(message)}")

    def debug(self, message: str) -> None:
        if self.verbose:
            self.console.print(f"[dim]… {escape(message)}[/dim]")

    def lines(self, lines: Iterable[str]) -> None:
        """Print an instruction block verbatim."""
        for line in lines:
            self.console.print(escape(line))

    def bullets(self, items: list[str], limit: int = MAX_LISTED) -> None:
        """Print up to ``limit`` items as a bulleted list plus an overflow count."""
        for item in items[:limit]:
            self.console.print(f"  • {escape(item)}")
        if len(items) > limit:
            self.console.print(f"  [dim]... and {len(items) - limit} more[/dim]")
