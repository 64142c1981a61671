"""Output formatting for bzlint."""

from dataclasses import dataclass

from rich.console import Console
from rich.markup import escape


@dataclass
class OutputContext:
    """Context for status output on stdout."""

    console: Console
    quiet: bool = False
    dry_run: bool = False

    def print(self, message: str, style: str | None = None) -> None:
        """Print a status line unless quiet."""
        if not self.quiet:
            self.console.print(message, style=style)

    def error(self, message: str) -> None:
        """Print an error line. Errors are never suppressed."""
        self.console.print(f"[red]Error: {escape(message)}[/red]")

    def success(self, message: str) -> None:
        """Print success message unless quiet."""
        if not self.quiet:
            self.console.print(f"[green]{escape(message)}[/green]")


def make_console(no_color: bool = False) -> Console:
    """Create the stdout console used for status lines.

    Soft wrapping keeps long paths and Bazel labels on one line so that
    editor integrations reading stdout line by line see them intact.
    """
    return Console(
        force_terminal=False if no_color else None,
        no_color=no_color,
        soft_wrap=True,
        highlight=False,
    )
