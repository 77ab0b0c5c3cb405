"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Supports verbosity levels and the --no-color flag.
"""

from rich.console import Console
from rich.markup import escape

from pagetree.tree_mapper.models import UpsertResult


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Output verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Updated guides/setup")
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(escape(message))

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def print_upsert_summary(self, result: UpsertResult) -> None:
        """Display the outcome of an upsert.

        Args:
            result: UpsertResult returned by PageTree.upsert_entry
        """
        if result.created:
            self.success(f"Created {result.path}")
        elif result.changed:
            self.success(f"Updated {result.path}")
        else:
            self.console.print(f"[dim]=[/dim] Unchanged {escape(result.path)}")

        if result.content_changed:
            self.info("  • content written")
        for field_name in result.changed_fields:
            self.info(f"  • {field_name} changed")
        for section in result.sections_created:
            self.info(f"  + section {section}")
