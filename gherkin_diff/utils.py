"""Shared console and logging helpers for gherkin-diff.

All terminal output goes through one Rich console so that messages, tables
and log records interleave cleanly.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from gherkin_diff.parser.models import ScenarioChanges

console = Console()

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def setup_logging(verbose: bool = False) -> None:
    """Route the package's log records to the Rich console.

    Args:
        verbose: Emit ``DEBUG`` records (dropped lines, duplicate titles, ...)
            instead of only warnings and errors.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(escape(key), escape(str(value)))

    console.print(table)
    console.print()


_CHANGE_STYLES: dict[str, str] = {
    "added": "green",
    "modified": "yellow",
    "removed": "red",
}


def print_changes_table(changes: ScenarioChanges, title: str = "Scenario changes") -> None:
    """Print one row per changed scenario, coloured by kind of change."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Change", no_wrap=True)
    table.add_column("Scenario")

    for kind, titles in (
        ("added", changes.added),
        ("modified", changes.modified),
        ("removed", changes.removed),
    ):
        style = _CHANGE_STYLES[kind]
        for scenario_title in titles:
            table.add_row(f"[{style}]{kind}[/{style}]", escape(scenario_title))

    console.print(table)


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
