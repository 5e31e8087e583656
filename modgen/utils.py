"""Console output helpers for modgen.

All user-facing output goes through Rich: ``console`` for normal progress and
summaries on stdout, ``err_console`` for errors and advisories on stderr.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .report import GenerationReport

console = Console()
err_console = Console(stderr=True)

_STATUS_STYLES: dict[str, str] = {
    "ok": "bold green",
    "failed": "bold red",
    "warning": "bold yellow",
    "skipped": "dim",
    "planned": "cyan",
}

_STATUS_MARKS: dict[str, str] = {
    "ok": "+",
    "failed": "x",
    "warning": "!",
    "skipped": "-",
    "planned": "~",
}


# ---------------------------------------------------------------------------
# Message helpers
# ---------------------------------------------------------------------------


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message to stderr."""
    err_console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message to stderr."""
    err_console.print(f"[bold yellow]{escape(message)}[/bold yellow]")


# ---------------------------------------------------------------------------
# Tables
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
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_report(report: GenerationReport) -> None:
    """Print one row per step of *report*."""
    table = Table(title=f"Module {report.module} ({report.mode})", header_style="bold cyan")
    table.add_column("", no_wrap=True)
    table.add_column("Step", no_wrap=True)
    table.add_column("Phase", style="dim")
    table.add_column("Path")
    table.add_column("Error", style="red")

    for step in report.steps:
        style = _STATUS_STYLES.get(step.status, "white")
        mark = _STATUS_MARKS.get(step.status, "?")
        table.add_row(
            f"[{style}]{mark}[/{style}]",
            step.name,
            step.phase,
            escape(step.path),
            step.error_kind,
        )

    console.print(table)
