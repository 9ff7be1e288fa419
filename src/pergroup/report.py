"""Print result sets the way a database client shows them."""

from typing import Any

import polars as pl
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from pergroup.compare import EquivalenceReport
from pergroup.engine import QueryResult


def format_footer(row_count: int, elapsed: float) -> str:
    """Row-count and timing line, e.g. ``4 rows in set (0.00 sec)``."""
    timing = f"({elapsed:.2f} sec)"
    if row_count == 0:
        return f"Empty set {timing}"
    noun = "row" if row_count == 1 else "rows"
    return f"{row_count} {noun} in set {timing}"


def _format_cell(value: Any) -> str:
    if value is None:
        return "NULL"
    if isinstance(value, float):
        return f"{value:.2f}"
    return str(value)


def result_table(frame: pl.DataFrame) -> Table:
    """Build a rich table from a result set."""
    table = Table(show_header=True, header_style="bold")
    for name, dtype in frame.schema.items():
        table.add_column(name, justify="right" if dtype.is_numeric() else "left")

    for row in frame.iter_rows():
        table.add_row(*[_format_cell(value) for value in row])

    return table


def print_result(result: QueryResult, console: Console | None = None, show_sql: bool = True):
    """Print the statement, its result set and the footer line."""
    if console is None:
        console = Console()

    console.print(f"\n[bold]{result.technique.value}[/bold] [dim]({result.backend.value})[/dim]")
    if show_sql and result.sql:
        console.print(Syntax(result.sql, "sql", word_wrap=True))

    if result.row_count:
        console.print(result_table(result.frame))
    console.print(format_footer(result.row_count, result.elapsed))


def print_report(report: EquivalenceReport, console: Console | None = None):
    """Print one line per result and the verdict."""
    if console is None:
        console = Console()

    summary = Table(show_header=True, header_style="bold")
    summary.add_column("Technique")
    summary.add_column("Backend")
    summary.add_column("Rows", justify="right")
    summary.add_column("Time (ms)", justify="right")

    for result in report.results:
        summary.add_row(
            result.technique.value,
            result.backend.value,
            str(result.row_count),
            f"{result.elapsed * 1000:.2f}",
        )

    console.print(summary)

    if report.equivalent:
        console.print(
            f"[green]All {len(report.results)} result sets are equivalent "
            f"({report.reference.row_count if report.reference else 0} rows).[/green]"
        )
        return

    console.print("[red]Result sets differ:[/red]")
    for mismatch in report.mismatches:
        console.print(f"  {mismatch.label}")
        for row in mismatch.missing:
            console.print(f"    [red]- {row}[/red]")
        for row in mismatch.extra:
            console.print(f"    [yellow]+ {row}[/yellow]")
