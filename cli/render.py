"""Rich rendering of a report.

Entries are shown largest first with an SI size, a kind marker and the path
relative to the scan root. The error count (if any) and the grand total follow
the table.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from fsutil.paths import display_path
from tools.reporter import Report
from tools.sizes import format_size


def _size_style(size: int) -> str:
    if size > 1_000_000_000:
        return "bold red"
    if size > 100_000_000:
        return "yellow"
    return "green"


def render_report(report: Report, *, console: Console, err_console: Console | None = None) -> None:
    """Print ``report`` as a table followed by the error and total lines.

    A partial-scan note precedes the table when the scan was interrupted.

    Args:
        report: Report to render.
        console: Console for the table and totals.
        err_console: Console for the error summary; defaults to ``console``.
    """
    if report.incomplete:
        console.print("[yellow]Scan interrupted; the report is partial.[/yellow]")

    table = Table(title="Top Space Hogs")
    table.add_column("Size", justify="right")
    table.add_column("Type")
    table.add_column("Path", overflow="fold")
    for entry in report.entries:
        path_style = "bold blue" if entry.is_dir else ""
        table.add_row(
            Text(format_size(entry.size), style=_size_style(entry.size)),
            Text("dir" if entry.is_dir else "file", style=path_style),
            Text(display_path(entry.path, report.root), style=path_style),
        )
    console.print(table)

    if report.error_count:
        (err_console or console).print(
            f"[yellow]Warning:[/yellow] {report.error_count} errors encountered "
            "(permission denied, etc)"
        )
    console.print(f"[blue]Total size:[/blue] [bold green]{format_size(report.total_size)}[/bold green]")
