"""spacehogs CLI entrypoint.

Scans a directory completely, then shows the largest files and directories,
preferring the most specific entries over their ancestors.

Fatal input errors (missing path, bad ``--min-size``, bad config file) stop the
run before any scanning with exit code 1. Unreadable files and directories met
during the scan are only counted and summarized after the report.
"""

from __future__ import annotations

import sys
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from cli.log import configure_logging
from cli.render import render_report
from schemas.report import ReportFilters
from tools.config_loader import ConfigError, resolve_settings
from tools.reporter import build_report
from tools.scanner import ScanResult, scan
from tools.sizes import SizeParseError, parse_size

app = typer.Typer(
    add_completion=False, help="Find the largest files and directories under a path"
)
console = Console()
err_console = Console(stderr=True)


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}")
    return typer.Exit(code=1)


def _split_globs(value: str | None) -> list[str] | None:
    if value is None:
        return None
    return [g.strip() for g in value.split(",") if g.strip()]


def _run_scan(path: Path, *, workers: int, exclude: list[str]) -> ScanResult:
    """Run the scan behind a spinner; Ctrl-C stops it and keeps the partial result."""
    cancel = threading.Event()
    with console.status("Measuring storage...") as status:

        def _progress(count: int) -> None:
            status.update(f"Found {count} files...")

        # Scan in a thread so the main thread stays interruptible
        with ThreadPoolExecutor(max_workers=1, thread_name_prefix="scan-main") as pool:
            fut = pool.submit(
                scan, path, progress=_progress, exclude=exclude, workers=workers, cancel=cancel
            )
            try:
                return fut.result()
            except KeyboardInterrupt:
                cancel.set()
                return fut.result()


@app.command()
def run(
    path: Path = typer.Argument(Path("."), help="Directory to scan"),
    limit: int | None = typer.Option(
        None, "--limit", "-n", min=0, help="Number of items to display [default: 10]"
    ),
    min_size: str | None = typer.Option(
        None, "--min-size", help='Hide items smaller than this (e.g. "100MB", "1GB", "1024")'
    ),
    depth: int | None = typer.Option(
        None, "--depth", "-d", min=0, help="Maximum display depth; the scan is always complete"
    ),
    workers: int | None = typer.Option(
        None, "--workers", "-w", min=1, help="Threads used to walk top-level subdirectories"
    ),
    exclude: str | None = typer.Option(None, "--exclude", help="Comma-separated globs to skip"),
    config: Path | None = typer.Option(
        None, "--config", envvar="SPACEHOGS_CONFIG", help="YAML or JSON config file"
    ),
    out: Path | None = typer.Option(None, "--out", help="Write report JSON to file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log per-path scan errors"),
) -> None:
    """Show the largest files and directories under PATH."""
    configure_logging(verbose)

    try:
        settings = resolve_settings(config)
    except ConfigError as e:
        raise _fail(str(e)) from e

    if not path.exists():
        raise _fail(f"Path {str(path)!r} does not exist")

    size_text = min_size if min_size is not None else settings.min_size
    try:
        min_bytes = parse_size(size_text) if size_text is not None else None
    except SizeParseError as e:
        raise _fail(f"Invalid size format: {size_text}") from e

    filters = ReportFilters(
        min_size=min_bytes,
        max_depth=depth if depth is not None else settings.depth,
        limit=limit if limit is not None else settings.limit,
    )
    globs = _split_globs(exclude)

    console.print(f"[bold blue]Scanning:[/bold blue] [cyan]{escape(str(path))}[/cyan]")
    result = _run_scan(
        path,
        workers=workers if workers is not None else settings.workers,
        exclude=globs if globs is not None else settings.exclude,
    )

    report = build_report(result, filters)
    render_report(report, console=console, err_console=err_console)

    if out:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(report.to_model().to_json(), encoding="utf-8")
        console.log(f"Wrote report JSON to {escape(str(out))}")


def main() -> int:
    """Entry point for `python -m cli.main` and the `spacehogs` script."""
    app()
    return 0


if __name__ == "__main__":
    sys.exit(main())
