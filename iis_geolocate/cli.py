from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .errors import GeolocateError
from .geo import MaxMindResolver, locate_database
from .runner import DEFAULT_FIELD, RunSummary, find_log_files, run
from .writer import StreamWriter

console = Console()
app = typer.Typer(
    help="Geolocate client IP addresses in IIS (W3C extended) logs.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help", "-?"]},
)

logger = logging.getLogger("iis_geolocate")


def setup_logging(verbose: bool) -> None:
    handler = RichHandler(console=console, show_time=False, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False


def to_table(title: str, columns: Sequence[str], rows: Sequence[Sequence[str]]) -> Table:
    table = Table(title=title, title_style="bold", show_lines=False, expand=True)
    for name in columns:
        justify = "left"
        if name.lower() not in ("file", "dropped by reason"):
            justify = "right"
        table.add_column(name, justify=justify, overflow="fold")
    for row in rows:
        table.add_row(*row)
    return table


def print_summary(summary: RunSummary) -> None:
    rows = []
    for path, stats in summary.files.items():
        reasons = ", ".join(f"{reason}={count}" for reason, count in sorted(stats.dropped.items()))
        rows.append(
            [
                path.name,
                f"{stats.total_lines}",
                f"{stats.enriched}",
                f"{stats.not_found}",
                f"{stats.errors}",
                f"{stats.dropped_total}",
                reasons or "—",
            ]
        )
    for path, reason in summary.skipped.items():
        rows.append([path.name, "—", "—", "—", "—", "—", f"skipped: {reason}"])

    console.print(
        to_table(
            "Geolocated files",
            ["File", "Lines", "Enriched", "Not found", "Errors", "Dropped", "Dropped by reason"],
            rows,
        )
    )
    console.print(f"Unique geolocated IPs: [bold]{summary.unique_ips:,}[/bold]")
    if summary.summary_path is not None:
        console.print(f"[green]Unique IPs saved to {summary.summary_path}[/green]")


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"iis-geolocate version {__version__}")
        raise typer.Exit()


@app.command()
def geolocate(
    log_dir: Path = typer.Option(
        Path("."),
        "--log-dir",
        "-d",
        envvar="IISGEO_LOG_DIR",
        exists=True,
        file_okay=False,
        dir_okay=True,
        help="The directory that contains IIS logs. Defaults to the current directory.",
    ),
    field_name: str = typer.Option(
        DEFAULT_FIELD,
        "--field",
        "-f",
        envvar="IISGEO_FIELD",
        help="The field name to find to do the geolocation on.",
    ),
    db_dir: Path = typer.Option(
        Path("."),
        "--db-dir",
        envvar="IISGEO_DB_DIR",
        exists=True,
        file_okay=False,
        dir_okay=True,
        help="Directory holding 'GeoIP2-City.mmdb' or 'GeoLite2-City.mmdb'.",
    ),
    progress: bool = typer.Option(
        True, "--progress/--no-progress", help="Display a progress bar while enriching each log."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug details."),
    version: bool = typer.Option(
        False, "--version", callback=version_callback, is_eager=True, help="Show the version and exit."
    ),
) -> None:
    """Append GeoCity and GeoCountry to every log in a directory."""
    setup_logging(verbose)
    log_dir = log_dir.resolve()

    try:
        log_files = find_log_files(log_dir)
        db_path = locate_database(db_dir.resolve())
    except GeolocateError as exc:
        logger.critical("%s", exc)
        raise typer.Exit(code=1)

    writer = StreamWriter.for_log_dir(log_dir)
    with MaxMindResolver.from_path(db_path) as resolver:
        summary = run(log_files, field_name, resolver, writer, show_progress=progress)

    print_summary(summary)


def cli() -> None:
    app()


if __name__ == "__main__":
    cli()
