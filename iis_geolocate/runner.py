"""Geolocate every log file in a directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console
from rich.progress import BarColumn, Progress, TaskProgressColumn, TimeRemainingColumn

from .enricher import enrich_file
from .errors import NoLogFilesError, SkipFileError
from .geo import GeoResolver
from .parsers import ParseStats
from .registry import UniqueIpRegistry
from .writer import StreamWriter

logger = logging.getLogger(__name__)
console = Console()

LOG_PATTERN = "*.log"
DEFAULT_FIELD = "c-ip"


@dataclass
class RunSummary:
    """What a run produced."""

    files: dict[Path, ParseStats] = field(default_factory=dict)
    skipped: dict[Path, str] = field(default_factory=dict)
    unique_ips: int = 0
    summary_path: Path | None = None


def find_log_files(log_dir: Path) -> list[Path]:
    log_files = sorted(path for path in log_dir.glob(LOG_PATTERN) if path.is_file())
    if not log_files:
        raise NoLogFilesError(log_dir)
    logger.info("Found %d log files", len(log_files))
    return log_files


def _enrich_with_progress(
    source: Path,
    field_name: str,
    resolver: GeoResolver,
    registry: UniqueIpRegistry,
    writer: StreamWriter,
    show_progress: bool,
) -> ParseStats:
    if show_progress and console.is_terminal:
        total_bytes = source.stat().st_size
        if total_bytes > 0:
            with Progress(
                "{task.description}",
                BarColumn(bar_width=None),
                TaskProgressColumn(),
                TimeRemainingColumn(),
                console=console,
                transient=True,
            ) as progress:
                task_id = progress.add_task(source.name, total=total_bytes)

                def advance(amount: int) -> None:
                    progress.advance(task_id, amount)

                stats = enrich_file(source, field_name, resolver, registry, writer, advance)
                progress.update(task_id, completed=total_bytes)
                return stats

    return enrich_file(source, field_name, resolver, registry, writer)


def run(
    log_files: list[Path],
    field_name: str,
    resolver: GeoResolver,
    writer: StreamWriter,
    show_progress: bool = False,
) -> RunSummary:
    """Enrich ``log_files`` in order and write the unique IP summary."""
    registry = UniqueIpRegistry()
    summary = RunSummary()

    logger.warning(
        "NOTE: multicast, private, or reserved addresses will be SKIPPED "
        "(including IPv6 that starts with 'fe80')"
    )

    for source in log_files:
        logger.warning("Opening '%s'", source)
        if len(registry):
            logger.info("Unique IPs found so far: %s", f"{len(registry):,}")

        try:
            stats = _enrich_with_progress(source, field_name, resolver, registry, writer, show_progress)
        except SkipFileError as exc:
            logger.warning("%s. Skipping...", exc)
            summary.skipped[source] = str(exc)
            continue

        summary.files[source] = stats

    summary.unique_ips = len(registry)
    summary.summary_path = writer.write_summary(registry)
    if summary.summary_path is None:
        logger.info("No unique, geolocated IPs found!")
    return summary
