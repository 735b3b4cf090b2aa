"""Output files: enriched logs and the unique IP summary."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, TextIO

import polars as pl

from .registry import UniqueIpRegistry

logger = logging.getLogger(__name__)

OUT_DIR_NAME = "out"
SUMMARY_NAME = "!UniqueIPs.csv"

SUMMARY_SCHEMA = {
    "IpAddress": pl.Utf8,
    "City": pl.Utf8,
    "Country": pl.Utf8,
}


class StreamWriter:
    """Writes under a single output directory."""

    def __init__(self, out_dir: Path) -> None:
        self.out_dir = out_dir

    @classmethod
    def for_log_dir(cls, log_dir: Path) -> StreamWriter:
        out_dir = log_dir / OUT_DIR_NAME
        out_dir.mkdir(parents=True, exist_ok=True)
        return cls(out_dir)

    def output_path(self, source: Path) -> Path:
        return self.out_dir / source.name

    @contextmanager
    def open(self, source: Path) -> Iterator[TextIO]:
        """Open the enriched copy of ``source``, replacing any previous run's output."""
        with self.output_path(source).open("w", encoding="utf-8", newline="\n") as handle:
            yield handle

    @staticmethod
    def write_line(handle: TextIO, line: str) -> None:
        handle.write(line)
        handle.write("\n")

    def write_summary(self, registry: UniqueIpRegistry) -> Path | None:
        """Write every registry entry to the summary CSV; an empty registry leaves no summary."""
        path = self.out_dir / SUMMARY_NAME
        if not len(registry):
            # a summary left by an earlier run no longer describes this one
            path.unlink(missing_ok=True)
            return None

        rows = [
            {"IpAddress": entry.ip_address, "City": entry.city, "Country": entry.country}
            for entry in registry
        ]
        logger.info("Saving unique IPs to '%s'", SUMMARY_NAME)
        pl.DataFrame(rows, schema=SUMMARY_SCHEMA).write_csv(path)
        return path
