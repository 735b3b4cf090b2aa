"""Append geolocation to the data rows of a log file."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from .classify import classify_address
from .geo import GeoResolver, GeoStatus
from .parsers import ParseStats
from .parsers.w3c import COMMENT_MARKER, parse_header
from .registry import UniqueIpRegistry
from .writer import StreamWriter

logger = logging.getLogger(__name__)

NOT_FOUND = "NA"
NO_VALUE = "-"
COUNTRY_ERROR = "Country error: (See city error)"


def _token(value: str | None) -> str:
    if not value:
        return NO_VALUE
    return value.replace(" ", "_")


class RecordEnricher:
    """Geolocates the address column of data rows from one file."""

    def __init__(
        self,
        resolver: GeoResolver,
        registry: UniqueIpRegistry,
        column: int,
        stats: ParseStats | None = None,
    ) -> None:
        self.resolver = resolver
        self.registry = registry
        self.column = column
        self.stats = stats if stats is not None else ParseStats()

    def enrich(self, line: str) -> str | None:
        """Return ``line`` with city and country appended, or None if the row is dropped."""
        if line.startswith(COMMENT_MARKER):
            self.stats.note_dropped("comment")
            return None

        tokens = line.split()
        if len(tokens) <= self.column:
            logger.debug("Too few fields for column %d in line: %s", self.column, line)
            self.stats.note_dropped("short-record")
            return None

        ip_address = tokens[self.column].replace('"', "")
        address_class = classify_address(ip_address)
        if address_class.excluded:
            self.stats.note_dropped(address_class.value)
            return None

        result = self.resolver.lookup(ip_address)
        if result.status is GeoStatus.FOUND:
            city = _token(result.city)
            country = _token(result.country)
            self.registry.record_if_absent(ip_address, result.city, result.country or "")
            self.stats.note_enriched()
        elif result.status is GeoStatus.NOT_FOUND:
            city = country = NOT_FOUND
            self.stats.note_not_found()
        else:
            logger.info("Error: %s for line: %s", result.message, line)
            city = f"City error: {result.message}"
            country = COUNTRY_ERROR
            self.stats.note_error()

        return f"{line} {city} {country}"


def enrich_file(
    source: Path,
    field_name: str,
    resolver: GeoResolver,
    registry: UniqueIpRegistry,
    writer: StreamWriter,
    advance_progress: Callable[[int], None] | None = None,
) -> ParseStats:
    """Write the enriched copy of ``source`` and return its statistics.

    Raises ``SchemaNotFoundError`` or ``FieldNotFoundError`` before any output
    is opened when the file cannot be processed.
    """
    stats = ParseStats()
    with source.open("r", encoding="utf-8", errors="ignore") as handle:
        lines = iter(handle)
        header = parse_header(lines, advance_progress)

        logger.info("Looking for/verifying '%s' field position...", field_name)
        column = header.schema.position(field_name)
        logger.info("Found '%s' field position in column '%d'!", field_name, column)

        enricher = RecordEnricher(resolver, registry, column, stats)
        with writer.open(source) as out:
            for header_line in header.lines:
                writer.write_line(out, header_line)

            if header.first_data_line is not None:
                enriched = enricher.enrich(header.first_data_line)
                if enriched is not None:
                    writer.write_line(out, enriched)

            for raw_line in lines:
                if advance_progress is not None:
                    advance_progress(len(raw_line))

                line = raw_line.strip()
                if not line:
                    continue

                enriched = enricher.enrich(line)
                if enriched is not None:
                    writer.write_line(out, enriched)

    return stats
