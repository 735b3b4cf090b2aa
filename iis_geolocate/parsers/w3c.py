"""W3C extended log format (IIS) header parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterator

from ..errors import FieldNotFoundError, SchemaNotFoundError

# IIS header block followed by data rows:
# #Software: Microsoft Internet Information Services 10.0
# #Version: 1.0
# #Date: 2024-01-01 00:00:00
# #Fields: date time s-ip cs-method cs-uri-stem cs-uri-query s-port cs-username c-ip ...
# 2024-01-01 00:00:00 10.0.0.4 GET / - 443 - 8.8.8.8 ...
COMMENT_MARKER = "#"
FIELDS_DIRECTIVE = "#Fields"
GEO_FIELDS = ("GeoCity", "GeoCountry")


@dataclass(frozen=True, slots=True)
class FieldSchema:
    """Ordered field names declared by a ``#Fields`` line."""
    names: tuple[str, ...]

    @classmethod
    def from_declaration(cls, line: str) -> FieldSchema:
        return cls(tuple(line.split()[1:]))

    def position(self, field_name: str) -> int:
        """Return the zero-based column of ``field_name``, ignoring case."""
        wanted = field_name.casefold()
        for index, name in enumerate(self.names):
            if name.casefold() == wanted:
                return index
        raise FieldNotFoundError(field_name)


@dataclass(slots=True)
class Header:
    """Header lines to echo, the declared schema and the line that ended the header."""
    lines: list[str] = field(default_factory=list)
    schema: FieldSchema | None = None
    first_data_line: str | None = None


def extend_declaration(line: str) -> str:
    return " ".join((line, *GEO_FIELDS))


def parse_header(
    lines: Iterator[str],
    advance_progress: Callable[[int], None] | None = None,
) -> Header:
    """Consume leading comment lines from ``lines``.

    Stops at the first non-comment line, which is returned in
    ``Header.first_data_line`` so the caller can keep reading the same
    iterator for data rows. Raises ``SchemaNotFoundError`` when no ``#Fields``
    line precedes the data.
    """
    header = Header()
    for raw_line in lines:
        if advance_progress is not None:
            advance_progress(len(raw_line))

        line = raw_line.strip()
        if not line:
            continue

        if not line.startswith(COMMENT_MARKER):
            header.first_data_line = line
            break

        if line.startswith(FIELDS_DIRECTIVE):
            if header.schema is None:
                header.schema = FieldSchema.from_declaration(line)
            line = extend_declaration(line)
        header.lines.append(line)

    if header.schema is None:
        raise SchemaNotFoundError()
    return header
