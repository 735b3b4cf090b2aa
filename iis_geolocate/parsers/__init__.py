"""Parsers for log formats that can be geolocated."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class ParseStats:
    """Statistics about enriching one log file."""
    total_lines: int = 0
    enriched: int = 0
    not_found: int = 0
    errors: int = 0
    dropped: dict[str, int] = field(default_factory=dict)

    def note_enriched(self) -> None:
        self.total_lines += 1
        self.enriched += 1

    def note_not_found(self) -> None:
        self.total_lines += 1
        self.not_found += 1

    def note_error(self) -> None:
        self.total_lines += 1
        self.errors += 1

    def note_dropped(self, reason: str) -> None:
        self.total_lines += 1
        if reason not in self.dropped:
            self.dropped[reason] = 0
        self.dropped[reason] += 1

    @property
    def written(self) -> int:
        return self.enriched + self.not_found + self.errors

    @property
    def dropped_total(self) -> int:
        return sum(self.dropped.values())
