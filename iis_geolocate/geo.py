"""Geolocation lookups against a MaxMind City database."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol

import geoip2.database
import geoip2.errors

from .errors import DatabaseNotFoundError

logger = logging.getLogger(__name__)

# Full database first, it wins when both are present.
DATABASE_NAMES = ("GeoIP2-City.mmdb", "GeoLite2-City.mmdb")


class GeoStatus(Enum):
    FOUND = "found"
    NOT_FOUND = "not-found"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class GeoResult:
    """Outcome of a single lookup."""
    status: GeoStatus
    city: str | None = None
    country: str | None = None
    message: str | None = None

    @classmethod
    def found(cls, city: str | None, country: str | None) -> GeoResult:
        return cls(GeoStatus.FOUND, city=city, country=country)

    @classmethod
    def not_found(cls) -> GeoResult:
        return cls(GeoStatus.NOT_FOUND)

    @classmethod
    def error(cls, message: str) -> GeoResult:
        return cls(GeoStatus.ERROR, message=message)


class GeoResolver(Protocol):
    def lookup(self, ip_address: str) -> GeoResult:
        ...


def locate_database(db_dir: Path) -> Path:
    """Return the City database to use from ``db_dir``."""
    for name in DATABASE_NAMES:
        candidate = db_dir / name
        if candidate.is_file():
            return candidate
    raise DatabaseNotFoundError(db_dir, tuple(reversed(DATABASE_NAMES)))


class MaxMindResolver:
    """Resolve addresses with a ``geoip2`` City database reader."""

    def __init__(self, reader: geoip2.database.Reader) -> None:
        self._reader = reader

    @classmethod
    def from_path(cls, path: Path) -> MaxMindResolver:
        logger.info("Using '%s'", path.name)
        return cls(geoip2.database.Reader(str(path)))

    def lookup(self, ip_address: str) -> GeoResult:
        try:
            response = self._reader.city(ip_address)
        except geoip2.errors.AddressNotFoundError:
            return GeoResult.not_found()
        except Exception as exc:
            # ValueError for malformed addresses, database and I/O faults
            return GeoResult.error(str(exc))
        return GeoResult.found(response.city.name, response.country.name)

    def close(self) -> None:
        self._reader.close()

    def __enter__(self) -> MaxMindResolver:
        return self

    def __exit__(self, *args) -> None:
        self.close()
