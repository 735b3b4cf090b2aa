"""Exceptions raised while geolocating a log directory."""

from __future__ import annotations

from pathlib import Path


class GeolocateError(Exception):
    """Base class for every error raised by iis_geolocate."""


class NoLogFilesError(GeolocateError):
    def __init__(self, log_dir: Path) -> None:
        super().__init__(f"No files ending in .log found in {log_dir}. Exiting...")
        self.log_dir = log_dir


class DatabaseNotFoundError(GeolocateError):
    def __init__(self, db_dir: Path, names: tuple[str, ...]) -> None:
        wanted = " or ".join(f"'{name}'" for name in names)
        super().__init__(f"{wanted} missing from {db_dir}! Cannot continue. Exiting")
        self.db_dir = db_dir
        self.names = names


class SkipFileError(GeolocateError):
    """A single log file cannot be processed; the run continues."""


class SchemaNotFoundError(SkipFileError):
    def __init__(self) -> None:
        super().__init__("Unable to find 'Fields' info in file")


class FieldNotFoundError(SkipFileError):
    def __init__(self, field_name: str) -> None:
        super().__init__(f"Unable to find '{field_name}' in 'Fields' info")
        self.field_name = field_name
