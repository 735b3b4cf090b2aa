from __future__ import annotations

from pathlib import Path

import pytest

from iis_geolocate.geo import GeoResult

FIELDS = "#Fields: date time c-ip cs-method"


class DictResolver:
    """Resolver backed by a mapping of address to (city, country)."""

    def __init__(self, known: dict[str, tuple[str | None, str | None]], broken: dict[str, str] | None = None) -> None:
        self.known = known
        self.broken = broken or {}
        self.calls: list[str] = []

    def lookup(self, ip_address: str) -> GeoResult:
        self.calls.append(ip_address)
        if ip_address in self.broken:
            return GeoResult.error(self.broken[ip_address])
        if ip_address in self.known:
            city, country = self.known[ip_address]
            return GeoResult.found(city, country)
        return GeoResult.not_found()


@pytest.fixture
def resolver() -> DictResolver:
    return DictResolver(
        {
            "8.8.8.8": ("Testville", "Testland"),
            "1.1.1.1": ("New York", "United States"),
            "9.9.9.9": (None, "Switzerland"),
        },
        broken={"bogus": "'bogus' does not appear to be an IPv4 or IPv6 address"},
    )


@pytest.fixture
def write_log(tmp_path: Path):
    def _write(name: str, *lines: str) -> Path:
        path = tmp_path / name
        path.write_text("\r\n".join(lines) + "\r\n", encoding="utf-8")
        return path

    return _write
