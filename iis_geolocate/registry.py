"""Run-wide store of distinct geolocated addresses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True, slots=True)
class UniqueIp:
    ip_address: str
    city: str | None
    country: str


class UniqueIpRegistry:
    """Append-only mapping of address to its first geolocation.

    One registry spans every file of a run. An address is recorded the first
    time it resolves and never updated afterwards.
    """

    def __init__(self) -> None:
        self._entries: dict[str, UniqueIp] = {}

    def record_if_absent(self, ip_address: str, city: str | None, country: str) -> bool:
        if ip_address in self._entries:
            return False
        self._entries[ip_address] = UniqueIp(ip_address, city, country)
        return True

    def __contains__(self, ip_address: object) -> bool:
        return ip_address in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[UniqueIp]:
        return iter(self._entries.values())
