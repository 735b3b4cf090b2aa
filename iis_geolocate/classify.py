"""Classify client addresses before they are geolocated."""

from __future__ import annotations

from enum import Enum

LINK_LOCAL_PREFIX = "fe80"


class AddressClass(Enum):
    ROUTABLE = "routable"
    PRIVATE = "private"
    MULTICAST = "multicast"
    LINK_LOCAL = "link-local"

    @property
    def excluded(self) -> bool:
        return self is not AddressClass.ROUTABLE


def classify_address(address: str) -> AddressClass:
    """Classify an address token by its textual form.

    Anything that cannot be read as dotted-decimal is treated as routable and
    left to the geolocation lookup to accept or reject.
    """
    if address.lower().startswith(LINK_LOCAL_PREFIX):
        return AddressClass.LINK_LOCAL

    segments = address.split(".")
    if len(segments) < 2:
        return AddressClass.ROUTABLE

    if not all(segment.isascii() and segment.isdigit() for segment in segments[:2]):
        return AddressClass.ROUTABLE
    first = int(segments[0])
    second = int(segments[1])

    # 224.0.0.0 and up is multicast or reserved
    if first >= 224:
        return AddressClass.MULTICAST
    if first == 10:
        return AddressClass.PRIVATE
    if first == 192 and second == 168:
        return AddressClass.PRIVATE
    if first == 172 and 16 <= second <= 31:
        return AddressClass.PRIVATE
    return AddressClass.ROUTABLE
