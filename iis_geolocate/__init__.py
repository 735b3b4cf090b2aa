"""Geolocate client addresses in W3C extended (IIS) access logs."""

__version__ = "0.1.0"
