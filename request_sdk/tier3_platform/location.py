"""
request_sdk.tier3_platform.location
────────────────────────────────────
Current-location provider. Every request carries the device's last known
latitude/longitude in the ``lat``/``lng`` headers.

Select via:    REQUEST_SDK_LOCATION_BACKEND=fixed|mutable
"""
from __future__ import annotations

import threading
from typing import NamedTuple, Protocol, runtime_checkable

from request_sdk.tier0_core.config import get_config
from request_sdk.tier0_core.errors import ConfigurationError, ValidationError


class Location(NamedTuple):
    latitude: float
    longitude: float


@runtime_checkable
class LocationProvider(Protocol):
    def get_current_location(self) -> Location: ...


def _checked(latitude: float, longitude: float) -> Location:
    if not -90.0 <= latitude <= 90.0 or not -180.0 <= longitude <= 180.0:
        raise ValidationError(
            "invalid_location",
            "Coordinates are out of range.",
            fields={"latitude": str(latitude), "longitude": str(longitude)},
        )
    return Location(float(latitude), float(longitude))


class FixedLocationProvider:
    def __init__(self, latitude: float = 0.0, longitude: float = 0.0) -> None:
        self._location = _checked(latitude, longitude)

    def get_current_location(self) -> Location:
        return self._location


class MutableLocationProvider:
    """Updated by the host app's location callbacks, read by request threads."""

    def __init__(self, latitude: float = 0.0, longitude: float = 0.0) -> None:
        self._lock = threading.Lock()
        self._location = _checked(latitude, longitude)

    def update(self, latitude: float, longitude: float) -> None:
        location = _checked(latitude, longitude)
        with self._lock:
            self._location = location

    def get_current_location(self) -> Location:
        with self._lock:
            return self._location


# ── Provider registry ─────────────────────────────────────────────────────────

_provider: LocationProvider | None = None


def _build_provider() -> LocationProvider:
    config = get_config()
    name = config.location_backend.lower()
    if name == "fixed":
        return FixedLocationProvider(config.default_latitude, config.default_longitude)
    if name == "mutable":
        return MutableLocationProvider(config.default_latitude, config.default_longitude)
    raise ConfigurationError(
        "unknown_location_backend",
        f"Unknown REQUEST_SDK_LOCATION_BACKEND={name!r}. Valid: fixed, mutable",
    )


def get_location_provider() -> LocationProvider:
    global _provider
    if _provider is None:
        _provider = _build_provider()
    return _provider


def _reset_provider() -> None:
    global _provider
    _provider = None


__all__ = [
    "Location",
    "LocationProvider",
    "FixedLocationProvider",
    "MutableLocationProvider",
    "get_location_provider",
]
