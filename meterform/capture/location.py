"""Position providers for tagging meters with coordinates."""

from __future__ import annotations

import asyncio
import sys

from ..exceptions import CaptureError, PermissionDeniedError
from . import GeoPosition, LocationProvider

_DENIED = (
    "Keine Standortberechtigung. "
    "Bitte erteilen Sie die Standortberechtigung in den Einstellungen."
)


def parse_position(text: str) -> GeoPosition:
    """Parse ``"lat, long"`` into a GeoPosition."""
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 2:
        raise ValueError(f"Ungültige Koordinaten: {text!r}  (Format: lat, long)")
    try:
        latitude, longitude = float(parts[0]), float(parts[1])
    except ValueError:
        raise ValueError(f"Ungültige Koordinaten: {text!r}  (Format: lat, long)") from None
    if not -90.0 <= latitude <= 90.0 or not -180.0 <= longitude <= 180.0:
        raise ValueError(f"Koordinaten außerhalb des gültigen Bereichs: {text!r}")
    return GeoPosition(latitude=latitude, longitude=longitude)


class FixedLocationProvider(LocationProvider):
    """Always reports the configured coordinates."""

    def __init__(
        self, latitude: float, longitude: float, enabled: bool = True
    ) -> None:
        self._position = GeoPosition(latitude=latitude, longitude=longitude)
        self._enabled = enabled

    async def current_position(self) -> GeoPosition:
        if not self._enabled:
            raise PermissionDeniedError(_DENIED)
        return self._position


class ManualLocationProvider(LocationProvider):
    """Prompts the operator for coordinates on stdin."""

    def __init__(self, enabled: bool = True) -> None:
        self._enabled = enabled

    async def current_position(self) -> GeoPosition:
        if not self._enabled:
            raise PermissionDeniedError(_DENIED)
        print("Bitte Standort eingeben (Breitengrad, Längengrad):")
        sys.stdout.flush()
        text = await asyncio.to_thread(input, "> ")
        try:
            return parse_position(text)
        except ValueError as err:
            raise CaptureError(str(err)) from err
