"""Device capture ports: camera, location, code scanner and signature pad.

Every port is async. A port raises PermissionDeniedError when the
capability is not granted and CaptureError when the device yields no
usable result; callers turn both into a warning.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import MeterFormConfig


@dataclass
class PhotoCapture:
    uri: str
    captured_at: str  # ISO8601


@dataclass
class GeoPosition:
    latitude: float
    longitude: float

    def as_text(self) -> str:
        return f"{self.latitude}, {self.longitude}"


class PhotoSource(ABC):
    @abstractmethod
    async def take_photo(self) -> PhotoCapture:
        ...


class LocationProvider(ABC):
    @abstractmethod
    async def current_position(self) -> GeoPosition:
        ...


class CodeScanner(ABC):
    @abstractmethod
    async def scan(self) -> str:
        """Return the decoded meter code."""
        ...


class SignaturePad(ABC):
    @abstractmethod
    async def capture(self) -> str:
        """Return the signature as a data URI."""
        ...


@dataclass
class CaptureDevices:
    camera: PhotoSource
    location: LocationProvider
    scanner: CodeScanner
    signature: SignaturePad


def create_devices(config: MeterFormConfig) -> CaptureDevices:
    """Build the capture ports from configuration."""
    from .camera import MeterCamera
    from .location import FixedLocationProvider, ManualLocationProvider
    from .scanner import CameraCodeScanner, ManualCodeScanner
    from .signature import FileSignaturePad

    camera = MeterCamera(
        camera_index=config.camera.index,
        save_dir=config.camera.save_dir,
        enabled=config.camera.enabled,
    )

    match config.location.provider:
        case "fixed":
            location: LocationProvider = FixedLocationProvider(
                latitude=config.location.latitude,
                longitude=config.location.longitude,
                enabled=config.location.enabled,
            )
        case "manual":
            location = ManualLocationProvider(enabled=config.location.enabled)
        case other:
            raise ValueError(
                f"Unbekannter Standortanbieter: {other!r}  (fixed / manual)"
            )

    match config.scanner.backend:
        case "camera":
            scanner: CodeScanner = CameraCodeScanner(camera)
        case "manual":
            scanner = ManualCodeScanner()
        case other:
            raise ValueError(
                f"Unbekannter Code-Scanner: {other!r}  (camera / manual)"
            )

    return CaptureDevices(
        camera=camera,
        location=location,
        scanner=scanner,
        signature=FileSignaturePad(config.signature.path),
    )
