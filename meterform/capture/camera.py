"""Meter photos from a USB camera using OpenCV."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from pathlib import Path

from ..exceptions import CaptureError, PermissionDeniedError
from . import PhotoCapture, PhotoSource


def _import_cv2():
    try:
        import cv2
    except ImportError:
        raise ImportError(
            "opencv-python is required: pip install opencv-python"
        ) from None
    return cv2


class MeterCamera(PhotoSource):
    """Capture still images of meters and save them as JPEG files."""

    def __init__(
        self,
        camera_index: int = 0,
        save_dir: str = "/tmp/meterform",
        enabled: bool = True,
    ) -> None:
        self._camera_index = camera_index
        self._save_dir = Path(save_dir)
        self._enabled = enabled

    async def take_photo(self) -> PhotoCapture:
        return await asyncio.to_thread(self.capture)

    def read_frame(self):
        """Grab a single frame from the camera."""
        if not self._enabled:
            raise PermissionDeniedError(
                "Keine Kameraberechtigung. "
                "Bitte erteilen Sie die Kameraberechtigung in den Einstellungen."
            )
        cv2 = _import_cv2()

        cap = cv2.VideoCapture(self._camera_index)
        if not cap.isOpened():
            raise CaptureError(
                f"Kamera {self._camera_index} konnte nicht geöffnet werden. "
                f"Bitte Verbindung prüfen."
            )
        try:
            ret, frame = cap.read()
            if not ret or frame is None:
                raise CaptureError(
                    f"Kamera {self._camera_index} lieferte kein Bild."
                )
            return frame
        finally:
            cap.release()

    def capture(self) -> PhotoCapture:
        """Capture a frame and write it to ``save_dir``."""
        frame = self.read_frame()
        cv2 = _import_cv2()

        now = datetime.now(timezone.utc)
        filename = f"meter{self._camera_index}_{now.strftime('%Y%m%d_%H%M%S_%f')}.jpg"
        self._save_dir.mkdir(parents=True, exist_ok=True)
        filepath = (self._save_dir / filename).resolve()
        cv2.imwrite(str(filepath), frame)

        return PhotoCapture(uri=filepath.as_uri(), captured_at=now.isoformat())

    @staticmethod
    def list_cameras(max_check: int = 10) -> list[int]:
        """List available USB camera indices by probing."""
        cv2 = _import_cv2()

        available: list[int] = []
        for i in range(max_check):
            cap = cv2.VideoCapture(i)
            if cap.isOpened():
                available.append(i)
                cap.release()
        return available
