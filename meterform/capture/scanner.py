"""Meter code scanners."""

from __future__ import annotations

import asyncio
import logging
import sys

from ..exceptions import CaptureError
from . import CodeScanner

logger = logging.getLogger(__name__)


class ManualCodeScanner(CodeScanner):
    """Reads the meter code typed by the operator from stdin."""

    async def scan(self) -> str:
        print("Bitte Zählercode eingeben:")
        sys.stdout.flush()
        code = (await asyncio.to_thread(input, "> ")).strip()
        if not code:
            raise CaptureError("Kein Zählercode eingegeben")
        return code


class CameraCodeScanner(CodeScanner):
    """Decodes a QR code from a camera frame with OpenCV."""

    def __init__(self, camera) -> None:
        # MeterCamera; typed loosely so any object with read_frame() works
        self._camera = camera

    async def scan(self) -> str:
        return await asyncio.to_thread(self._scan_sync)

    def _scan_sync(self) -> str:
        frame = self._camera.read_frame()
        try:
            import cv2
        except ImportError:
            raise ImportError(
                "opencv-python is required: pip install opencv-python"
            ) from None

        detector = cv2.QRCodeDetector()
        data, _points, _ = detector.detectAndDecode(frame)
        if not data:
            raise CaptureError("Kein Code im Bild erkannt")
        logger.debug("Decoded meter code %r", data)
        return data
