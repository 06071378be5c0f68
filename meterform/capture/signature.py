"""Signature capture from an image file."""

from __future__ import annotations

import asyncio
import base64
import mimetypes
from pathlib import Path

from . import SignaturePad


class FileSignaturePad(SignaturePad):
    """Loads a signature image drawn elsewhere and encodes it as a data URI."""

    def __init__(self, path: str | Path = "") -> None:
        self._path = Path(path).expanduser() if path else None

    async def capture(self) -> str:
        if self._path is None:
            raise FileNotFoundError("Keine Unterschriftsdatei konfiguriert")
        if not self._path.exists():
            raise FileNotFoundError(
                f"Unterschriftsdatei nicht gefunden: {self._path}"
            )
        data = await asyncio.to_thread(self._path.read_bytes)
        media_type = mimetypes.guess_type(str(self._path))[0] or "image/png"
        encoded = base64.standard_b64encode(data).decode()
        return f"data:{media_type};base64,{encoded}"
