"""Spreadsheet export of formatted sessions.

Only stand-ins exist for now: a logger and a plain file writer. A Google
Sheets exporter would implement the same interface.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .config import MeterFormConfig

logger = logging.getLogger(__name__)


class SpreadsheetExporter(ABC):
    @abstractmethod
    async def export(self, formatted: str, payload: dict[str, Any]) -> None:
        ...


class LogExporter(SpreadsheetExporter):
    """Logs the formatted data instead of exporting it."""

    async def export(self, formatted: str, payload: dict[str, Any]) -> None:
        logger.info("Formatierte Daten für Google-Tabelle: %s", formatted)


class FileExporter(SpreadsheetExporter):
    """Writes each formatted session to a timestamped text file."""

    def __init__(self, out_dir: str | Path = "~/.config/meterform/exports") -> None:
        self._out_dir = Path(out_dir).expanduser()

    async def export(self, formatted: str, payload: dict[str, Any]) -> Path:
        self._out_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S_%f")
        path = self._out_dir / f"export_{stamp}.txt"
        path.write_text(formatted, encoding="utf-8")
        logger.info("Export gespeichert: %s", path)
        return path


def create_exporter(config: MeterFormConfig) -> SpreadsheetExporter:
    match config.export.backend:
        case "log":
            return LogExporter()
        case "file":
            return FileExporter(out_dir=config.export.out_dir)
        case other:
            raise ValueError(f"Unbekanntes Export-Backend: {other!r}  (log / file)")
