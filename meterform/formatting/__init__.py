"""Session formatter base class and factory."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..config import MeterFormConfig


class SessionFormatter(ABC):
    """Turns a serialized session into text ready for spreadsheet export."""

    @abstractmethod
    async def format_session(self, payload: dict[str, Any]) -> str:
        """Format ``{companyInfo, contactInfo, meters}``.

        Sends at most one request and never retries.
        """
        ...


def create_formatter(config: MeterFormConfig) -> SessionFormatter:
    """Create a formatter based on configuration."""
    backend_name = config.formatter.backend

    match backend_name:
        case "chat":
            from .chat import ChatFormatter

            return ChatFormatter(
                url=config.formatter.url,
                model=config.formatter.model,
                system_prompt=config.formatter.system_prompt,
                api_key=config.formatter.api_key,
            )
        case "local":
            from .local import LocalFormatter

            return LocalFormatter()
        case _:
            raise ValueError(
                f"Unbekanntes Formatierungs-Backend: {backend_name!r}  "
                f"(chat / local)"
            )
