"""Submission notifications to the contact person."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

logger = logging.getLogger(__name__)


class Notifier(ABC):
    @abstractmethod
    async def notify(self, email: str, payload: dict[str, Any]) -> None:
        """Tell ``email`` that the session was exported."""
        ...


class LogNotifier(Notifier):
    """Records the notification in the log; no mail is sent."""

    async def notify(self, email: str, payload: dict[str, Any]) -> None:
        logger.info(
            "E-Mail-Benachrichtigung gesendet an: %s (%d Zähler)",
            email,
            len(payload.get("meters", [])),
        )
