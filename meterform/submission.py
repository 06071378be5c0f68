"""Validate, deliver and locally secure a finished session."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .const import OFFLINE_DATA_KEY
from .db import SessionPersistence
from .exceptions import (
    DeliveryFailedError,
    IncompleteSessionError,
    MissingSignatureError,
)
from .export import LogExporter, SpreadsheetExporter
from .formatting import SessionFormatter
from .models import Session
from .notify import LogNotifier, Notifier

logger = logging.getLogger(__name__)


@dataclass
class SubmissionResult:
    """Outcome of a successful submission: a fresh session and no signature."""

    session: Session
    signature: str | None
    formatted: str


class SubmissionCoordinator:
    """Submits sessions once and falls back to local storage on failure.

    There is no automatic retry. A session saved offline is picked up again
    through load_pending() and resubmitted by the operator.
    """

    def __init__(
        self,
        persistence: SessionPersistence,
        formatter: SessionFormatter,
        exporter: SpreadsheetExporter | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self._persistence = persistence
        self._formatter = formatter
        self._exporter = exporter or LogExporter()
        self._notifier = notifier or LogNotifier()

    async def submit(self, session: Session, signature: str | None) -> SubmissionResult:
        """Deliver ``session`` to the formatting endpoint.

        Raises:
            IncompleteSessionError: The operator has not confirmed completeness.
            MissingSignatureError: No signature was captured.
            DeliveryFailedError: Delivery failed and the session was saved
                under ``"offlineData"``; ``session`` is left untouched.
        """
        if not session.is_complete:
            raise IncompleteSessionError(
                "Bitte bestätigen Sie, dass alle Zähler vollständig erfasst wurden."
            )
        if not signature:
            raise MissingSignatureError(
                "Bitte unterschreiben Sie die Datenschutzerklärung."
            )

        payload = session.to_dict()

        try:
            formatted = await self._formatter.format_session(payload)
            await self._exporter.export(formatted, payload)
            await self._notifier.notify(session.contact_info.email, payload)
            self._persistence.clear(OFFLINE_DATA_KEY)
        except Exception as err:
            logger.exception("Fehler beim Exportieren der Daten")
            self._persistence.save(OFFLINE_DATA_KEY, payload)
            raise DeliveryFailedError(
                "Es gab ein Problem beim Exportieren der Daten. "
                "Die Daten werden lokal gespeichert und später synchronisiert."
            ) from err

        logger.info("Session exported (%d meters)", len(session.meters))
        return SubmissionResult(session=Session(), signature=None, formatted=formatted)

    def load_pending(self) -> Session | None:
        """Return the session saved after a failed delivery, if any."""
        data = self._persistence.load(OFFLINE_DATA_KEY)
        if not data:
            return None
        return Session.from_dict(data)

    def has_pending(self) -> bool:
        return self._persistence.load(OFFLINE_DATA_KEY) is not None
