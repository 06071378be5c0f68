"""In-progress meter draft and the session's list of captured meters."""

from __future__ import annotations

import copy
import logging
from dataclasses import fields

from .models import MeterReading, Session, energy_type_label

logger = logging.getLogger(__name__)

_DRAFT_FIELDS = frozenset(f.name for f in fields(MeterReading))


class MeterRecordStore:
    """Holds the draft meter and appends finalized copies to a session.

    Values are taken as-is. Capturing an incomplete meter is allowed.
    """

    def __init__(self, session: Session | None = None) -> None:
        self.session = session if session is not None else Session()
        self.draft = MeterReading()

    def update_draft(self, field_name: str, value) -> None:
        """Set one field of the draft meter."""
        if field_name not in _DRAFT_FIELDS:
            raise ValueError(f"Unknown meter field: {field_name!r}")
        setattr(self.draft, field_name, value)

    def update_company(self, field_name: str, value: str) -> None:
        _set_known(self.session.company_info, field_name, value)

    def update_contact(self, field_name: str, value: str) -> None:
        _set_known(self.session.contact_info, field_name, value)

    def finalize_draft(self) -> MeterReading:
        """Append a copy of the draft to the session and start a fresh draft.

        Returns:
            The appended meter.
        """
        meter = copy.deepcopy(self.draft)
        self.session.meters.append(meter)
        self.draft = MeterReading()
        logger.debug("Meter added (%d in session)", len(self.session.meters))
        return meter

    def reset(self, session: Session | None = None) -> None:
        """Replace the session and discard the draft."""
        self.session = session if session is not None else Session()
        self.draft = MeterReading()

    def search(self, query: str) -> list[MeterReading]:
        """Return meters whose scanned code or energy type matches ``query``.

        The code match is a case-sensitive substring test; the energy type
        match ignores case. Meters without a scanned code never match on
        the code.
        """
        needle = query.lower()
        return [
            m
            for m in self.session.meters
            if (m.scanned_code is not None and query in m.scanned_code)
            or needle in energy_type_label(m.energy_type).lower()
        ]


def _set_known(target, field_name: str, value: str) -> None:
    if field_name not in {f.name for f in fields(target)}:
        raise ValueError(
            f"Unknown {type(target).__name__} field: {field_name!r}"
        )
    setattr(target, field_name, value)
