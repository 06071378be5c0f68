"""Application controller tying the record store, submission and devices together."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from .capture import CaptureDevices
from .config import MeterFormConfig
from .const import PHOTO_FIELDS
from .db import SessionPersistence
from .exceptions import (
    CaptureError,
    DeliveryFailedError,
    PermissionDeniedError,
    SubmissionValidationError,
)
from .models import EnergyType, MeterReading, Session, User
from .store import MeterRecordStore
from .submission import SubmissionCoordinator
from .users import UserRegistry

logger = logging.getLogger(__name__)


@dataclass
class Alert:
    """A message shown to the operator."""

    title: str
    message: str


class MeterFormApp:
    """Owns all state of one operator's form.

    Commands never raise for expected user-facing conditions such as missing
    permissions, failed captures, incomplete sessions or failed delivery.
    They append an Alert and return a falsy value instead.
    """

    def __init__(
        self,
        persistence: SessionPersistence,
        coordinator: SubmissionCoordinator,
        devices: CaptureDevices,
    ) -> None:
        self.persistence = persistence
        self.coordinator = coordinator
        self.devices = devices
        self.users = UserRegistry(persistence)
        self.store = MeterRecordStore()
        self.signature: str | None = None
        self.alerts: list[Alert] = []

    @property
    def user(self) -> User | None:
        return self.users.current

    @property
    def session(self) -> Session:
        return self.store.session

    @property
    def draft(self) -> MeterReading:
        return self.store.draft

    def _alert(self, title: str, message: str) -> None:
        logger.info("%s: %s", title, message)
        self.alerts.append(Alert(title=title, message=message))

    async def start(self) -> None:
        """Restore the stored user and any session left by a failed submission."""
        self.users.load()
        pending = self.coordinator.load_pending()
        if pending is not None:
            self.store.reset(pending)
            logger.info("Restored offline session with %d meters", len(pending.meters))

    # User

    def register(self, **kwargs) -> User:
        return self.users.register(**kwargs)

    def logout(self) -> None:
        self.users.logout()

    # Form fields

    def update_company(self, field_name: str, value: str) -> None:
        self.store.update_company(field_name, value)

    def update_contact(self, field_name: str, value: str) -> None:
        self.store.update_contact(field_name, value)

    def set_energy_type(self, energy_type: EnergyType | str) -> None:
        self.store.update_draft("energy_type", energy_type)

    def set_complete(self, complete: bool) -> None:
        self.session.is_complete = complete

    # Capture

    async def take_photo(self, kind: str) -> bool:
        """Capture ``meter_photo`` or ``distance_photo`` for the draft meter."""
        if kind not in PHOTO_FIELDS:
            raise ValueError(f"Unknown photo kind: {kind!r}")
        try:
            photo = await self.devices.camera.take_photo()
        except PermissionDeniedError as err:
            self._alert("Keine Kameraberechtigung", str(err))
            return False
        except CaptureError as err:
            self._alert("Warnung", str(err))
            return False
        self.store.update_draft(kind, photo.uri)
        return True

    async def scan_code(self) -> bool:
        try:
            code = await self.devices.scanner.scan()
        except PermissionDeniedError as err:
            self._alert("Keine Kameraberechtigung", str(err))
            return False
        except CaptureError as err:
            self._alert("Warnung", str(err))
            return False
        self.store.update_draft("scanned_code", code)
        return True

    async def capture_location(self) -> bool:
        try:
            position = await self.devices.location.current_position()
        except PermissionDeniedError as err:
            self._alert("Keine Standortberechtigung", str(err))
            return False
        except CaptureError as err:
            self._alert("Warnung", str(err))
            return False
        self.store.update_draft("location", position.as_text())
        self.store.update_draft("timestamp", datetime.now(timezone.utc).isoformat())
        return True

    def add_meter(self) -> MeterReading:
        return self.store.finalize_draft()

    # Signature

    async def capture_signature(self) -> bool:
        try:
            self.signature = await self.devices.signature.capture()
        except OSError as err:
            self._alert("Warnung", str(err))
            return False
        return True

    def set_signature(self, signature: str | None) -> None:
        self.signature = signature

    def clear_signature(self) -> None:
        self.signature = None

    # Submission

    async def submit(self) -> bool:
        try:
            result = await self.coordinator.submit(self.session, self.signature)
        except SubmissionValidationError as err:
            self._alert("Warnung", str(err))
            return False
        except DeliveryFailedError as err:
            self._alert("Fehler", str(err))
            return False

        self.store.reset(result.session)
        self.signature = result.signature
        self._alert(
            "Erfolg",
            "Daten wurden erfolgreich exportiert. Eine Benachrichtigung wurde "
            "an Ihre E-Mail-Adresse gesendet.",
        )
        return True

    def search(self, query: str) -> list[MeterReading]:
        return self.store.search(query)


def create_app(config: MeterFormConfig) -> MeterFormApp:
    """Wire up an app from configuration."""
    from .capture import create_devices
    from .export import create_exporter
    from .formatting import create_formatter

    persistence = SessionPersistence(config.storage.db_path)
    coordinator = SubmissionCoordinator(
        persistence=persistence,
        formatter=create_formatter(config),
        exporter=create_exporter(config),
    )
    return MeterFormApp(
        persistence=persistence,
        coordinator=coordinator,
        devices=create_devices(config),
    )
