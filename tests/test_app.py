"""Tests for the application controller."""

import sys
from unittest.mock import AsyncMock, MagicMock, patch

import numpy as np
import pytest

from meterform.app import Alert, MeterFormApp, create_app
from meterform.capture import CaptureDevices, GeoPosition, PhotoCapture
from meterform.capture.camera import MeterCamera
from meterform.capture.location import ManualLocationProvider
from meterform.capture.scanner import CameraCodeScanner, ManualCodeScanner
from meterform.capture.signature import FileSignaturePad
from meterform.config import load_config
from meterform.db import SessionPersistence
from meterform.exceptions import FormatterConnectionError, PermissionDeniedError
from meterform.formatting import SessionFormatter
from meterform.models import EnergyType, MeterReading, Session
from meterform.submission import SubmissionCoordinator

SIGNATURE = "data:image/png;base64,AAAA"


@pytest.fixture
def persistence(tmp_path):
    store = SessionPersistence(db_path=tmp_path / "test.db")
    yield store
    store.close()


@pytest.fixture
def formatter():
    mock = MagicMock(spec=SessionFormatter)
    mock.format_session = AsyncMock(return_value="formatiert")
    return mock


@pytest.fixture
def devices():
    camera = MagicMock()
    camera.take_photo = AsyncMock(
        return_value=PhotoCapture(uri="file:///tmp/z1.jpg", captured_at="2025-01-01T00:00:00+00:00")
    )
    location = MagicMock()
    location.current_position = AsyncMock(return_value=GeoPosition(51.34, 12.37))
    scanner = MagicMock()
    scanner.scan = AsyncMock(return_value="M123")
    signature = MagicMock()
    signature.capture = AsyncMock(return_value=SIGNATURE)
    return CaptureDevices(camera=camera, location=location, scanner=scanner, signature=signature)


@pytest.fixture
def app(persistence, formatter, devices):
    coordinator = SubmissionCoordinator(persistence=persistence, formatter=formatter)
    return MeterFormApp(persistence=persistence, coordinator=coordinator, devices=devices)


async def _capture_meter(app):
    await app.take_photo("meter_photo")
    await app.take_photo("distance_photo")
    await app.scan_code()
    await app.capture_location()
    app.set_energy_type(EnergyType.STROM)
    return app.add_meter()


class TestCapture:
    @pytest.mark.asyncio
    async def test_full_meter_capture(self, app):
        meter = await _capture_meter(app)
        assert meter.meter_photo == "file:///tmp/z1.jpg"
        assert meter.distance_photo == "file:///tmp/z1.jpg"
        assert meter.scanned_code == "M123"
        assert meter.location == "51.34, 12.37"
        assert meter.timestamp is not None
        assert meter.energy_type == EnergyType.STROM
        assert app.session.meters == [meter]
        assert app.draft == MeterReading()

    @pytest.mark.asyncio
    async def test_camera_permission_denied(self, app, devices):
        devices.camera.take_photo.side_effect = PermissionDeniedError("verweigert")
        assert await app.take_photo("meter_photo") is False
        assert app.draft.meter_photo is None
        assert app.alerts == [Alert(title="Keine Kameraberechtigung", message="verweigert")]

    @pytest.mark.asyncio
    async def test_location_permission_denied(self, app, devices):
        devices.location.current_position.side_effect = PermissionDeniedError("verweigert")
        assert await app.capture_location() is False
        assert app.draft.location is None
        assert app.draft.timestamp is None
        assert app.alerts[0].title == "Keine Standortberechtigung"

    @pytest.mark.asyncio
    async def test_scan_permission_denied(self, app, devices):
        devices.scanner.scan.side_effect = PermissionDeniedError("verweigert")
        assert await app.scan_code() is False
        assert app.draft.scanned_code is None

    @pytest.mark.asyncio
    async def test_unknown_photo_kind(self, app):
        with pytest.raises(ValueError):
            await app.take_photo("selfie")

    @pytest.mark.asyncio
    async def test_signature_file_missing(self, app, devices):
        devices.signature.capture.side_effect = FileNotFoundError("fehlt")
        assert await app.capture_signature() is False
        assert app.signature is None
        assert app.alerts[0].title == "Warnung"

    @pytest.mark.asyncio
    async def test_invalid_coordinates_warn(self, app, devices, monkeypatch):
        monkeypatch.setattr("builtins.input", lambda prompt="": "nonsense")
        devices.location = ManualLocationProvider()
        assert await app.capture_location() is False
        assert app.draft == MeterReading()
        assert app.alerts[0].title == "Warnung"
        assert "Ungültige Koordinaten" in app.alerts[0].message

    @pytest.mark.asyncio
    async def test_empty_code_warns(self, app, devices, monkeypatch):
        monkeypatch.setattr("builtins.input", lambda prompt="": "  ")
        devices.scanner = ManualCodeScanner()
        assert await app.scan_code() is False
        assert app.draft.scanned_code is None
        assert app.alerts == [Alert(title="Warnung", message="Kein Zählercode eingegeben")]

    @pytest.mark.asyncio
    async def test_camera_unavailable_warns(self, app, devices, tmp_path):
        mock_cv2 = MagicMock()
        mock_cv2.VideoCapture.return_value.isOpened.return_value = False
        devices.camera = MeterCamera(camera_index=3, save_dir=str(tmp_path))
        with patch.dict(sys.modules, {"cv2": mock_cv2}):
            assert await app.take_photo("meter_photo") is False
        assert app.draft.meter_photo is None
        assert app.alerts[0].title == "Warnung"
        assert "Kamera 3" in app.alerts[0].message

    @pytest.mark.asyncio
    async def test_no_code_in_frame_warns(self, app, devices, tmp_path):
        mock_cv2 = MagicMock()
        cap = mock_cv2.VideoCapture.return_value
        cap.isOpened.return_value = True
        cap.read.return_value = (True, np.zeros((480, 640, 3), dtype=np.uint8))
        mock_cv2.QRCodeDetector.return_value.detectAndDecode.return_value = ("", None, None)
        devices.scanner = CameraCodeScanner(MeterCamera(save_dir=str(tmp_path)))
        with patch.dict(sys.modules, {"cv2": mock_cv2}):
            assert await app.scan_code() is False
        assert app.draft.scanned_code is None
        assert app.alerts == [Alert(title="Warnung", message="Kein Code im Bild erkannt")]

    @pytest.mark.asyncio
    async def test_signature_path_is_directory(self, app, devices, tmp_path):
        devices.signature = FileSignaturePad(tmp_path)
        assert await app.capture_signature() is False
        assert app.signature is None
        assert app.alerts[0].title == "Warnung"


class TestSubmit:
    @pytest.mark.asyncio
    async def test_incomplete_warns(self, app, formatter):
        await _capture_meter(app)
        app.set_signature(SIGNATURE)
        assert await app.submit() is False
        assert app.alerts[-1].title == "Warnung"
        assert "vollständig" in app.alerts[-1].message
        formatter.format_session.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_signature_warns(self, app, formatter):
        app.set_complete(True)
        assert await app.submit() is False
        assert "unterschreiben" in app.alerts[-1].message
        formatter.format_session.assert_not_called()

    @pytest.mark.asyncio
    async def test_success_resets_state(self, app, persistence):
        app.update_company("name", "Wohnbau GmbH")
        app.update_contact("email", "kontakt@example.com")
        await _capture_meter(app)
        app.set_complete(True)
        assert await app.capture_signature() is True

        assert await app.submit() is True

        assert app.session == Session()
        assert app.session.is_complete is False
        assert app.signature is None
        assert app.alerts[-1].title == "Erfolg"
        assert persistence.load("offlineData") is None

    @pytest.mark.asyncio
    async def test_failure_keeps_state(self, app, formatter, persistence):
        formatter.format_session.side_effect = FormatterConnectionError("offline")
        app.update_company("name", "Wohnbau GmbH")
        await _capture_meter(app)
        app.set_complete(True)
        app.set_signature(SIGNATURE)
        before = app.session.to_dict()

        assert await app.submit() is False

        assert app.session.to_dict() == before
        assert app.signature == SIGNATURE
        assert app.alerts[-1].title == "Fehler"
        assert "lokal gespeichert" in app.alerts[-1].message
        assert persistence.load("offlineData") == before

    @pytest.mark.asyncio
    async def test_manual_retry_after_failure(self, app, formatter):
        formatter.format_session.side_effect = [FormatterConnectionError("offline"), "ok"]
        await _capture_meter(app)
        app.set_complete(True)
        app.set_signature(SIGNATURE)

        assert await app.submit() is False
        assert await app.submit() is True
        assert formatter.format_session.await_count == 2


class TestStart:
    @pytest.mark.asyncio
    async def test_restores_user_and_offline_session(
        self, persistence, formatter, devices
    ):
        coordinator = SubmissionCoordinator(persistence=persistence, formatter=formatter)
        first = MeterFormApp(persistence, coordinator, devices)
        user = first.register(name="Ableser")
        formatter.format_session.side_effect = FormatterConnectionError("offline")
        first.update_company("city", "Dresden")
        await _capture_meter(first)
        first.set_complete(True)
        first.set_signature(SIGNATURE)
        await first.submit()

        second = MeterFormApp(persistence, coordinator, devices)
        await second.start()

        assert second.user == user
        assert second.session.company_info.city == "Dresden"
        assert len(second.session.meters) == 1
        assert second.session.is_complete is False
        assert second.signature is None

    @pytest.mark.asyncio
    async def test_start_empty(self, app):
        await app.start()
        assert app.user is None
        assert app.session == Session()

    def test_logout(self, app, persistence):
        app.register()
        app.logout()
        assert app.user is None
        assert persistence.load("user") is None


def test_search(app):
    app.store.session.meters.extend([
        MeterReading(scanned_code="M123", energy_type=EnergyType.STROM),
        MeterReading(scanned_code="X999", energy_type=EnergyType.WASSER),
        MeterReading(scanned_code=None, energy_type=EnergyType.WAERME),
    ])
    assert [m.scanned_code for m in app.search("123")] == ["M123"]
    assert [m.scanned_code for m in app.search("STROM")] == ["M123"]
    assert [m.energy_type for m in app.search("wärme")] == [EnergyType.WAERME]


def test_create_app(tmp_path):
    config = load_config()
    config.storage.db_path = str(tmp_path / "app.db")
    config.formatter.backend = "local"
    app = create_app(config)
    assert isinstance(app, MeterFormApp)
    assert app.user is None
    app.persistence.close()
