"""Tests for session and user models."""

import json

from meterform.models import (
    CompanyInfo,
    ContactInfo,
    EnergyType,
    MeterReading,
    Session,
    User,
    energy_type_label,
)


def _sample_session() -> Session:
    return Session(
        company_info=CompanyInfo(
            name="Stadtwerke Nord",
            street="Hauptstraße",
            street_number="12a",
            zip_code="20095",
            city="Hamburg",
        ),
        contact_info=ContactInfo(
            name="Erika Muster", email="erika@example.com", phone="040 123456"
        ),
        meters=[
            MeterReading(
                count=1,
                location="53.55, 9.99",
                timestamp="2025-03-01T10:00:00+00:00",
                meter_photo="file:///tmp/m1.jpg",
                distance_photo="file:///tmp/d1.jpg",
                scanned_code="M123",
                energy_type=EnergyType.STROM,
            ),
            MeterReading(scanned_code=None, energy_type=EnergyType.UNSET),
        ],
    )


class TestMeterReading:
    def test_defaults(self):
        meter = MeterReading()
        assert meter.count == 0
        assert meter.location is None
        assert meter.timestamp is None
        assert meter.meter_photo is None
        assert meter.distance_photo is None
        assert meter.scanned_code is None
        assert meter.energy_type == EnergyType.UNSET

    def test_to_dict_uses_camel_case(self):
        data = MeterReading(scanned_code="X1", energy_type=EnergyType.WAERME).to_dict()
        assert data == {
            "count": 0,
            "location": None,
            "timestamp": None,
            "meterPhoto": None,
            "distancePhoto": None,
            "scannedCode": "X1",
            "energyType": "Wärme",
        }

    def test_from_dict_unknown_energy_type_kept_as_text(self):
        meter = MeterReading.from_dict({"energyType": "Gas"})
        assert meter.energy_type == "Gas"
        assert energy_type_label(meter.energy_type) == "Gas"

    def test_from_dict_missing_keys_default(self):
        meter = MeterReading.from_dict({"scannedCode": "A"})
        assert meter.count == 0
        assert meter.energy_type == EnergyType.UNSET


class TestSession:
    def test_round_trip_through_json(self):
        session = _sample_session()
        restored = Session.from_dict(json.loads(json.dumps(session.to_dict())))
        assert restored == session

    def test_to_dict_shape(self):
        data = _sample_session().to_dict()
        assert set(data) == {"companyInfo", "contactInfo", "meters"}
        assert data["companyInfo"]["streetNumber"] == "12a"
        assert data["companyInfo"]["zipCode"] == "20095"
        assert len(data["meters"]) == 2

    def test_is_complete_not_serialized(self):
        session = Session(is_complete=True)
        assert "isComplete" not in session.to_dict()
        assert Session.from_dict(session.to_dict()).is_complete is False

    def test_from_dict_none(self):
        assert Session.from_dict(None) == Session()


def test_user_round_trip():
    user = User(id="1700000000000", name="Neuer Benutzer", email="a@b.de", code="AB12CD34")
    assert User.from_dict(user.to_dict()) == user


def test_energy_type_label():
    assert energy_type_label(EnergyType.WASSER) == "Wasser"
    assert energy_type_label(EnergyType.UNSET) == ""
    assert energy_type_label(None) == ""
