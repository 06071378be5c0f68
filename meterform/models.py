"""Data models for meter sessions and users.

The dict representations use the camelCase keys of the stored and
transmitted JSON blobs, so that blobs written by earlier versions keep
loading. Missing keys fall back to defaults and unknown keys are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EnergyType(str, Enum):
    """Kind of energy a meter measures."""

    UNSET = ""
    STROM = "Strom"
    WAERME = "Wärme"
    WASSER = "Wasser"


def energy_type_label(value: EnergyType | str | None) -> str:
    """Return the plain text of an energy type value."""
    if isinstance(value, EnergyType):
        return value.value
    return value or ""


def _parse_energy_type(value: Any) -> EnergyType | str:
    try:
        return EnergyType(value or "")
    except ValueError:
        # Free text is kept as entered
        return str(value)


@dataclass
class CompanyInfo:
    name: str = ""
    street: str = ""
    street_number: str = ""
    zip_code: str = ""
    city: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "street": self.street,
            "streetNumber": self.street_number,
            "zipCode": self.zip_code,
            "city": self.city,
        }

    @classmethod
    def from_dict(cls, data: dict | None) -> CompanyInfo:
        data = data or {}
        return cls(
            name=data.get("name", ""),
            street=data.get("street", ""),
            street_number=data.get("streetNumber", ""),
            zip_code=data.get("zipCode", ""),
            city=data.get("city", ""),
        )


@dataclass
class ContactInfo:
    name: str = ""
    email: str = ""
    phone: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "email": self.email, "phone": self.phone}

    @classmethod
    def from_dict(cls, data: dict | None) -> ContactInfo:
        data = data or {}
        return cls(
            name=data.get("name", ""),
            email=data.get("email", ""),
            phone=data.get("phone", ""),
        )


@dataclass
class MeterReading:
    """One captured meter.

    ``location`` is ``"lat, long"`` text and ``timestamp`` an ISO-8601
    string; both are set together when the position is captured.
    """

    count: int = 0
    location: str | None = None
    timestamp: str | None = None
    meter_photo: str | None = None
    distance_photo: str | None = None
    scanned_code: str | None = None
    energy_type: EnergyType | str = EnergyType.UNSET

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "location": self.location,
            "timestamp": self.timestamp,
            "meterPhoto": self.meter_photo,
            "distancePhoto": self.distance_photo,
            "scannedCode": self.scanned_code,
            "energyType": energy_type_label(self.energy_type),
        }

    @classmethod
    def from_dict(cls, data: dict | None) -> MeterReading:
        data = data or {}
        return cls(
            count=data.get("count", 0),
            location=data.get("location"),
            timestamp=data.get("timestamp"),
            meter_photo=data.get("meterPhoto"),
            distance_photo=data.get("distancePhoto"),
            scanned_code=data.get("scannedCode"),
            energy_type=_parse_energy_type(data.get("energyType")),
        )


@dataclass
class Session:
    """All data collected for one submission.

    ``is_complete`` is the operator's confirmation that every meter was
    captured. It is part of the in-memory state only and is never
    serialized.
    """

    company_info: CompanyInfo = field(default_factory=CompanyInfo)
    contact_info: ContactInfo = field(default_factory=ContactInfo)
    meters: list[MeterReading] = field(default_factory=list)
    is_complete: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "companyInfo": self.company_info.to_dict(),
            "contactInfo": self.contact_info.to_dict(),
            "meters": [m.to_dict() for m in self.meters],
        }

    @classmethod
    def from_dict(cls, data: dict | None) -> Session:
        data = data or {}
        return cls(
            company_info=CompanyInfo.from_dict(data.get("companyInfo")),
            contact_info=ContactInfo.from_dict(data.get("contactInfo")),
            meters=[MeterReading.from_dict(m) for m in data.get("meters") or []],
        )


@dataclass
class User:
    id: str
    name: str
    email: str
    code: str

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "code": self.code,
        }

    @classmethod
    def from_dict(cls, data: dict) -> User:
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name", ""),
            email=data.get("email", ""),
            code=data.get("code", ""),
        )
