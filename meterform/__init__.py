"""Field capture of utility-meter readings with offline fallback."""

from .app import Alert, MeterFormApp, create_app
from .config import MeterFormConfig, load_config
from .db import SessionPersistence
from .exceptions import (
    CaptureError,
    DeliveryFailedError,
    FormatterConnectionError,
    FormatterDataError,
    FormatterError,
    IncompleteSessionError,
    MeterFormError,
    MissingSignatureError,
    PermissionDeniedError,
)
from .models import CompanyInfo, ContactInfo, EnergyType, MeterReading, Session, User
from .store import MeterRecordStore
from .submission import SubmissionCoordinator, SubmissionResult

__all__ = [
    "Alert",
    "MeterFormApp",
    "create_app",
    "MeterFormConfig",
    "load_config",
    "SessionPersistence",
    "MeterRecordStore",
    "SubmissionCoordinator",
    "SubmissionResult",
    "CompanyInfo",
    "ContactInfo",
    "EnergyType",
    "MeterReading",
    "Session",
    "User",
    "MeterFormError",
    "PermissionDeniedError",
    "CaptureError",
    "IncompleteSessionError",
    "MissingSignatureError",
    "DeliveryFailedError",
    "FormatterError",
    "FormatterConnectionError",
    "FormatterDataError",
]
