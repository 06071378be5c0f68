"""SQLite storage for the user and offline session slots."""

from .kv_store import SessionPersistence
from .schema import ensure_schema

__all__ = [
    "SessionPersistence",
    "ensure_schema",
]
