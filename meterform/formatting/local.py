"""Offline formatter that renders the session as indented JSON."""

from __future__ import annotations

import json
from typing import Any

from . import SessionFormatter


class LocalFormatter(SessionFormatter):
    """Format without any network access, for development."""

    async def format_session(self, payload: dict[str, Any]) -> str:
        return json.dumps(payload, ensure_ascii=False, indent=2)
