"""Chat-completion endpoint that formats sessions for a spreadsheet."""

from __future__ import annotations

import json
import logging
from typing import Any

import aiohttp

from ..const import DEFAULT_API_URL, DEFAULT_MODEL, DEFAULT_SYSTEM_PROMPT
from ..exceptions import FormatterConnectionError, FormatterDataError
from . import SessionFormatter

_LOGGER = logging.getLogger(__name__)


class ChatFormatter(SessionFormatter):
    """POST the session as the user message of a chat-completion request.

    The endpoint answers with ``{"response": "<formatted text>"}``.
    """

    def __init__(
        self,
        url: str = DEFAULT_API_URL,
        model: str = DEFAULT_MODEL,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        api_key: str = "",
        websession: aiohttp.ClientSession | None = None,
    ) -> None:
        self._url = url
        self._model = model
        self._system_prompt = system_prompt
        self._api_key = api_key
        self._websession = websession
        self._own_session = websession is None

    async def _ensure_session(self) -> None:
        if self._websession is None:
            self._websession = aiohttp.ClientSession()
            self._own_session = True

    async def close(self) -> None:
        if self._own_session and self._websession:
            await self._websession.close()
            self._websession = None

    def build_request(self, payload: dict[str, Any]) -> dict[str, Any]:
        return {
            "messages": [
                {"role": "system", "content": self._system_prompt},
                {"role": "user", "content": json.dumps(payload, ensure_ascii=False)},
            ],
            "model": self._model,
        }

    async def format_session(self, payload: dict[str, Any]) -> str:
        await self._ensure_session()
        assert self._websession is not None

        headers = {}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"

        try:
            async with self._websession.post(
                self._url, json=self.build_request(payload), headers=headers
            ) as response:
                response.raise_for_status()
                data = await response.json()
        except aiohttp.ClientError as err:
            raise FormatterConnectionError(
                f"Formatierungsdienst nicht erreichbar: {err}"
            ) from err
        except ValueError as err:
            raise FormatterDataError(f"Ungültige Antwort: {err}") from err
        finally:
            if self._own_session:
                await self.close()

        if not isinstance(data, dict) or not isinstance(data.get("response"), str):
            raise FormatterDataError("Antwort enthält kein 'response'-Feld")

        formatted = data["response"]
        _LOGGER.debug("Formatted data for spreadsheet: %s", formatted)
        return formatted
