"""Local user registration with a generated user code."""

from __future__ import annotations

import logging
import secrets
import string
import time

from .const import DEFAULT_USER_EMAIL, DEFAULT_USER_NAME, USER_CODE_LENGTH, USER_KEY
from .db import SessionPersistence
from .models import User

logger = logging.getLogger(__name__)

_CODE_ALPHABET = string.digits + string.ascii_uppercase


def generate_user_code(length: int = USER_CODE_LENGTH) -> str:
    """Return a random uppercase base-36 code."""
    return "".join(secrets.choice(_CODE_ALPHABET) for _ in range(length))


class UserRegistry:
    """Keeps the single active user in the ``"user"`` slot."""

    def __init__(self, persistence: SessionPersistence) -> None:
        self._persistence = persistence
        self._current: User | None = None

    @property
    def current(self) -> User | None:
        return self._current

    def load(self) -> User | None:
        data = self._persistence.load(USER_KEY)
        self._current = User.from_dict(data) if data else None
        return self._current

    def register(
        self, name: str = DEFAULT_USER_NAME, email: str = DEFAULT_USER_EMAIL
    ) -> User:
        """Create a new user, replacing any stored one."""
        user = User(
            id=str(int(time.time() * 1000)),
            name=name,
            email=email,
            code=generate_user_code(),
        )
        self._persistence.save(USER_KEY, user.to_dict())
        self._current = user
        logger.info("Registered user %s (code %s)", user.id, user.code)
        return user

    def logout(self) -> None:
        self._persistence.clear(USER_KEY)
        self._current = None
        logger.info("User logged out")
