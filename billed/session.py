from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

import pydantic

from billed.models.user import UserSession

logger = logging.getLogger(__name__)

USER_KEY = "user"
TOKEN_KEY = "jwt"


class SessionError(Exception):
    """The session holds no usable user record."""


class KeyValueSession(ABC):
    @abstractmethod
    def get_item(self, key: str) -> str | None: ...

    @abstractmethod
    def set_item(self, key: str, value: str) -> None: ...

    @abstractmethod
    def remove_item(self, key: str) -> None: ...


class MemorySession(KeyValueSession):
    def __init__(self, items: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileSession(KeyValueSession):
    """Key-value session persisted as a JSON object, surviving restarts."""

    def __init__(self, path: str) -> None:
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Session file %s is corrupt, ignoring it", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, items: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(items), encoding="utf-8")

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read()
        items[key] = value
        self._write(items)
        logger.debug("Session key %s written to %s", key, self.path)

    def remove_item(self, key: str) -> None:
        items = self._read()
        if items.pop(key, None) is not None:
            self._write(items)


def load_user(session: KeyValueSession) -> UserSession:
    raw = session.get_item(USER_KEY)
    if not raw:
        raise SessionError("No user is logged in")
    try:
        user = UserSession.model_validate_json(raw)
    except pydantic.ValidationError as exc:
        raise SessionError("Malformed user record in session") from exc
    logger.debug("Loaded session user type=%s", user.type.value)
    return user


def save_user(session: KeyValueSession, user: UserSession) -> None:
    session.set_item(USER_KEY, user.model_dump_json())
    logger.info("Session opened for %s (%s)", user.email, user.type.value)
