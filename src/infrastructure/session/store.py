# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Session storage for the signed-in user.

The session holds the bearer token, the signed-in user and the selected
school id under the keys ``token``, ``user`` and ``schoolId``. Storage is
injected so that services never touch the filesystem directly:

- InMemorySessionStore: per-process storage, used by tests.
- FileSessionStore: JSON file, used by the CLI between invocations.

Example:
    >>> session = Session(InMemorySessionStore())
    >>> session.login("jwt-token", AdminUser(id="u1", email="a@b.c"))
    >>> session.token
    'jwt-token'
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from src.models.user import User, parse_user

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"
SCHOOL_ID_KEY = "schoolId"


class SessionStore(ABC):
    """Key/value storage backing a Session."""

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the stored value or None."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove a key if present."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every key."""


class InMemorySessionStore(SessionStore):
    """Session storage kept in a dictionary."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Any | None:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()


class FileSessionStore(SessionStore):
    """Session storage persisted as a JSON object in a file.

    The file is read on every access and rewritten on every change, so
    concurrent CLI invocations see each other's last write.

    Attributes:
        path: Location of the JSON file.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("Ignoring unreadable session file: %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def get(self, key: str) -> Any | None:
        return self._read().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()


class Session:
    """Typed view over a SessionStore.

    Attributes:
        store: Underlying key/value storage.
    """

    def __init__(self, store: SessionStore) -> None:
        self.store = store

    @property
    def token(self) -> str | None:
        """Bearer token, if signed in."""
        return self.store.get(TOKEN_KEY) or None

    @property
    def user(self) -> User | None:
        """Signed-in user as its role variant, if any."""
        raw = self.store.get(USER_KEY)
        if not raw:
            return None
        try:
            return parse_user(raw)
        except ValidationError:
            logger.warning("Stored session user is invalid, ignoring it")
            return None

    @property
    def school_id(self) -> str | None:
        """Selected school id, if any."""
        return self.store.get(SCHOOL_ID_KEY) or None

    @school_id.setter
    def school_id(self, value: str | None) -> None:
        if value:
            self.store.set(SCHOOL_ID_KEY, value)
        else:
            self.store.remove(SCHOOL_ID_KEY)

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def login(self, token: str, user: User) -> None:
        """Store the credentials returned by a successful login.

        The user's school becomes the selected school when it has one.

        Args:
            token: Bearer token.
            user: Signed-in user.
        """
        self.store.set(TOKEN_KEY, token)
        self.store.set(USER_KEY, user.model_dump(mode="json"))
        if user.school_id:
            self.school_id = user.school_id

    def logout(self) -> None:
        """Forget the token, user and selected school."""
        self.store.clear()
