"""User directory: numeric user id -> display name."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Dict

from runlog.core.persistence import (
    PersistenceError,
    ensure_document,
    read_document,
    write_document,
)

logger = logging.getLogger(__name__)

ROOT_KEY = "users"


class UserDirectoryError(RuntimeError):
    """Base class for user directory failures."""


class UserExistsError(UserDirectoryError):
    """Raised when registering an id that is already present."""


class UserNotFoundError(UserDirectoryError):
    """Raised when resolving an unknown id."""


class UserDirectory:
    """Register-once map of user ids to display names, persisted write-through."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._lock = threading.Lock()
        self._users: Dict[int, str] = {}
        self.reload()

    def reload(self) -> None:
        with self._lock:
            ensure_document(self.path, ROOT_KEY)
            raw = read_document(self.path, ROOT_KEY)
            try:
                self._users = {int(key): str(value) for key, value in raw.items()}
            except ValueError as exc:
                raise PersistenceError(f"Malformed user data in {self.path}: {exc}") from exc

    def register(self, user_id: int, display_name: str) -> None:
        """Add a user; an existing id is never overwritten."""
        name = display_name.strip()
        if not name:
            raise ValueError("Display name must not be empty")

        with self._lock:
            if user_id in self._users:
                logger.warning("User already exists: %s", user_id)
                raise UserExistsError(f"User already exists: {user_id}")
            updated = dict(self._users)
            updated[user_id] = name
            write_document(self.path, ROOT_KEY, {str(k): v for k, v in updated.items()})
            self._users = updated
        logger.info("Registered user %s as %r", user_id, name)

    def resolve(self, user_id: int) -> str:
        with self._lock:
            name = self._users.get(user_id)
        if name is None:
            raise UserNotFoundError(f"User not found: {user_id}")
        return name

    def is_authorized(self, user_id: int) -> bool:
        """True iff the id has been registered."""
        with self._lock:
            known = user_id in self._users
        if not known:
            logger.warning("User not authorized: %s", user_id)
        return known

    def list_users(self) -> Dict[int, str]:
        with self._lock:
            return dict(self._users)
