"""In-memory user repository guarded by a single lock."""

import logging
import threading
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, Optional

from users_api.schemas import User

logger = logging.getLogger(__name__)


class StorePoisonedError(RuntimeError):
    """Raised when the store was left in an unknown state by a failed operation."""


class UsersRepository:
    """
    In-memory user storage keyed by email.

    Every operation holds the lock for its whole duration, so concurrent
    callers observe the operations one at a time. The map and the lock are
    never handed out; callers only get the four operations below.

    If an exception escapes while the lock is held the repository is
    poisoned: the lock is released, and every later operation raises
    StorePoisonedError instead of touching the map.
    """

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._lock = threading.Lock()
        self._last_id = 0
        self._poisoned = False

    @contextmanager
    def _guard(self) -> Iterator[Dict[str, User]]:
        with self._lock:
            if self._poisoned:
                raise StorePoisonedError("User store is poisoned by an earlier failure")
            try:
                yield self._users
            except BaseException as e:
                self._poisoned = True
                logger.critical(f"[UsersRepository] Operation failed while holding the lock, store poisoned: {e!r}")
                raise

    def lookup(self, email: str) -> Optional[User]:
        """Get a user by email."""
        with self._guard() as users:
            return users.get(email)

    def insert_if_absent(self, email: str, builder: Callable[[int], User]) -> Optional[User]:
        """
        Store a new user unless one already exists for ``email``.

        ``builder`` receives the id to assign. Ids come from a counter that
        only moves forward, so an id is never handed out twice, even after
        the record holding it was removed.

        Returns the new user, or None if the email is taken.
        """
        with self._guard() as users:
            if email in users:
                return None
            user = builder(self._last_id + 1)
            users[email] = user
            self._last_id += 1
            return user

    def replace_if_present(self, email: str, updater: Callable[[int, str], User]) -> Optional[User]:
        """
        Replace the user stored under ``email``.

        ``updater`` receives the existing id and email and returns the new value.
        Returns the new user, or None if nothing is stored under ``email``.
        """
        with self._guard() as users:
            existing = users.get(email)
            if existing is None:
                return None
            user = updater(existing.id, existing.email)
            users[email] = user
            return user

    def remove_if_present(self, email: str) -> Optional[User]:
        """Remove and return the user stored under ``email``, if any."""
        with self._guard() as users:
            return users.pop(email, None)

    def count(self) -> int:
        """Number of stored users."""
        with self._guard() as users:
            return len(users)
