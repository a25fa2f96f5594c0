import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional


class UserLockedError(Exception):
    """Raised when a user already holds a lock."""

    def __init__(self, lock: Dict[str, Any]):
        super().__init__(lock.get("message", "User is busy with another action."))
        self.lock = lock


class LockHelper:
    """
    In-memory per-user locks. A check-in holds the user's lock from reading the occupied
    slots until the new element is saved, so two check-ins can never pick slots from the same snapshot.
    """

    CHECKIN = "checkin"
    MOVE = "move"

    def __init__(self):
        self._locks: Dict[int, Dict[str, Any]] = {}

    def get_user_lock(self, user_id: int) -> Optional[Dict[str, Any]]:
        return self._locks.get(user_id)

    def add_lock(self, user_id: int, lock_type: str, message: str) -> bool:
        """Locks a user. Returns False, leaving the existing lock untouched, if already locked."""

        if user_id in self._locks:
            return False

        self._locks[user_id] = {
            "user_id": user_id,
            "type": lock_type,
            "message": message,
            "timestamp": time.time(),
        }
        return True

    def remove_lock_for_user(self, user_id: int):
        self._locks.pop(user_id, None)

    @contextmanager
    def hold(self, user_id: int, lock_type: str, message: str) -> Iterator[Dict[str, Any]]:
        """Holds the user's lock for the duration of the block; raises UserLockedError if taken."""

        if not self.add_lock(user_id, lock_type, message):
            raise UserLockedError(self._locks[user_id])

        try:
            yield self._locks[user_id]
        finally:
            self.remove_lock_for_user(user_id)

    def clear_all_locks(self):
        """Removes all active locks. To be used on cog unload."""
        self._locks.clear()
