"""
Server-side session store.

The signed session cookie only carries an opaque session id. The user
snapshot taken at login lives in this process and is dropped on logout or
once it is older than the cookie lifetime. The snapshot is not refreshed when
the underlying `users` row changes; it stays as it was at login until the
session ends.
"""

import secrets
import threading
import time
from typing import Callable, Dict, Optional, Tuple

from CondoManager.constants import SESSION_MAX_AGE

SESSION_KEY = "sid"


def user_snapshot(user) -> Dict[str, object]:
    """Copy the fields of a `User` row that the session keeps."""
    return {
        "user_id": user.user_id,
        "username": user.username,
        "email": user.email,
    }


class SessionStore:
    """
    In-process mapping of session id to user snapshot.

    Entries older than `max_age` seconds are evicted whenever a session is
    created or looked up.
    """

    def __init__(self, max_age: int = SESSION_MAX_AGE, clock: Callable[[], float] = time.monotonic):
        self.max_age = max_age
        self._clock = clock
        self._sessions: Dict[str, Tuple[float, Dict[str, object]]] = {}
        self._lock = threading.Lock()

    def _evict_expired(self, now: float) -> None:
        # Caller holds the lock
        expired = [sid for sid, (created, _) in self._sessions.items() if now - created >= self.max_age]
        for sid in expired:
            del self._sessions[sid]

    def create(self, user: Dict[str, object]) -> str:
        sid = secrets.token_urlsafe(32)
        with self._lock:
            now = self._clock()
            self._evict_expired(now)
            self._sessions[sid] = (now, dict(user))
        return sid

    def get(self, sid: Optional[str]) -> Optional[Dict[str, object]]:
        if not sid:
            return None
        with self._lock:
            self._evict_expired(self._clock())
            entry = self._sessions.get(sid)
        return dict(entry[1]) if entry else None

    def destroy(self, sid: Optional[str]) -> None:
        if not sid:
            return
        with self._lock:
            self._sessions.pop(sid, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


session_store = SessionStore()
