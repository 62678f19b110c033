"""Server-side session records: created at login, revoked at logout, expired after a TTL."""

import secrets
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta


@dataclass(frozen=True)
class SessionRecord:
    session_id: str
    user_id: int
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or datetime.now(UTC)) >= self.expires_at


class SessionStore(ABC):
    """Storage for session records. The app holds one instance on app.state.session_store."""

    @abstractmethod
    def create(self, user_id: int) -> SessionRecord: ...

    @abstractmethod
    def get(self, session_id: str) -> SessionRecord | None: ...

    @abstractmethod
    def revoke(self, session_id: str) -> bool: ...

    @abstractmethod
    def revoke_user(self, user_id: int) -> int: ...


class InMemorySessionStore(SessionStore):
    """
    Process-local session store guarded by a lock (sync routes run in a thread pool).

    Expired records are dropped lazily when looked up and on every create.
    """

    def __init__(self, ttl: timedelta) -> None:
        self._ttl = ttl
        self._records: dict[str, SessionRecord] = {}
        self._lock = threading.Lock()

    def create(self, user_id: int) -> SessionRecord:
        now = datetime.now(UTC)
        record = SessionRecord(
            session_id=secrets.token_urlsafe(32),
            user_id=user_id,
            created_at=now,
            expires_at=now + self._ttl,
        )
        with self._lock:
            self._purge_expired(now)
            self._records[record.session_id] = record
        return record

    def get(self, session_id: str) -> SessionRecord | None:
        with self._lock:
            record = self._records.get(session_id)
            if record is None:
                return None
            if record.is_expired():
                del self._records[session_id]
                return None
            return record

    def revoke(self, session_id: str) -> bool:
        with self._lock:
            return self._records.pop(session_id, None) is not None

    def revoke_user(self, user_id: int) -> int:
        """Drop every session of user_id (used when the account is deleted)."""
        with self._lock:
            doomed = [sid for sid, r in self._records.items() if r.user_id == user_id]
            for sid in doomed:
                del self._records[sid]
            return len(doomed)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _purge_expired(self, now: datetime) -> None:
        expired = [sid for sid, r in self._records.items() if r.is_expired(now)]
        for sid in expired:
            del self._records[sid]
