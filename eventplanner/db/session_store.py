"""Key-value stores for login sessions, with per-key expiry."""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Optional, Tuple

from .db_core import Database
from ..models.session import StoredSession
from ..utils.timezone import ensure_utc, now_utc

logger = logging.getLogger(__name__)


class SessionStore(ABC):
    """
    Base interface for session storage.

    Expired entries must read as absent.
    """

    def __init__(self, clock: Callable[[], datetime] = now_utc):
        self.clock = clock

    @abstractmethod
    def get(self, sid: str) -> Optional[Dict[str, Any]]:
        """Return the session payload, or None if absent or expired."""
        pass

    @abstractmethod
    def set(self, sid: str, data: Dict[str, Any], ttl_seconds: int) -> None:
        """Store the payload under sid, replacing any existing entry."""
        pass

    @abstractmethod
    def delete(self, sid: str) -> None:
        """Remove the entry; removing an absent entry is not an error."""
        pass

    def _expiry(self, ttl_seconds: int) -> datetime:
        return self.clock() + timedelta(seconds=ttl_seconds)


class InMemorySessionStore(SessionStore):
    """Session store backed by a dict. Suitable for tests and single-process runs."""

    def __init__(self, clock: Callable[[], datetime] = now_utc):
        super().__init__(clock)
        self._entries: Dict[str, Tuple[Dict[str, Any], datetime]] = {}

    def get(self, sid: str) -> Optional[Dict[str, Any]]:
        entry = self._entries.get(sid)
        if entry is None:
            return None
        data, expires_at = entry
        if expires_at <= self.clock():
            self._entries.pop(sid, None)
            return None
        return dict(data)

    def set(self, sid: str, data: Dict[str, Any], ttl_seconds: int) -> None:
        self._entries[sid] = (dict(data), self._expiry(ttl_seconds))

    def delete(self, sid: str) -> None:
        self._entries.pop(sid, None)

    def __len__(self) -> int:
        return len(self._entries)


class DatabaseSessionStore(SessionStore):
    """Session store backed by the sessions table."""

    def __init__(self, database: Database, clock: Callable[[], datetime] = now_utc):
        super().__init__(clock)
        self.database = database

    def get(self, sid: str) -> Optional[Dict[str, Any]]:
        with self.database.session() as session:
            stored = session.get(StoredSession, sid)
            if stored is None:
                return None
            if ensure_utc(stored.expires_at) <= self.clock():
                logger.debug(f"Session {sid} expired, removing")
                session.delete(stored)
                return None
            return dict(stored.data or {})

    def set(self, sid: str, data: Dict[str, Any], ttl_seconds: int) -> None:
        with self.database.session() as session:
            session.merge(StoredSession(
                sid=sid,
                data=dict(data),
                expires_at=self._expiry(ttl_seconds),
            ))

    def delete(self, sid: str) -> None:
        with self.database.session() as session:
            session.query(StoredSession).filter(StoredSession.sid == sid).delete()

    def purge_expired(self) -> int:
        """Delete all expired sessions. Returns the number removed."""
        with self.database.session() as session:
            count = session.query(StoredSession).filter(
                StoredSession.expires_at <= self.clock()
            ).delete()
        if count:
            logger.info(f"Purged {count} expired sessions")
        return count
