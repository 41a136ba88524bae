# path: skate-spot-api/app/services/session_store.py

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Optional
import logging
import threading
import time
import uuid

from app.config import get_settings
from app.services.discovery import DiscoverySession

logger = logging.getLogger(__name__)


class SessionNotFoundError(Exception):
    """No live session with that id (never created, closed, or expired)."""


@dataclass
class SessionEntry:
    session: DiscoverySession
    last_accessed: float


class SessionStore:
    """
    In-memory sessions keyed by UUID. Nothing is persisted.

    Sessions idle for longer than `ttl_seconds` expire. When the store is
    full, expired sessions are purged first and then the least recently
    used session is evicted, so a new session is always accepted.
    """

    def __init__(
        self,
        max_sessions: int = 1000,
        ttl_seconds: Optional[float] = 3600,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_sessions = max_sessions
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._sessions: OrderedDict[str, SessionEntry] = OrderedDict()
        self._lock = threading.RLock()
        self._evictions = 0
        self._expirations = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    @property
    def stats(self) -> dict:
        with self._lock:
            return {
                "live": len(self._sessions),
                "max_sessions": self.max_sessions,
                "evictions": self._evictions,
                "expirations": self._expirations,
            }

    def _is_expired(self, entry: SessionEntry, now: float) -> bool:
        return self.ttl_seconds is not None and now - entry.last_accessed > self.ttl_seconds

    def _purge_expired(self, now: float) -> None:
        # Entries are kept in access order, so expired ones sit at the front.
        while self._sessions:
            session_id, entry = next(iter(self._sessions.items()))
            if not self._is_expired(entry, now):
                break
            del self._sessions[session_id]
            self._expirations += 1
            logger.info("Expired idle session %s", session_id)

    def create(self, session: DiscoverySession) -> str:
        with self._lock:
            now = self._clock()
            self._purge_expired(now)
            while self._sessions and len(self._sessions) >= self.max_sessions:
                evicted_id, _ = self._sessions.popitem(last=False)
                self._evictions += 1
                logger.warning("Session store full; evicted least recently used session %s", evicted_id)
            session_id = str(uuid.uuid4())
            self._sessions[session_id] = SessionEntry(session=session, last_accessed=now)
            live = len(self._sessions)
        logger.info("Opened session %s (%d live)", session_id, live)
        return session_id

    def get(self, session_id: str) -> DiscoverySession:
        with self._lock:
            entry = self._sessions.get(session_id)
            if entry is None:
                raise SessionNotFoundError(session_id)
            now = self._clock()
            if self._is_expired(entry, now):
                del self._sessions[session_id]
                self._expirations += 1
                logger.info("Expired idle session %s", session_id)
                raise SessionNotFoundError(session_id)
            entry.last_accessed = now
            self._sessions.move_to_end(session_id)
            return entry.session

    def delete(self, session_id: str) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise SessionNotFoundError(session_id)
        logger.info("Closed session %s", session_id)


@lru_cache()
def get_store() -> SessionStore:
    settings = get_settings()
    return SessionStore(max_sessions=settings.max_sessions, ttl_seconds=settings.session_ttl_seconds)
