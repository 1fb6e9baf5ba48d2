"""
brikvest/sessions.py

Admin session storage.

RedisSessionStore is used whenever REDIS_URL is configured: entries survive
restarts and are shared by every API instance. MemorySessionStore keeps
entries in process memory for local development and tests.

Both stores hand back the stored AdminSession as-is; the expiry check (and
eviction of the expired entry) happens in brikvest.auth against store.now().
"""

from __future__ import annotations

import json
import logging
import secrets
import threading
from datetime import datetime
from typing import Callable, Dict, Optional

from pydantic import BaseModel

from brikvest.config import REDIS_URL
from brikvest.models import AdminRole, utcnow

logger = logging.getLogger(__name__)

SESSION_KEY_PREFIX = "brikvest:session:"


class AdminSession(BaseModel):
    session_id: str
    user_id: int
    username: str
    role: AdminRole
    expires_at: datetime


def new_session_id() -> str:
    return secrets.token_urlsafe(32)


def mask_session_id(session_id: str) -> str:
    return f"{session_id[:6]}..." if session_id else "<none>"


class SessionStore:
    """Interface shared by the session backends."""

    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self._clock = clock

    def now(self) -> datetime:
        return self._clock()

    def save(self, session: AdminSession) -> None:
        raise NotImplementedError

    def get(self, session_id: str) -> Optional[AdminSession]:
        raise NotImplementedError

    def delete(self, session_id: str) -> None:
        raise NotImplementedError


class MemorySessionStore(SessionStore):
    """Process-local store. Expired entries are dropped lazily."""

    def __init__(self, clock: Callable[[], datetime] = utcnow):
        super().__init__(clock)
        self._sessions: Dict[str, AdminSession] = {}
        self._lock = threading.RLock()

    def _purge_expired(self) -> None:
        # Caller holds the lock
        now = self.now()
        for sid in [sid for sid, s in self._sessions.items() if s.expires_at <= now]:
            self._sessions.pop(sid, None)

    def save(self, session: AdminSession) -> None:
        with self._lock:
            self._purge_expired()
            self._sessions[session.session_id] = session

    def get(self, session_id: str) -> Optional[AdminSession]:
        with self._lock:
            return self._sessions.get(session_id)

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


class RedisSessionStore(SessionStore):
    """Sessions as JSON strings under SESSION_KEY_PREFIX with a matching TTL."""

    def __init__(self, client, clock: Callable[[], datetime] = utcnow):
        super().__init__(clock)
        self._client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisSessionStore":
        import redis

        client = redis.from_url(
            url,
            decode_responses=True,
            socket_timeout=5,
            socket_connect_timeout=5,
            retry_on_timeout=True,
        )
        return cls(client)

    def save(self, session: AdminSession) -> None:
        ttl = max(1, int((session.expires_at - self.now()).total_seconds()))
        self._client.set(SESSION_KEY_PREFIX + session.session_id, session.model_dump_json(), ex=ttl)

    def get(self, session_id: str) -> Optional[AdminSession]:
        raw = self._client.get(SESSION_KEY_PREFIX + session_id)
        if not raw:
            return None
        try:
            return AdminSession.model_validate(json.loads(raw))
        except ValueError:
            logger.warning("[AUTH] Discarding unreadable session %s", mask_session_id(session_id))
            self.delete(session_id)
            return None

    def delete(self, session_id: str) -> None:
        self._client.delete(SESSION_KEY_PREFIX + session_id)


_store: Optional[SessionStore] = None
_store_lock = threading.Lock()


def get_session_store() -> SessionStore:
    """Process-wide session store, created on first use. Also a FastAPI dependency."""
    global _store
    if _store is None:
        with _store_lock:
            if _store is None:
                if REDIS_URL:
                    logger.info("[AUTH] Using Redis session store")
                    _store = RedisSessionStore.from_url(REDIS_URL)
                else:
                    logger.info("[AUTH] Using in-memory session store")
                    _store = MemorySessionStore()
    return _store


def set_session_store(store: Optional[SessionStore]) -> None:
    """Replace the process-wide store (None resets to lazy creation)."""
    global _store
    with _store_lock:
        _store = store
