from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

from chatbot.models.session import Session

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionStore:
    """In-memory bearer token registry.

    Sessions live until revoked. Passing a ``ttl`` turns on expiry: expired
    tokens stop resolving immediately and are dropped by ``purge_expired``.
    """

    def __init__(self, ttl: Optional[timedelta] = None, clock: Callable[[], datetime] = _utcnow) -> None:
        self._ttl = ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._sessions: Dict[str, Session] = {}

    @property
    def ttl(self) -> Optional[timedelta]:
        return self._ttl

    def _is_expired(self, session: Session, now: datetime) -> bool:
        return self._ttl is not None and now - session.created_at >= self._ttl

    def issue(self, user_id: int) -> str:
        # uuid4 draws from os.urandom
        token = str(uuid.uuid4())
        with self._lock:
            self._sessions[token] = Session(token=token, user_id=user_id, created_at=self._clock())
        return token

    def resolve(self, token: Optional[str]) -> Optional[int]:
        if not token:
            return None
        with self._lock:
            session = self._sessions.get(token)
        if session is None or self._is_expired(session, self._clock()):
            return None
        return session.user_id

    def revoke(self, token: Optional[str]) -> None:
        if not token:
            return
        with self._lock:
            self._sessions.pop(token, None)

    def purge_expired(self) -> int:
        """Drop expired sessions and return how many were removed."""
        if self._ttl is None:
            return 0
        now = self._clock()
        with self._lock:
            expired = [token for token, session in self._sessions.items() if self._is_expired(session, now)]
            for token in expired:
                del self._sessions[token]
        if expired:
            logger.info(f"Purged {len(expired)} expired sessions")
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
