"""In-memory registry of review sessions.

Sessions idle for longer than ``ttl_seconds`` are dropped, and once
``max_sessions`` are held the least recently used one makes room for a new one.
"""

import logging
import time
import uuid
from collections import OrderedDict
from typing import Callable

from services.errors import SessionNotFoundError
from services.gemini_client import GeminiGateway
from services.session import ReviewSession

logger = logging.getLogger(__name__)


def make_session_id() -> str:
    return f"ses_{uuid.uuid4().hex[:12]}"


class SessionStore:
    def __init__(
        self,
        retain_results_on_failed_reanalysis: bool = True,
        ttl_seconds: float = 3600,
        max_sessions: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._sessions: dict[str, ReviewSession] = {}
        # session id -> last access time, least recently used first
        self._last_seen: OrderedDict[str, float] = OrderedDict()
        self._retain_on_failure = retain_results_on_failed_reanalysis
        self._ttl = ttl_seconds
        self._max_sessions = max_sessions
        self._clock = clock

    def _is_expired(self, session_id: str) -> bool:
        return self._clock() - self._last_seen[session_id] > self._ttl

    def _touch(self, session_id: str) -> None:
        self._last_seen[session_id] = self._clock()
        self._last_seen.move_to_end(session_id)

    def _drop(self, session_id: str) -> None:
        del self._sessions[session_id]
        del self._last_seen[session_id]

    def evict_expired(self) -> int:
        """Remove every idle session past its TTL; return how many went."""
        expired = [sid for sid in self._last_seen if self._is_expired(sid)]
        for sid in expired:
            self._drop(sid)
        if expired:
            logger.info("Expired %d idle sessions", len(expired))
        return len(expired)

    def create(self, gateway: GeminiGateway) -> ReviewSession:
        self.evict_expired()
        while len(self._sessions) >= self._max_sessions:
            oldest = next(iter(self._last_seen))
            logger.warning("Session limit (%d) reached, evicting %s", self._max_sessions, oldest)
            self._drop(oldest)

        session = ReviewSession(
            make_session_id(),
            gateway,
            retain_results_on_failed_reanalysis=self._retain_on_failure,
        )
        self._sessions[session.session_id] = session
        self._touch(session.session_id)
        logger.info("Created session %s", session.session_id)
        return session

    def get(self, session_id: str) -> ReviewSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        if self._is_expired(session_id):
            self._drop(session_id)
            logger.info("Session %s expired", session_id)
            raise SessionNotFoundError(session_id)
        self._touch(session_id)
        return session

    def delete(self, session_id: str) -> None:
        if session_id not in self._sessions:
            raise SessionNotFoundError(session_id)
        self._drop(session_id)
        logger.info("Deleted session %s", session_id)

    def __len__(self) -> int:
        return len(self._sessions)
