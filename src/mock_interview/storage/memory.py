"""In-memory session store for development and testing."""

import asyncio
from typing import Dict, List, Optional

from mock_interview.core.errors import (
    ConcurrentModificationError,
    SessionAlreadyActiveError,
    SessionNotFoundError,
)
from mock_interview.core.models import Session, SessionStatus, SessionType
from mock_interview.storage.base import SessionStore
from mock_interview.utils.logging import get_logger

logger = get_logger(__name__)

ACTIVE_STATUSES = (SessionStatus.CREATED, SessionStatus.IN_PROGRESS)


class InMemorySessionStore(SessionStore):
    """
    Dictionary-backed :class:`SessionStore`.

    Sessions are deep-copied on the way in and out, so callers never hold a
    reference to stored state. Every operation runs under one lock, which
    gives ``create`` and ``update`` the same atomicity a database would give
    a conditional insert and a versioned update.
    """

    def __init__(self):
        self.logger = logger.bind(component="memory_session_store")
        self._sessions: Dict[str, Session] = {}
        self._lock = asyncio.Lock()

    async def create(self, session: Session) -> Session:
        async with self._lock:
            active = self._find_active(session.user_id)
            if active is not None:
                raise SessionAlreadyActiveError(session.user_id, active.id)

            stored = session.model_copy(deep=True)
            stored.version = 1
            self._sessions[stored.id] = stored

            self.logger.debug("Session stored", session_id=stored.id, user_id=stored.user_id)
            return stored.model_copy(deep=True)

    async def find(self, session_id: str) -> Optional[Session]:
        async with self._lock:
            stored = self._sessions.get(session_id)
            return stored.model_copy(deep=True) if stored else None

    async def update(self, session: Session) -> Session:
        async with self._lock:
            current = self._sessions.get(session.id)
            if current is None:
                raise SessionNotFoundError(session.id)
            if current.version != session.version:
                raise ConcurrentModificationError(session.id, session.version, current.version)

            stored = session.model_copy(deep=True)
            stored.version = current.version + 1
            self._sessions[stored.id] = stored
            return stored.model_copy(deep=True)

    async def find_active(self, user_id: str) -> Optional[Session]:
        async with self._lock:
            active = self._find_active(user_id)
            return active.model_copy(deep=True) if active else None

    async def list_completed(
        self,
        user_id: str,
        session_type: Optional[SessionType] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        newest_first: bool = True,
    ) -> List[Session]:
        async with self._lock:
            sessions = sorted(
                self._completed(user_id, session_type),
                key=lambda s: s.completed_at,
                reverse=newest_first,
            )
            end = offset + limit if limit is not None else None
            return [s.model_copy(deep=True) for s in sessions[offset:end]]

    async def count_completed(self, user_id: str, session_type: Optional[SessionType] = None) -> int:
        async with self._lock:
            return len(self._completed(user_id, session_type))

    def _find_active(self, user_id: str) -> Optional[Session]:
        for session in self._sessions.values():
            if session.user_id == user_id and session.status in ACTIVE_STATUSES:
                return session
        return None

    def _completed(self, user_id: str, session_type: Optional[SessionType]) -> List[Session]:
        return [
            s for s in self._sessions.values()
            if s.user_id == user_id
            and s.status == SessionStatus.COMPLETED
            and (session_type is None or s.session_type == session_type)
        ]
