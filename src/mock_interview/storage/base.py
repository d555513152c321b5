"""Collaborator interfaces consumed by the interview core."""

from abc import ABC, abstractmethod
from typing import List, Optional

from mock_interview.core.models import Difficulty, Question, QuestionCategory, Session, SessionType


class SessionStore(ABC):
    """
    Persistence for interview sessions.

    Implementations must make two writes atomic at the store boundary:
    ``create`` is a conditional insert that refuses a second active session
    for the same user, and ``update`` is a compare-and-swap on
    ``Session.version``.
    """

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """
        Insert a new session.

        Raises:
            SessionAlreadyActiveError: the user already owns a created or
                in-progress session
        """

    @abstractmethod
    async def find(self, session_id: str) -> Optional[Session]:
        pass

    @abstractmethod
    async def update(self, session: Session) -> Session:
        """
        Replace a stored session if its version still matches.

        Returns:
            The stored session with its version incremented

        Raises:
            SessionNotFoundError: no session with that id
            ConcurrentModificationError: the stored version differs from
                ``session.version``
        """

    @abstractmethod
    async def find_active(self, user_id: str) -> Optional[Session]:
        """The user's created or in-progress session, if any."""

    @abstractmethod
    async def list_completed(
        self,
        user_id: str,
        session_type: Optional[SessionType] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        newest_first: bool = True,
    ) -> List[Session]:
        """Completed sessions ordered by completion time."""

    @abstractmethod
    async def count_completed(self, user_id: str, session_type: Optional[SessionType] = None) -> int:
        pass


class QuestionProvider(ABC):
    """Source of candidate questions."""

    @abstractmethod
    async def get_questions(
        self,
        category: Optional[QuestionCategory],
        difficulty: Difficulty,
        count: int,
    ) -> List[Question]:
        """
        Return up to ``count`` questions.

        Args:
            category: Restrict to one category, or ``None`` for a mix
            difficulty: Preferred difficulty
            count: Maximum number of questions
        """
