"""Service facade exposing the interview operations to a calling layer."""

import math
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Union

from mock_interview.config import Settings, settings as default_settings
from mock_interview.core.errors import InterviewValidationError
from mock_interview.core.models import InterviewConfig, SessionType, parse_enum, utc_now
from mock_interview.interview.recommendations import RecommendationEngine
from mock_interview.interview.session import SessionManager
from mock_interview.interview.tracking import ImprovementTracker
from mock_interview.storage.base import QuestionProvider, SessionStore
from mock_interview.storage.memory import InMemorySessionStore
from mock_interview.storage.questions import StaticQuestionProvider
from mock_interview.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_HISTORY_LIMIT = 20


def _positive_int(field: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InterviewValidationError(field, value, message=f"{field} must be a positive integer")
    return value


class InterviewService:
    """
    Entry point for mock interview practice.

    Wires a :class:`SessionManager`, :class:`ImprovementTracker` and
    :class:`RecommendationEngine` around one session store. Without explicit
    collaborators the in-memory store and the built-in question bank are used.
    """

    def __init__(
        self,
        store: Optional[SessionStore] = None,
        question_provider: Optional[QuestionProvider] = None,
        config: Optional[Settings] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.logger = logger.bind(component="interview_service")
        self.settings = config or default_settings
        self.store = store or InMemorySessionStore()
        self.question_provider = question_provider or StaticQuestionProvider()

        self.sessions = SessionManager(
            self.store,
            self.question_provider,
            config=self.settings,
            clock=clock,
        )
        self.tracker = ImprovementTracker(self.store, self.settings)
        self.recommender = RecommendationEngine(self.store, self.settings)

    # Session lifecycle

    async def start_interview(
        self,
        user_id: str,
        config: Union[InterviewConfig, Dict[str, Any]],
    ) -> Dict[str, Any]:
        return await self.sessions.start_interview(user_id, config)

    async def get_next_question(self, session_id: str) -> Dict[str, Any]:
        return await self.sessions.get_next_question(session_id)

    async def submit_answer(
        self,
        session_id: str,
        question_id: str,
        answer: Optional[str],
        time_spent: float = 0,
        audio_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        return await self.sessions.submit_answer(session_id, question_id, answer, time_spent, audio_url)

    async def complete_interview(self, session_id: str) -> Dict[str, Any]:
        return await self.sessions.complete_interview(session_id)

    async def get_interview_session(self, session_id: str) -> Dict[str, Any]:
        return await self.sessions.get_session(session_id)

    async def abandon_interview(self, session_id: str) -> Dict[str, Any]:
        return await self.sessions.abandon_interview(session_id)

    # History and analytics

    async def get_interview_history(
        self,
        user_id: str,
        limit: int = DEFAULT_HISTORY_LIMIT,
        page: int = 1,
        session_type: Optional[Union[SessionType, str]] = None,
    ) -> Dict[str, Any]:
        """
        Page through a user's completed sessions, newest first.

        ``limit`` is capped at ``settings.history_page_limit``.
        """
        limit = min(_positive_int("limit", limit), self.settings.history_page_limit)
        page = _positive_int("page", page)
        if session_type is not None:
            session_type = parse_enum(SessionType, session_type, "session_type")

        total = await self.store.count_completed(user_id, session_type)
        offset = (page - 1) * limit
        sessions = await self.store.list_completed(
            user_id,
            session_type=session_type,
            limit=limit,
            offset=offset,
            newest_first=True,
        )

        self.logger.debug(
            "History listed",
            user_id=user_id,
            page=page,
            limit=limit,
            returned=len(sessions),
            total=total,
        )

        return {
            "sessions": [s.summary() for s in sessions],
            "pagination": {
                "total": total,
                "limit": limit,
                "page": page,
                "pages": math.ceil(total / limit) if total else 0,
                "has_more": total > offset + len(sessions),
            },
        }

    async def get_interview_stats(self, user_id: str) -> Dict[str, Any]:
        return await self.tracker.get_interview_stats(user_id)

    async def track_improvement(
        self,
        user_id: str,
        session_type: Optional[Union[SessionType, str]] = None,
    ) -> Dict[str, Any]:
        return await self.tracker.track_improvement(user_id, session_type)

    async def get_personalized_recommendations(self, user_id: str) -> Dict[str, Any]:
        return await self.recommender.get_personalized_recommendations(user_id)
