"""Interview session lifecycle.

The :class:`SessionManager` owns the session state machine::

    created -> in-progress -> completed
                    |
                    +------> abandoned

It keeps no session state between calls. Every write goes through the
store's versioned ``update``; on a version conflict the session is re-read
and the operation re-validated, so the losing writer sees the winner's
changes (for example ``ALREADY_ANSWERED`` for a duplicate submission).
"""

from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar, Union

from mock_interview.config import Settings, settings as default_settings
from mock_interview.core.errors import (
    AlreadyAnsweredError,
    AlreadyCompletedError,
    ConcurrentModificationError,
    InterviewValidationError,
    NoAnswersSubmittedError,
    NoQuestionsAvailableError,
    QuestionNotFoundError,
    SessionNotFoundError,
    SessionNotInProgressError,
)
from mock_interview.core.models import (
    InterviewConfig,
    QuestionCategory,
    Session,
    SessionQuestion,
    SessionSettings,
    SessionStatus,
    SessionType,
    UserAnswer,
    utc_now,
)
from mock_interview.interview.aggregator import ScoreAggregator
from mock_interview.interview.analyzer import AnalysisResult, ResponseAnalyzer
from mock_interview.interview.feedback import FeedbackGenerator, performance_level
from mock_interview.storage.base import QuestionProvider, SessionStore
from mock_interview.utils.logging import get_logger, log_session_state

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_TARGET_ROLE = "software-developer"
ALL_ANSWERED_MESSAGE = "All questions have been answered. Interview is complete."

ACTIVE_STATUSES = (SessionStatus.CREATED, SessionStatus.IN_PROGRESS)

# Question category drawn for each session type; None mixes categories
SESSION_TYPE_CATEGORIES: Dict[SessionType, Optional[QuestionCategory]] = {
    SessionType.TECHNICAL: QuestionCategory.TECHNICAL,
    SessionType.BEHAVIORAL: QuestionCategory.BEHAVIORAL,
    SessionType.CODING: QuestionCategory.CODING,
    SessionType.CASE_STUDY: QuestionCategory.PROBLEM_SOLVING,
    SessionType.HR: QuestionCategory.COMMUNICATION,
    SessionType.MIXED: None,
}


def build_title(target_role: str, session_type: SessionType) -> str:
    """``"software-developer", technical`` -> ``"Software Developer - Technical Interview"``."""
    role = target_role.replace("-", " ").title()
    kind = session_type.value.replace("-", " ").capitalize()
    return f"{role} - {kind} Interview"


class SessionManager:
    """
    Drives interview sessions through their lifecycle.

    Args:
        store: Session persistence
        question_provider: Source of candidate questions
        analyzer: Response analyzer used per answer
        feedback_generator: Builds per-question and session feedback
        aggregator: Score aggregation helpers
        config: Settings; defaults to the global settings
        clock: Returns the current UTC time
    """

    def __init__(
        self,
        store: SessionStore,
        question_provider: QuestionProvider,
        analyzer: Optional[ResponseAnalyzer] = None,
        feedback_generator: Optional[FeedbackGenerator] = None,
        aggregator: Optional[ScoreAggregator] = None,
        config: Optional[Settings] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.logger = logger.bind(component="session_manager")
        self.store = store
        self.question_provider = question_provider
        self.analyzer = analyzer or ResponseAnalyzer()
        self.aggregator = aggregator or ScoreAggregator()
        self.feedback_generator = feedback_generator or FeedbackGenerator(self.analyzer, self.aggregator)
        self.settings = config or default_settings
        self.clock = clock

    # Lifecycle operations

    async def start_interview(
        self,
        user_id: str,
        config: Union[InterviewConfig, Dict[str, Any]],
    ) -> Dict[str, Any]:
        """
        Create a session for ``user_id`` and move it to in-progress.

        Raises:
            InterviewValidationError: invalid user id or configuration
            SessionAlreadyActiveError: the user already has a live session
            NoQuestionsAvailableError: the provider returned no questions
        """
        if not isinstance(user_id, str) or not user_id.strip():
            raise InterviewValidationError("user_id", user_id, message="user_id is required")
        if not isinstance(config, InterviewConfig):
            config = InterviewConfig.from_request(config or {}, self.settings.default_difficulty)

        active = await self.store.find_active(user_id)
        if active is not None and self._is_idle(active):
            await self._expire(active)

        category = config.category
        if category is None:
            category = SESSION_TYPE_CATEGORIES.get(config.session_type)
        count = self._question_count(config.question_count)

        candidates = await self.question_provider.get_questions(category, config.difficulty, count)
        questions = self._build_questions(candidates)[:count]
        if not questions:
            raise NoQuestionsAvailableError(category.value if category else "mixed", config.difficulty.value)

        target_role = config.target_role or DEFAULT_TARGET_ROLE
        time_limit = max(
            config.time_limit or self.settings.default_time_limit_minutes,
            self.settings.min_time_limit_minutes,
        )
        now = self.clock()
        session = Session(
            user_id=user_id,
            session_type=config.session_type,
            difficulty=config.difficulty,
            target_role=target_role,
            title=build_title(target_role, config.session_type),
            questions=questions,
            settings=SessionSettings(time_limit=time_limit, show_hints=config.show_hints),
            created_at=now,
            last_activity_at=now,
        )

        session = await self.store.create(session)
        session.status = SessionStatus.IN_PROGRESS
        session.started_at = now
        session = await self.store.update(session)

        self.logger.info(
            "Interview started",
            user_id=user_id,
            session_type=session.session_type.value,
            difficulty=session.difficulty.value,
            category=category.value if category else "mixed",
            **log_session_state(session),
        )

        return {
            "session_id": session.id,
            "title": session.title,
            "session_type": session.session_type.value,
            "difficulty": session.difficulty.value,
            "target_role": session.target_role,
            "status": session.status.value,
            "questions": [q.metadata(include_tip=session.settings.show_hints) for q in session.questions],
            "settings": session.settings.model_dump(),
            "started_at": session.started_at,
        }

    async def get_next_question(self, session_id: str) -> Dict[str, Any]:
        """First unanswered question and current progress."""
        session = await self._load_live(session_id)
        self._require_in_progress(session)

        question = session.next_question()
        result: Dict[str, Any] = {
            "question": question.metadata(include_tip=session.settings.show_hints) if question else None,
            "progress": session.progress().model_dump(),
            "session_info": {
                "session_id": session.id,
                "title": session.title,
                "status": session.status.value,
                "time_limit": session.settings.time_limit,
            },
        }
        if question is None:
            result["message"] = ALL_ANSWERED_MESSAGE
        return result

    async def submit_answer(
        self,
        session_id: str,
        question_id: str,
        answer: Optional[str],
        time_spent: float = 0,
        audio_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Record and score the answer to one question.

        The first accepted answer is final; later submissions for the same
        question fail with ``ALREADY_ANSWERED``.
        """
        if answer is None:
            answer = ""
        if not isinstance(answer, str):
            raise InterviewValidationError("answer", answer, message="answer must be a string")
        if isinstance(time_spent, bool) or not isinstance(time_spent, (int, float)):
            raise InterviewValidationError("time_spent", time_spent, message="time_spent must be a number")

        text = answer.strip()
        seconds = max(0.0, float(time_spent))

        def record(session: Session) -> Tuple[SessionQuestion, AnalysisResult]:
            self._require_in_progress(session)
            question = session.get_question(question_id)
            if question is None:
                raise QuestionNotFoundError(session.id, question_id)
            if question.is_answered:
                raise AlreadyAnsweredError(session.id, question_id)

            analysis = self.analyzer.analyze(text, question.question, question.category, session.session_type)
            question.user_answer = UserAnswer(text=text, audio_url=audio_url, duration=seconds)
            question.time_spent = seconds
            question.feedback = self.feedback_generator.build_question_feedback(
                analysis, question.category.value
            )
            question.is_answered = True
            session.last_activity_at = self.clock()
            return question, analysis

        session, (question, analysis) = await self._modify(session_id, record, "submit_answer")
        progress = session.progress()

        self.logger.info(
            "Answer submitted",
            question_id=question_id,
            answer_length=len(text),
            time_spent=seconds,
            score=question.feedback.score,
            progress=progress.percentage,
            **log_session_state(session),
        )

        return {
            "session_id": session.id,
            "question_id": question_id,
            "submitted": True,
            "score": question.feedback.score,
            "feedback": question.feedback.model_dump(),
            "insights": list(analysis.insights),
            "progress": progress.model_dump(),
            "next_action": "complete_interview" if progress.answered == progress.total else "continue_interview",
        }

    async def complete_interview(self, session_id: str) -> Dict[str, Any]:
        """
        Score the session and produce its overall feedback.

        Raises:
            AlreadyCompletedError: the session was completed before
            SessionNotInProgressError: the session is in any other state
            NoAnswersSubmittedError: no question has been answered
        """

        def finish(session: Session) -> None:
            if session.status == SessionStatus.COMPLETED:
                raise AlreadyCompletedError(session.id)
            self._require_in_progress(session)
            if not session.answered_questions():
                raise NoAnswersSubmittedError(session.id)

            now = self.clock()
            # Refreshes per-question feedback before the overall score is taken
            feedback = self.feedback_generator.generate_comprehensive_feedback(session)
            session.overall_score = self.aggregator.overall_percentage(session)
            session.feedback = feedback
            session.duration = max(0, int((now - session.created_at).total_seconds()))
            session.status = SessionStatus.COMPLETED
            session.completed_at = now
            session.last_activity_at = now

        session, _ = await self._modify(session_id, finish, "complete_interview")

        self.logger.info(
            "Interview completed",
            overall_score=session.overall_score,
            duration=session.duration,
            **log_session_state(session),
        )

        return {
            "session_id": session.id,
            "overall_score": session.overall_score,
            "performance_level": performance_level(session.overall_score),
            "feedback": session.feedback.model_dump(mode="json"),
            "duration": session.duration,
            "status": session.status.value,
            "completed_at": session.completed_at,
        }

    async def get_session(self, session_id: str) -> Dict[str, Any]:
        """Full snapshot of a session in any state."""
        session = await self._load_live(session_id)

        snapshot = session.model_dump(mode="json")
        snapshot["session_id"] = snapshot.pop("id")
        snapshot["progress"] = session.progress().model_dump()
        return snapshot

    async def abandon_interview(self, session_id: str) -> Dict[str, Any]:
        """Move a live session to ``abandoned``."""

        def abandon(session: Session) -> None:
            if session.status == SessionStatus.COMPLETED:
                raise AlreadyCompletedError(session.id)
            if session.status not in ACTIVE_STATUSES:
                raise SessionNotInProgressError(session.id, session.status.value)
            session.status = SessionStatus.ABANDONED
            session.last_activity_at = self.clock()

        session, _ = await self._modify(session_id, abandon, "abandon_interview")
        self.logger.info("Interview abandoned", reason="user_request", **log_session_state(session))
        return {"session_id": session.id, "status": session.status.value}

    # Internals

    async def _load(self, session_id: str) -> Session:
        session = await self.store.find(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    async def _load_live(self, session_id: str) -> Session:
        """Load a session, abandoning it first if it sat idle too long."""
        session = await self._load(session_id)
        if self._is_idle(session):
            session = await self._expire(session)
        return session

    async def _modify(
        self,
        session_id: str,
        change: Callable[[Session], T],
        operation: str,
    ) -> Tuple[Session, T]:
        """
        Apply ``change`` to a fresh copy of the session and write it back.

        ``change`` validates and mutates the session; it is re-run against a
        re-read copy whenever the versioned write loses a race.
        """
        attempts = max(0, self.settings.max_retries) + 1
        for attempt in range(1, attempts + 1):
            session = await self._load_live(session_id)
            result = change(session)
            try:
                stored = await self.store.update(session)
            except ConcurrentModificationError:
                if attempt == attempts:
                    self.logger.error(
                        "Giving up after concurrent modifications",
                        operation=operation,
                        session_id=session_id,
                        attempts=attempts,
                    )
                    raise
                self.logger.warning(
                    "Concurrent modification, retrying",
                    operation=operation,
                    session_id=session_id,
                    attempt=attempt,
                )
                continue
            return stored, result

    def _is_idle(self, session: Session) -> bool:
        if session.status not in ACTIVE_STATUSES:
            return False
        idle_for = self.clock() - session.last_activity_at
        return idle_for > timedelta(minutes=self.settings.session_idle_timeout_minutes)

    async def _expire(self, session: Session) -> Session:
        """
        Abandon an idle session.

        When another writer touched the session in the meantime, the fresh
        copy is returned unchanged if it is no longer idle.
        """
        attempts = max(0, self.settings.max_retries) + 1
        for attempt in range(1, attempts + 1):
            session.status = SessionStatus.ABANDONED
            try:
                expired = await self.store.update(session)
            except ConcurrentModificationError:
                if attempt == attempts:
                    raise
                session = await self._load(session.id)
                if not self._is_idle(session):
                    return session
                continue
            self.logger.info(
                "Interview abandoned",
                reason="idle_timeout",
                idle_timeout_minutes=self.settings.session_idle_timeout_minutes,
                **log_session_state(expired),
            )
            return expired

    def _require_in_progress(self, session: Session) -> None:
        if session.status != SessionStatus.IN_PROGRESS:
            raise SessionNotInProgressError(session.id, session.status.value)

    def _question_count(self, requested: Optional[int]) -> int:
        count = requested or self.settings.default_question_count
        return min(max(count, self.settings.min_question_count), self.settings.max_question_count)

    @staticmethod
    def _build_questions(candidates) -> List[SessionQuestion]:
        seen = set()
        questions = []
        for candidate in candidates:
            if candidate.question_id in seen:
                continue
            seen.add(candidate.question_id)
            questions.append(SessionQuestion.from_question(candidate))
        return questions
