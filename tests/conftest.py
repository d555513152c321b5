"""Shared fixtures for the mock interview tests."""

from datetime import datetime, timedelta, timezone
from typing import List, Optional

import pytest

from mock_interview.config import Settings
from mock_interview.core.models import (
    DimensionFeedback,
    ImprovementArea,
    OverallFeedback,
    Question,
    QuestionCategory,
    Session,
    SessionStatus,
    SessionType,
)
from mock_interview.storage.base import QuestionProvider
from mock_interview.storage.memory import InMemorySessionStore

BASE_TIME = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, now: datetime = BASE_TIME):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FixedQuestionProvider(QuestionProvider):
    """Returns a fixed question list and records every request."""

    def __init__(self, questions: List[Question]):
        self.questions = questions
        self.calls = []

    async def get_questions(self, category, difficulty, count):
        self.calls.append((category, difficulty, count))
        return self.questions[:count]


def make_questions(count: int = 3, category: QuestionCategory = QuestionCategory.TECHNICAL) -> List[Question]:
    return [
        Question(
            question_id=f"q{i + 1}",
            question=f"Explain the trade-offs of approach number {i + 1} for scaling a web service.",
            category=category,
        )
        for i in range(count)
    ]


def make_feedback(improvement_areas: Optional[List[ImprovementArea]] = None) -> OverallFeedback:
    dimension = DimensionFeedback(score=6, feedback="Good")
    return OverallFeedback(
        communication=dimension,
        technical_accuracy=DimensionFeedback(score=7, feedback="Good"),
        confidence=DimensionFeedback(score=5, feedback="Moderate"),
        problem_solving=dimension,
        overall="You scored 60% in this behavioral interview",
        improvement_areas=improvement_areas or [],
    )


@pytest.fixture
def test_settings():
    return Settings(
        max_retries=3,
        session_idle_timeout_minutes=120,
        history_page_limit=50,
        improvement_window=20,
        recommendation_window=5,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return InMemorySessionStore()


@pytest.fixture
def completed_session_factory(store):
    """Insert completed sessions directly into the store."""

    async def create(
        user_id: str = "user-1",
        score: int = 70,
        completed_at: datetime = BASE_TIME,
        session_type: SessionType = SessionType.BEHAVIORAL,
        feedback: Optional[OverallFeedback] = None,
        duration: int = 600,
    ) -> Session:
        session = Session(
            user_id=user_id,
            session_type=session_type,
            title="Software Developer - Behavioral Interview",
            status=SessionStatus.COMPLETED,
            overall_score=score,
            duration=duration,
            feedback=feedback or make_feedback(),
            created_at=completed_at - timedelta(seconds=duration),
            started_at=completed_at - timedelta(seconds=duration),
            completed_at=completed_at,
            last_activity_at=completed_at,
        )
        return await store.create(session)

    return create

