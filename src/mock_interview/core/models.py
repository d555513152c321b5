"""Core data models for the mock interview core."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Type
from uuid import uuid4

from pydantic import BaseModel, Field

from mock_interview.core.errors import InterviewValidationError


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid4())


class SessionType(str, Enum):
    """Kinds of interview session a user can practise."""
    TECHNICAL = "technical"
    BEHAVIORAL = "behavioral"
    MIXED = "mixed"
    HR = "hr"
    CASE_STUDY = "case-study"
    CODING = "coding"


class Difficulty(str, Enum):
    """Difficulty levels for interview questions."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class QuestionCategory(str, Enum):
    """Question categories."""
    TECHNICAL = "technical"
    SYSTEM_DESIGN = "system-design"
    LEADERSHIP = "leadership"
    BEHAVIORAL = "behavioral"
    SITUATIONAL = "situational"
    PROBLEM_SOLVING = "problem-solving"
    COMMUNICATION = "communication"
    CODING = "coding"
    ALGORITHMS = "algorithms"


class SessionStatus(str, Enum):
    """Session lifecycle states. Transitions only move forward."""
    CREATED = "created"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


class ImprovementPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# Legacy request values accepted for backward compatibility
DIFFICULTY_ALIASES: Dict[str, str] = {"entry": "easy"}


def parse_enum(enum_cls: Type[Enum], value: Any, field: str) -> Enum:
    """Coerce a raw request value into ``enum_cls`` or raise a validation error."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if enum_cls is Difficulty:
            normalized = DIFFICULTY_ALIASES.get(normalized, normalized)
        try:
            return enum_cls(normalized)
        except ValueError:
            pass
    raise InterviewValidationError(field, value, [member.value for member in enum_cls])


class Question(BaseModel):
    """A candidate question returned by a question provider."""
    question_id: str = Field(default_factory=new_id, description="Question identifier")
    question: str = Field(..., description="Question text")
    category: QuestionCategory = Field(..., description="Question category")
    difficulty: Difficulty = Field(Difficulty.MEDIUM, description="Question difficulty")
    expected_answer: Optional[str] = Field(None, description="Reference answer, if any")
    key_points: List[str] = Field(default_factory=list, description="Points a strong answer covers")
    tip: Optional[str] = Field(None, description="Hint shown when hints are enabled")
    expected_duration: int = Field(180, description="Expected answer duration in seconds")


class UserAnswer(BaseModel):
    """A submitted answer."""
    text: str = Field("", description="Answer text")
    audio_url: Optional[str] = Field(None, description="Reference to a recorded answer")
    duration: float = Field(0.0, ge=0, description="Spoken duration in seconds")


class QuestionFeedback(BaseModel):
    """Feedback attached to a single answered question."""
    content: str = Field("", description="Templated feedback text")
    strengths: List[str] = Field(default_factory=list, description="Named strengths")
    improvements: List[str] = Field(default_factory=list, description="Named improvements")
    score: float = Field(0.0, ge=0, le=10, description="Question score (0-10)")


class SessionQuestion(BaseModel):
    """A question as it lives inside a session."""
    question_id: str = Field(..., description="Question identifier")
    question: str = Field(..., description="Question text")
    category: QuestionCategory = Field(..., description="Question category")
    expected_answer: Optional[str] = Field(None, description="Reference answer, if any")
    key_points: List[str] = Field(default_factory=list, description="Points a strong answer covers")
    tip: Optional[str] = Field(None, description="Hint shown when hints are enabled")
    expected_duration: int = Field(180, description="Expected answer duration in seconds")
    is_answered: bool = Field(False, description="Whether an answer has been recorded")
    user_answer: UserAnswer = Field(default_factory=UserAnswer, description="Submitted answer")
    time_spent: float = Field(0.0, ge=0, description="Seconds spent on the question")
    feedback: QuestionFeedback = Field(default_factory=QuestionFeedback, description="Question feedback")

    @classmethod
    def from_question(cls, question: Question) -> "SessionQuestion":
        return cls(
            question_id=question.question_id,
            question=question.question,
            category=question.category,
            expected_answer=question.expected_answer,
            key_points=list(question.key_points),
            tip=question.tip,
            expected_duration=question.expected_duration,
        )

    def metadata(self, include_tip: bool = False) -> Dict[str, Any]:
        """Question fields safe to show before it is answered."""
        data = {
            "question_id": self.question_id,
            "question": self.question,
            "category": self.category.value,
            "key_points": list(self.key_points),
            "expected_duration": self.expected_duration,
        }
        if include_tip and self.tip:
            data["tip"] = self.tip
        return data


class SessionSettings(BaseModel):
    """Per-session settings. The time limit is advisory only."""
    time_limit: int = Field(60, ge=1, description="Time limit in minutes")
    allow_audio_recording: bool = Field(True, description="Whether audio answers are allowed")
    show_hints: bool = Field(False, description="Whether question tips are shown")


class DimensionFeedback(BaseModel):
    """Score and text for one feedback dimension."""
    score: int = Field(..., ge=0, le=10, description="Rounded dimension score")
    feedback: str = Field(..., description="Band text")


class ImprovementArea(BaseModel):
    """A named weak area with a priority."""
    area: str = Field(..., description="Category or skill name")
    suggestion: str = Field(..., description="What to practise")
    priority: ImprovementPriority = Field(ImprovementPriority.MEDIUM, description="Priority level")


class OverallFeedback(BaseModel):
    """Session-level feedback produced at completion."""
    communication: DimensionFeedback
    technical_accuracy: DimensionFeedback
    confidence: DimensionFeedback
    problem_solving: DimensionFeedback
    overall: str = Field(..., description="Narrative summary")
    improvement_areas: List[ImprovementArea] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)
    next_steps: List[str] = Field(default_factory=list)
    category_scores: Dict[str, float] = Field(default_factory=dict, description="Category means (0-10)")


class Progress(BaseModel):
    answered: int
    total: int
    percentage: int


class InterviewConfig(BaseModel):
    """Validated request to start an interview."""
    session_type: SessionType
    difficulty: Difficulty = Difficulty.MEDIUM
    category: Optional[QuestionCategory] = None
    target_role: Optional[str] = None
    question_count: Optional[int] = None
    time_limit: Optional[int] = None
    show_hints: bool = False

    @classmethod
    def from_request(cls, data: Dict[str, Any], default_difficulty: str = "medium") -> "InterviewConfig":
        """Build a config from raw request data, reporting the offending field."""
        if data.get("session_type") is None:
            raise InterviewValidationError(
                "session_type", None, [t.value for t in SessionType], message="session_type is required"
            )
        session_type = parse_enum(SessionType, data["session_type"], "session_type")
        difficulty = parse_enum(Difficulty, data.get("difficulty") or default_difficulty, "difficulty")
        category = None
        if data.get("category") is not None:
            category = parse_enum(QuestionCategory, data["category"], "category")

        question_count = data.get("question_count")
        if question_count is not None and (not isinstance(question_count, int) or question_count < 1):
            raise InterviewValidationError(
                "question_count", question_count, message="question_count must be a positive integer"
            )
        time_limit = data.get("time_limit")
        if time_limit is not None and (not isinstance(time_limit, int) or time_limit < 1):
            raise InterviewValidationError(
                "time_limit", time_limit, message="time_limit must be a positive number of minutes"
            )

        return cls(
            session_type=session_type,
            difficulty=difficulty,
            category=category,
            target_role=data.get("target_role"),
            question_count=question_count,
            time_limit=time_limit,
            show_hints=bool(data.get("show_hints", False)),
        )


class Session(BaseModel):
    """An interview practice session."""
    id: str = Field(default_factory=new_id, description="Session identifier")
    user_id: str = Field(..., description="Owning user")
    session_type: SessionType = Field(..., description="Session type")
    difficulty: Difficulty = Field(Difficulty.MEDIUM, description="Session difficulty")
    target_role: Optional[str] = Field(None, description="Role the user is practising for")
    title: str = Field("", description="Display title")
    questions: List[SessionQuestion] = Field(default_factory=list, description="Ordered, fixed question list")
    settings: SessionSettings = Field(default_factory=SessionSettings, description="Session settings")
    status: SessionStatus = Field(SessionStatus.CREATED, description="Lifecycle status")
    overall_score: Optional[int] = Field(None, ge=0, le=100, description="Overall score, set at completion")
    duration: Optional[int] = Field(None, ge=0, description="Seconds from creation to completion")
    feedback: Optional[OverallFeedback] = Field(None, description="Session feedback, set at completion")
    created_at: datetime = Field(default_factory=utc_now, description="Creation time")
    started_at: Optional[datetime] = Field(None, description="Time the session entered in-progress")
    completed_at: Optional[datetime] = Field(None, description="Completion time")
    last_activity_at: datetime = Field(default_factory=utc_now, description="Last state change")
    version: int = Field(0, description="Optimistic concurrency version, owned by the store")

    def get_question(self, question_id: str) -> Optional[SessionQuestion]:
        for question in self.questions:
            if question.question_id == question_id:
                return question
        return None

    def next_question(self) -> Optional[SessionQuestion]:
        for question in self.questions:
            if not question.is_answered:
                return question
        return None

    def answered_questions(self) -> List[SessionQuestion]:
        return [q for q in self.questions if q.is_answered]

    def progress(self) -> Progress:
        total = len(self.questions)
        answered = len(self.answered_questions())
        return Progress(
            answered=answered,
            total=total,
            percentage=round(answered / total * 100) if total else 0,
        )

    def summary(self) -> Dict[str, Any]:
        """Compact view used by history listings."""
        return {
            "session_id": self.id,
            "title": self.title,
            "session_type": self.session_type.value,
            "target_role": self.target_role,
            "difficulty": self.difficulty.value,
            "status": self.status.value,
            "overall_score": self.overall_score,
            "duration": self.duration,
            "started_at": self.started_at,
            "completed_at": self.completed_at,
            "created_at": self.created_at,
        }
