"""Error taxonomy for the interview core.

Domain errors carry a stable ``code`` the calling layer can map to a
response. Validation and state errors are raised before any session is
mutated; infrastructure errors come from the store and are kept apart from
domain errors so callers can tell "you asked for something invalid" from
"the backend failed".
"""

from typing import Any, Dict, Iterable, Optional


class InterviewError(Exception):
    """Base class for all interview core errors."""

    code = "INTERVIEW_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.code = code or self.code
        self.message = message
        self.details = details or {}
        super().__init__(f"[{self.code}] {message}")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the error for the calling layer."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class InterviewValidationError(InterviewError):
    """A request field holds a value outside its allowed set."""

    code = "VALIDATION_ERROR"

    def __init__(self, field: str, value: Any, allowed: Optional[Iterable[Any]] = None, message: Optional[str] = None):
        allowed_values = list(allowed) if allowed is not None else []
        if message is None:
            message = f"Invalid value {value!r} for '{field}'"
            if allowed_values:
                message += f"; must be one of: {', '.join(str(a) for a in allowed_values)}"
        super().__init__(
            message,
            details={"field": field, "value": value, "allowed": allowed_values},
        )
        self.field = field
        self.value = value
        self.allowed = allowed_values


class SessionNotFoundError(InterviewError):
    code = "SESSION_NOT_FOUND"

    def __init__(self, session_id: str):
        super().__init__("Interview session not found", details={"session_id": session_id})


class QuestionNotFoundError(InterviewError):
    code = "QUESTION_NOT_FOUND"

    def __init__(self, session_id: str, question_id: str):
        super().__init__(
            "Question not found in session",
            details={"session_id": session_id, "question_id": question_id},
        )


class SessionAlreadyActiveError(InterviewError):
    code = "SESSION_ALREADY_ACTIVE"

    def __init__(self, user_id: str, active_session_id: Optional[str] = None):
        super().__init__(
            "User already has an interview in progress",
            details={"user_id": user_id, "active_session_id": active_session_id},
        )


class SessionNotInProgressError(InterviewError):
    code = "SESSION_NOT_IN_PROGRESS"

    def __init__(self, session_id: str, status: str):
        super().__init__(
            f"Interview session is {status}, expected in-progress",
            details={"session_id": session_id, "status": status},
        )


class AlreadyAnsweredError(InterviewError):
    code = "ALREADY_ANSWERED"

    def __init__(self, session_id: str, question_id: str):
        super().__init__(
            "Question has already been answered",
            details={"session_id": session_id, "question_id": question_id},
        )


class AlreadyCompletedError(InterviewError):
    code = "ALREADY_COMPLETED"

    def __init__(self, session_id: str):
        super().__init__("Interview is already completed", details={"session_id": session_id})


class NoAnswersSubmittedError(InterviewError):
    code = "NO_ANSWERS_SUBMITTED"

    def __init__(self, session_id: str):
        super().__init__("No questions have been answered yet", details={"session_id": session_id})


class NoQuestionsAvailableError(InterviewError):
    code = "NO_QUESTIONS_AVAILABLE"

    def __init__(self, category: str, difficulty: str):
        super().__init__(
            "No questions available for the requested configuration",
            details={"category": category, "difficulty": difficulty},
        )


class StoreError(InterviewError):
    """Infrastructure failure in a persistence collaborator."""

    code = "STORE_ERROR"


class ConcurrentModificationError(StoreError):
    """A compare-and-swap update lost against a concurrent writer."""

    code = "CONCURRENT_MODIFICATION"

    def __init__(self, session_id: str, expected_version: int, actual_version: int):
        super().__init__(
            "Session was modified concurrently",
            details={
                "session_id": session_id,
                "expected_version": expected_version,
                "actual_version": actual_version,
            },
        )
