"""Session storage and question provider collaborators."""

from .base import QuestionProvider, SessionStore
from .memory import InMemorySessionStore
from .questions import StaticQuestionProvider

__all__ = [
    "QuestionProvider",
    "SessionStore",
    "InMemorySessionStore",
    "StaticQuestionProvider",
]
