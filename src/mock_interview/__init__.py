"""
Mock Interview: heuristic scoring and session management for interview practice.

Answers are scored by deterministic linguistic analysis (length, clarity,
relevance, confidence, sentiment and structure) and aggregated into
session feedback, score trends and practice recommendations.
"""

__version__ = "0.1.0"

from mock_interview.core.errors import InterviewError
from mock_interview.interview.analyzer import ResponseAnalyzer, analyze
from mock_interview.interview.service import InterviewService
from mock_interview.interview.session import SessionManager

__all__ = [
    "InterviewError",
    "InterviewService",
    "ResponseAnalyzer",
    "SessionManager",
    "analyze",
]
