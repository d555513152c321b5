"""Interview scoring, session lifecycle and history analytics."""

from .aggregator import QuestionAnalysis, ScoreAggregator
from .analyzer import AnalysisResult, ResponseAnalyzer, analyze
from .feedback import FeedbackGenerator, performance_level
from .recommendations import RecommendationEngine
from .service import InterviewService
from .session import SessionManager
from .tracking import ImprovementTracker

__all__ = [
    "AnalysisResult",
    "ResponseAnalyzer",
    "analyze",
    "QuestionAnalysis",
    "ScoreAggregator",
    "FeedbackGenerator",
    "performance_level",
    "SessionManager",
    "ImprovementTracker",
    "RecommendationEngine",
    "InterviewService",
]
