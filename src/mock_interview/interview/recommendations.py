"""Practice recommendations from recent performance."""

from typing import Any, Dict, List, Optional

from mock_interview.config import Settings, settings as default_settings
from mock_interview.core.models import ImprovementPriority, SessionType
from mock_interview.storage.base import SessionStore
from mock_interview.utils.logging import get_logger

logger = get_logger(__name__)

STARTER_RECOMMENDATIONS = [
    "Start with a behavioral interview to assess communication skills",
    "Try a technical interview to evaluate problem-solving abilities",
    "Practice with HR questions to prepare for general interviews",
]
STARTER_FOCUS_AREAS = ["communication", "confidence", "structure"]

WEAK_SESSION_TYPE_THRESHOLD = 70

# Weak area -> recommendation, in output order
AREA_RECOMMENDATIONS = {
    "communication": "Practice articulating thoughts clearly and concisely",
    "confidence": "Work on confident delivery and assertive language",
    "technical": "Review technical concepts and practice coding problems",
    "behavioral": "Practice STAR method for behavioral questions",
}

WEAK_PRIORITIES = (ImprovementPriority.HIGH, ImprovementPriority.MEDIUM)


class RecommendationEngine:
    """Suggests what to practise next."""

    def __init__(self, store: SessionStore, config: Optional[Settings] = None):
        self.logger = logger.bind(component="recommendation_engine")
        self.store = store
        self.settings = config or default_settings

    async def get_personalized_recommendations(self, user_id: str) -> Dict[str, Any]:
        sessions = await self.store.list_completed(
            user_id,
            limit=self.settings.recommendation_window,
            newest_first=True,
        )

        if not sessions:
            return {
                "recommendations": list(STARTER_RECOMMENDATIONS),
                "focus_areas": list(STARTER_FOCUS_AREAS),
                "suggested_session_type": SessionType.BEHAVIORAL.value,
                "performance_summary": {},
            }

        performance: Dict[str, List[int]] = {}
        weak_areas: List[str] = []
        for session in sessions:
            performance.setdefault(session.session_type.value, []).append(session.overall_score or 0)
            if session.feedback is None:
                continue
            for area in session.feedback.improvement_areas:
                if area.priority in WEAK_PRIORITIES and area.area not in weak_areas:
                    weak_areas.append(area.area)

        weakest_type = None
        lowest_average = 100.0
        for session_type, scores in performance.items():
            average = sum(scores) / len(scores)
            if average < lowest_average:
                lowest_average = average
                weakest_type = session_type

        recommendations = []
        if weakest_type is not None and lowest_average < WEAK_SESSION_TYPE_THRESHOLD:
            recommendations.append(
                f"Focus on {weakest_type} interviews - your average score is {round(lowest_average)}%"
            )
        for area, text in AREA_RECOMMENDATIONS.items():
            if area in weak_areas:
                recommendations.append(text)

        suggested = weakest_type or SessionType.BEHAVIORAL.value

        self.logger.info(
            "Recommendations generated",
            user_id=user_id,
            sessions_considered=len(sessions),
            weak_areas=len(weak_areas),
            suggested_session_type=suggested,
        )

        return {
            "recommendations": recommendations,
            "focus_areas": weak_areas,
            "suggested_session_type": suggested,
            "performance_summary": performance,
        }
