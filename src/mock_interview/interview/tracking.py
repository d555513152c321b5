"""Longitudinal statistics over a user's completed sessions."""

from typing import Any, Dict, List, Optional, Union

from mock_interview.config import Settings, settings as default_settings
from mock_interview.core.models import Session, SessionType, parse_enum
from mock_interview.storage.base import SessionStore
from mock_interview.utils.logging import get_logger

logger = get_logger(__name__)

NOT_ENOUGH_SESSIONS_MESSAGE = "Need at least 2 completed interviews to track improvement"


def _mean(values: List[float]) -> Optional[float]:
    if not values:
        return None
    return round(sum(values) / len(values), 2)


def _trend(delta: float) -> str:
    if delta > 0:
        return "improving"
    if delta < 0:
        return "declining"
    return "stable"


class ImprovementTracker:
    """Computes score trends and per-type statistics from session history."""

    def __init__(self, store: SessionStore, config: Optional[Settings] = None):
        self.logger = logger.bind(component="improvement_tracker")
        self.store = store
        self.settings = config or default_settings

    async def track_improvement(
        self,
        user_id: str,
        session_type: Optional[Union[SessionType, str]] = None,
    ) -> Dict[str, Any]:
        """
        Score trend across the user's most recent completed sessions.

        Args:
            user_id: User whose history is read
            session_type: Restrict to one session type

        Returns:
            ``has_improvement`` False with a message when fewer than two
            sessions are available, otherwise first/last scores, the total
            and mean per-session change, the trend and the score series
        """
        if session_type is not None:
            session_type = parse_enum(SessionType, session_type, "session_type")

        recent = await self.store.list_completed(
            user_id,
            session_type=session_type,
            limit=self.settings.improvement_window,
            newest_first=True,
        )
        sessions = list(reversed(recent))

        if len(sessions) < 2:
            return {
                "has_improvement": False,
                "total_sessions": len(sessions),
                "message": NOT_ENOUGH_SESSIONS_MESSAGE,
            }

        scores = [s.overall_score or 0 for s in sessions]
        deltas = [current - previous for previous, current in zip(scores, scores[1:])]
        score_improvement = scores[-1] - scores[0]

        self.logger.debug(
            "Improvement tracked",
            user_id=user_id,
            session_type=session_type.value if session_type else None,
            sessions=len(sessions),
            score_improvement=score_improvement,
        )

        return {
            "has_improvement": True,
            "total_sessions": len(sessions),
            "score_improvement": score_improvement,
            "avg_improvement": round(sum(deltas) / len(deltas), 2),
            "first_score": scores[0],
            "last_score": scores[-1],
            "trend": _trend(score_improvement),
            "sessions": [
                {
                    "date": s.completed_at,
                    "score": s.overall_score,
                    "type": s.session_type.value,
                }
                for s in sessions
            ],
        }

    async def get_interview_stats(self, user_id: str) -> Dict[str, Any]:
        """Per-type aggregates plus overall totals for a user."""
        sessions = await self.store.list_completed(user_id, newest_first=True)

        by_type: Dict[str, List[Session]] = {}
        for session in sessions:
            by_type.setdefault(session.session_type.value, []).append(session)

        improvement = await self.track_improvement(user_id)

        return {
            "total_completed": len(sessions),
            "best_score": max((s.overall_score or 0 for s in sessions), default=None),
            "by_type": {
                session_type: self._type_stats(group)
                for session_type, group in by_type.items()
            },
            "last_session": sessions[0].summary() if sessions else None,
            "improvement_trend": improvement.get("trend"),
        }

    @staticmethod
    def _type_stats(sessions: List[Session]) -> Dict[str, Any]:
        scores = [s.overall_score or 0 for s in sessions]
        with_feedback = [s.feedback for s in sessions if s.feedback is not None]
        return {
            "average_score": _mean(scores),
            "total_sessions": len(sessions),
            "best_score": max(scores),
            "total_duration": sum(s.duration or 0 for s in sessions),
            "avg_communication": _mean([f.communication.score for f in with_feedback]),
            "avg_technical": _mean([f.technical_accuracy.score for f in with_feedback]),
            "avg_confidence": _mean([f.confidence.score for f in with_feedback]),
        }
