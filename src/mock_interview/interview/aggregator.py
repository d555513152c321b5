"""Aggregation of per-question analyses into session-level scores."""

from dataclasses import dataclass
from typing import Dict, Iterable, List

from mock_interview.core.models import Session
from mock_interview.interview.analyzer import AnalysisResult

NEUTRAL_SCORE = 6.0


@dataclass
class QuestionAnalysis:
    """Analysis of one answered question, tagged with its category."""
    question_id: str
    category: str
    analysis: AnalysisResult


class ScoreAggregator:
    """Pure aggregation helpers over a set of question analyses."""

    def category_scores(self, analyses: Iterable[QuestionAnalysis]) -> Dict[str, float]:
        """Mean 0-10 score per category."""
        groups: Dict[str, List[float]] = {}
        for qa in analyses:
            groups.setdefault(qa.category, []).append(qa.analysis.score)
        return {category: sum(scores) / len(scores) for category, scores in groups.items()}

    def category_percentages(self, analyses: Iterable[QuestionAnalysis]) -> Dict[str, float]:
        return {
            category: round(score * 10, 1)
            for category, score in self.category_scores(analyses).items()
        }

    def average_dimension(
        self,
        analyses: Iterable[QuestionAnalysis],
        dimension: str,
        default: float = NEUTRAL_SCORE,
    ) -> float:
        values = [getattr(qa.analysis, dimension) for qa in analyses]
        if not values:
            return default
        return sum(values) / len(values)

    def average_confidence(self, analyses: Iterable[QuestionAnalysis]) -> float:
        """Mean confidence across answered questions, neutral when none."""
        return self.average_dimension(analyses, "confidence")

    def overall_percentage(self, session: Session) -> int:
        """
        Session score as a percentage of the maximum possible.

        Every question counts, so unanswered questions contribute zero.
        """
        if not session.questions:
            return 0
        total = sum(q.feedback.score for q in session.questions if q.is_answered)
        return round(total / (len(session.questions) * 10) * 100)
