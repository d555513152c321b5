"""Interview feedback generation.

Turns analyzer output into per-question feedback and, at completion, into
the session-level :class:`OverallFeedback`: dimension scores, a narrative,
improvement areas, strengths and next steps.
"""

from typing import Dict, List, Optional, Tuple

from mock_interview.core.models import (
    DimensionFeedback,
    ImprovementArea,
    ImprovementPriority,
    OverallFeedback,
    QuestionFeedback,
    Session,
    SessionQuestion,
    SessionType,
)
from mock_interview.interview.aggregator import QuestionAnalysis, ScoreAggregator
from mock_interview.interview.analyzer import AnalysisResult, ResponseAnalyzer
from mock_interview.utils.logging import get_logger

logger = get_logger(__name__)

# (threshold, label) pairs, checked top-down
PERFORMANCE_LEVELS: List[Tuple[int, str]] = [
    (90, "Excellent"),
    (80, "Good"),
    (70, "Average"),
    (60, "Below Average"),
]
LOWEST_PERFORMANCE_LEVEL = "Needs Improvement"

QUESTION_FALLBACK_STRENGTH = "Shows potential for improvement"
QUESTION_FALLBACK_IMPROVEMENT = "Continue practicing to maintain consistency"
SESSION_FALLBACK_STRENGTH = "Shows potential and willingness to improve"

# Band texts for the four session dimensions: >= 8, >= 6, >= 4, below
DIMENSION_BANDS: Dict[str, Tuple[str, str, str, str]] = {
    "communication": (
        "Excellent communication skills with clear, articulate responses",
        "Good communication with room for improvement in clarity",
        "Adequate communication but needs better structure and clarity",
        "Communication skills need significant improvement",
    ),
    "technical_accuracy": (
        "Excellent {skill} knowledge and problem-solving approach",
        "Good {skill} understanding with minor gaps",
        "Basic {skill} knowledge that needs strengthening",
        "{Skill} skills require significant development",
    ),
    "confidence": (
        "Demonstrates strong confidence and conviction in responses",
        "Shows good confidence with occasional uncertainty",
        "Moderate confidence level, could be more assertive",
        "Needs to build confidence and use more decisive language",
    ),
    "problem_solving": (
        "Excellent problem-solving approach with systematic thinking",
        "Good problem-solving skills with logical reasoning",
        "Basic problem-solving approach that needs refinement",
        "Problem-solving methodology needs significant improvement",
    ),
}


def performance_level(score: float) -> str:
    """Label for a 0-100 session score."""
    for threshold, label in PERFORMANCE_LEVELS:
        if score >= threshold:
            return label
    return LOWEST_PERFORMANCE_LEVEL


def _band(score: float, texts: Tuple[str, str, str, str]) -> str:
    if score >= 8:
        return texts[0]
    if score >= 6:
        return texts[1]
    if score >= 4:
        return texts[2]
    return texts[3]


class FeedbackGenerator:
    """Generates human-readable feedback from analyzer scores."""

    def __init__(
        self,
        analyzer: Optional[ResponseAnalyzer] = None,
        aggregator: Optional[ScoreAggregator] = None,
    ):
        self.logger = logger.bind(component="feedback_generator")
        self.analyzer = analyzer or ResponseAnalyzer()
        self.aggregator = aggregator or ScoreAggregator()

    # Per-question feedback

    def build_question_feedback(self, analysis: AnalysisResult, category: str) -> QuestionFeedback:
        return QuestionFeedback(
            content=self.detailed_feedback(analysis, category),
            strengths=self.identify_strengths(analysis),
            improvements=self.identify_improvements(analysis, category),
            score=round(analysis.score, 1),
        )

    def detailed_feedback(self, analysis: AnalysisResult, category: str) -> str:
        score = analysis.score
        if score >= 8:
            return (
                f"Excellent response! You demonstrated strong {category} skills with clear, comprehensive, "
                "and well-structured answers. Your confidence and relevance to the topic were particularly impressive."
            )
        if score >= 6:
            return (
                f"Good response with solid understanding. Your answer shows competence in {category} "
                "but could benefit from more specific examples and clearer structure."
            )
        if score >= 4:
            return (
                "Adequate response that addresses the question but needs improvement. Focus on providing "
                f"more detailed explanations and relevant examples for {category} questions."
            )
        return (
            f"This response needs significant improvement. Consider researching {category} topics more "
            "thoroughly and practice structuring your answers with specific examples."
        )

    def identify_strengths(self, analysis: AnalysisResult) -> List[str]:
        strengths = []

        if analysis.completeness >= 7:
            strengths.append("Comprehensive and detailed response")
        if analysis.clarity >= 7:
            strengths.append("Clear and well-articulated communication")
        if analysis.relevance >= 7:
            strengths.append("Highly relevant to the question")
        if analysis.confidence >= 7:
            strengths.append("Confident and assertive delivery")
        if analysis.structure_score >= 7:
            strengths.append("Well-organized response structure")
        if analysis.sentiment_score > 2:
            strengths.append("Positive and professional tone")

        return strengths or [QUESTION_FALLBACK_STRENGTH]

    def identify_improvements(self, analysis: AnalysisResult, category: str) -> List[str]:
        improvements = []

        if analysis.completeness < 5:
            improvements.append("Provide more detailed and comprehensive answers")
        if analysis.clarity < 5:
            improvements.append("Improve clarity and sentence structure")
        if analysis.relevance < 5:
            improvements.append("Focus more directly on answering the specific question")
        if analysis.confidence < 5:
            improvements.append("Use more confident language and provide specific examples")
        if analysis.structure_score < 5:
            if category == "behavioral":
                improvements.append("Use the STAR method for behavioral questions")
            else:
                improvements.append("Organize responses with clearer logical structure")

        return improvements or [QUESTION_FALLBACK_IMPROVEMENT]

    # Session feedback

    def analyze_session(self, session: Session) -> List[QuestionAnalysis]:
        """
        Re-run the analyzer over every answered question.

        Stores the resulting per-question feedback on ``session`` and returns
        the analyses for aggregation.
        """
        analyses = []
        for question in session.answered_questions():
            analysis = self.analyze_question(question, session.session_type)
            question.feedback = self.build_question_feedback(analysis, question.category.value)
            analyses.append(QuestionAnalysis(
                question_id=question.question_id,
                category=question.category.value,
                analysis=analysis,
            ))
        return analyses

    def analyze_question(self, question: SessionQuestion, session_type: SessionType) -> AnalysisResult:
        return self.analyzer.analyze(
            question.user_answer.text,
            question.question,
            question.category,
            session_type,
        )

    def generate_comprehensive_feedback(self, session: Session) -> OverallFeedback:
        """
        Generate the session-level feedback.

        Args:
            session: Session whose answered questions are analyzed; per-question
                feedback is refreshed in place. ``session.overall_score`` is used
                for the narrative when set, otherwise it is derived here.

        Returns:
            Complete overall feedback
        """
        analyses = self.analyze_session(session)
        overall_score = session.overall_score
        if overall_score is None:
            overall_score = self.aggregator.overall_percentage(session)

        category_scores = self.aggregator.category_scores(analyses)
        avg_confidence = self.aggregator.average_confidence(analyses)
        session_type = session.session_type.value

        communication = category_scores.get(
            "communication", self.aggregator.average_dimension(analyses, "clarity")
        )
        technical = category_scores.get(
            "technical",
            category_scores.get("problem-solving", self.aggregator.average_dimension(analyses, "relevance")),
        )
        problem_solving = category_scores.get(
            "problem-solving",
            category_scores.get("technical", self.aggregator.average_dimension(analyses, "structure_score")),
        )

        feedback = OverallFeedback(
            communication=self._dimension(communication, "communication"),
            technical_accuracy=self._dimension(technical, "technical_accuracy", session_type),
            confidence=self._dimension(avg_confidence, "confidence"),
            problem_solving=self._dimension(problem_solving, "problem_solving"),
            overall=self.overall_message(overall_score, session_type, avg_confidence),
            improvement_areas=self.improvement_areas(category_scores, avg_confidence, session_type),
            strengths=self.session_strengths(category_scores, avg_confidence),
            next_steps=self.next_steps(overall_score, session_type, category_scores),
            category_scores={category: round(score, 2) for category, score in category_scores.items()},
        )

        self.logger.info(
            "Session feedback generated",
            session_id=session.id,
            overall_score=overall_score,
            analyzed_questions=len(analyses),
            improvement_areas=len(feedback.improvement_areas),
            strengths_count=len(feedback.strengths),
        )

        return feedback

    def _dimension(self, score: float, name: str, session_type: Optional[str] = None) -> DimensionFeedback:
        text = _band(score, DIMENSION_BANDS[name])
        if name == "technical_accuracy":
            skill = "technical" if session_type == SessionType.TECHNICAL.value else "analytical"
            text = text.format(skill=skill, Skill=skill.capitalize())
        return DimensionFeedback(score=max(0, min(10, round(score))), feedback=text)

    def overall_message(self, score: float, session_type: str, avg_confidence: float) -> str:
        level = performance_level(score)
        message = (
            f"You scored {score}% in this {session_type} interview, "
            f"indicating {level.lower()} performance. "
        )

        if score >= 80:
            message += "You demonstrated strong interview skills and would likely perform well in real interviews."
        elif score >= 60:
            message += "You have solid foundations but should focus on the identified improvement areas."
        else:
            message += "This interview highlights several areas that need attention before real interviews."

        if avg_confidence < 5:
            message += " Work on building confidence in your responses."

        return message

    def improvement_areas(
        self,
        category_scores: Dict[str, float],
        avg_confidence: float,
        session_type: str,
    ) -> List[ImprovementArea]:
        areas = []

        for category, score in category_scores.items():
            if score < 6:
                areas.append(ImprovementArea(
                    area=category,
                    suggestion=f"Focus on improving {category} skills through targeted practice and study",
                    priority=ImprovementPriority.HIGH if score < 4 else ImprovementPriority.MEDIUM,
                ))

        if avg_confidence < 6:
            areas.append(ImprovementArea(
                area="confidence",
                suggestion="Practice speaking with more conviction and provide specific examples",
                priority=ImprovementPriority.HIGH if avg_confidence < 4 else ImprovementPriority.MEDIUM,
            ))

        behavioral_score = category_scores.get("behavioral")
        if session_type == SessionType.BEHAVIORAL.value and behavioral_score is not None and behavioral_score < 6:
            areas.append(ImprovementArea(
                area="STAR method",
                suggestion="Learn and practice the STAR method for behavioral questions",
                priority=ImprovementPriority.HIGH,
            ))

        if not areas:
            areas.append(ImprovementArea(
                area="consistency",
                suggestion="Maintain consistent high performance across all question types",
                priority=ImprovementPriority.LOW,
            ))

        return areas

    def session_strengths(self, category_scores: Dict[str, float], avg_confidence: float) -> List[str]:
        strengths = [
            f"Strong {category} skills demonstrated throughout the interview"
            for category, score in category_scores.items()
            if score >= 7
        ]

        if avg_confidence >= 7:
            strengths.append("Confident and assertive communication style")

        if category_scores:
            scores = list(category_scores.values())
            if max(scores) - min(scores) < 2 and min(scores) >= 6:
                strengths.append("Consistent performance across all question categories")

        return strengths or [SESSION_FALLBACK_STRENGTH]

    def next_steps(self, score: float, session_type: str, category_scores: Dict[str, float]) -> List[str]:
        if score < 60:
            steps = [
                f"Review fundamental {session_type} interview concepts and common questions",
                "Practice with mock interviews to build confidence and fluency",
                "Study industry-specific knowledge and best practices",
            ]
        elif score < 80:
            steps = [
                "Focus on identified improvement areas through targeted practice",
                "Record yourself answering questions to improve delivery",
                "Seek feedback from mentors or interview coaches",
            ]
        else:
            steps = [
                "Excellent performance! Consider helping others with interview preparation",
                "Focus on advanced interview techniques and leadership questions",
                "Practice with senior-level or specialized interview scenarios",
            ]

        if category_scores:
            weakest, weakest_score = min(category_scores.items(), key=lambda item: item[1])
            if weakest_score < 6:
                steps.append(f"Prioritize improving {weakest} skills through focused study and practice")

        steps.append(f"Continue practicing {session_type} interviews to maintain and improve skills")
        return steps
