"""Tests for score aggregation and feedback generation."""

import pytest
from hypothesis import given, settings, strategies as st

from mock_interview.core.models import (
    ImprovementPriority,
    QuestionCategory,
    QuestionFeedback,
    Session,
    SessionQuestion,
    SessionType,
    UserAnswer,
)
from mock_interview.interview.aggregator import NEUTRAL_SCORE, QuestionAnalysis, ScoreAggregator
from mock_interview.interview.analyzer import AnalysisResult
from mock_interview.interview.feedback import (
    QUESTION_FALLBACK_IMPROVEMENT,
    QUESTION_FALLBACK_STRENGTH,
    SESSION_FALLBACK_STRENGTH,
    FeedbackGenerator,
    performance_level,
)


def analysis_of(category: str, score: float, **dimensions) -> QuestionAnalysis:
    return QuestionAnalysis(
        question_id=f"{category}-{score}",
        category=category,
        analysis=AnalysisResult(score=score, **dimensions),
    )


def question(question_id: str, category=QuestionCategory.TECHNICAL, answer=None, score=0.0) -> SessionQuestion:
    q = SessionQuestion(question_id=question_id, question="Explain caching.", category=category)
    if answer is not None:
        q.is_answered = True
        q.user_answer = UserAnswer(text=answer)
        q.feedback = QuestionFeedback(score=score)
    return q


class TestScoreAggregator:

    @pytest.fixture
    def aggregator(self):
        return ScoreAggregator()

    def test_category_scores_average_per_category(self, aggregator):
        analyses = [
            analysis_of("technical", 8.0),
            analysis_of("technical", 6.0),
            analysis_of("behavioral", 4.0),
        ]

        assert aggregator.category_scores(analyses) == {"technical": 7.0, "behavioral": 4.0}
        assert aggregator.category_percentages(analyses) == {"technical": 70.0, "behavioral": 40.0}

    def test_average_confidence_is_neutral_without_analyses(self, aggregator):
        assert aggregator.average_confidence([]) == NEUTRAL_SCORE

    def test_average_dimension(self, aggregator):
        analyses = [
            analysis_of("technical", 5.0, clarity=4.0),
            analysis_of("technical", 5.0, clarity=8.0),
        ]
        assert aggregator.average_dimension(analyses, "clarity") == 6.0

    def test_overall_percentage_counts_unanswered_as_zero(self, aggregator):
        session = Session(
            user_id="user-1",
            session_type=SessionType.TECHNICAL,
            questions=[question("q1", answer="yes", score=8.0), question("q2")],
        )
        assert aggregator.overall_percentage(session) == 40

    def test_overall_percentage_of_empty_session(self, aggregator):
        session = Session(user_id="user-1", session_type=SessionType.TECHNICAL)
        assert aggregator.overall_percentage(session) == 0

    @given(scores=st.lists(st.floats(min_value=0, max_value=10), min_size=1, max_size=10))
    @settings(max_examples=50, deadline=10000)
    def test_overall_percentage_is_bounded(self, scores):
        session = Session(
            user_id="user-1",
            session_type=SessionType.MIXED,
            questions=[question(f"q{i}", answer="a", score=s) for i, s in enumerate(scores)],
        )
        assert 0 <= ScoreAggregator().overall_percentage(session) <= 100


class TestQuestionFeedback:

    @pytest.fixture
    def generator(self):
        return FeedbackGenerator()

    @pytest.mark.parametrize("score, phrase", [
        (9.0, "Excellent response"),
        (6.5, "Good response"),
        (4.0, "Adequate response"),
        (1.0, "needs significant improvement"),
    ])
    def test_detailed_feedback_bands(self, generator, score, phrase):
        text = generator.detailed_feedback(AnalysisResult(score=score), "technical")
        assert phrase in text

    def test_zero_analysis_falls_back(self, generator):
        feedback = generator.build_question_feedback(AnalysisResult(), "behavioral")

        assert feedback.score == 0
        assert feedback.strengths == [QUESTION_FALLBACK_STRENGTH]
        assert "Use the STAR method for behavioral questions" in feedback.improvements

    def test_strong_analysis_names_strengths(self, generator):
        analysis = AnalysisResult(
            score=8.4, completeness=9, clarity=8, relevance=8, confidence=8, structure_score=8, sentiment_score=3
        )
        feedback = generator.build_question_feedback(analysis, "technical")

        assert len(feedback.strengths) == 6
        assert feedback.improvements == [QUESTION_FALLBACK_IMPROVEMENT]
        assert feedback.score == 8.4


class TestSessionFeedback:

    @pytest.fixture
    def generator(self):
        return FeedbackGenerator()

    @pytest.mark.parametrize("score, level", [
        (95, "Excellent"),
        (90, "Excellent"),
        (85, "Good"),
        (70, "Average"),
        (60, "Below Average"),
        (59, "Needs Improvement"),
        (0, "Needs Improvement"),
    ])
    def test_performance_levels(self, score, level):
        assert performance_level(score) == level

    def test_session_without_answers_uses_neutral_dimensions(self, generator):
        session = Session(
            user_id="user-1",
            session_type=SessionType.TECHNICAL,
            questions=[question("q1"), question("q2")],
        )
        feedback = generator.generate_comprehensive_feedback(session)

        for dimension in (
            feedback.communication,
            feedback.technical_accuracy,
            feedback.confidence,
            feedback.problem_solving,
        ):
            assert dimension.score == 6
        assert feedback.strengths == [SESSION_FALLBACK_STRENGTH]
        assert [area.area for area in feedback.improvement_areas] == ["consistency"]
        assert feedback.improvement_areas[0].priority == ImprovementPriority.LOW
        assert "You scored 0% in this technical interview" in feedback.overall

    def test_star_area_only_for_weak_behavioral_sessions(self, generator):
        weak_behavioral = {"behavioral": 5.0}

        behavioral = generator.improvement_areas(weak_behavioral, 7.0, "behavioral")
        mixed = generator.improvement_areas(weak_behavioral, 7.0, "mixed")

        assert "STAR method" in [area.area for area in behavioral]
        assert "STAR method" not in [area.area for area in mixed]

    def test_improvement_priorities(self, generator):
        areas = generator.improvement_areas({"technical": 3.0, "communication": 5.0}, 3.5, "technical")
        priorities = {area.area: area.priority for area in areas}

        assert priorities == {
            "technical": ImprovementPriority.HIGH,
            "communication": ImprovementPriority.MEDIUM,
            "confidence": ImprovementPriority.HIGH,
        }

    def test_technical_wording_depends_on_session_type(self, generator):
        technical = generator._dimension(8.5, "technical_accuracy", "technical")
        behavioral = generator._dimension(2.0, "technical_accuracy", "behavioral")

        assert technical.feedback == "Excellent technical knowledge and problem-solving approach"
        assert behavioral.feedback == "Analytical skills require significant development"
        assert technical.score == 8

    def test_overall_message_confidence_caveat(self, generator):
        message = generator.overall_message(85, "coding", 4.0)

        assert message.startswith("You scored 85% in this coding interview, indicating good performance.")
        assert message.endswith("Work on building confidence in your responses.")

    def test_strengths_consistency_note(self, generator):
        strengths = generator.session_strengths({"technical": 7.5, "communication": 7.0}, 7.2)

        assert "Strong technical skills demonstrated throughout the interview" in strengths
        assert "Confident and assertive communication style" in strengths
        assert "Consistent performance across all question categories" in strengths

    def test_next_steps_name_weakest_category(self, generator):
        steps = generator.next_steps(65, "behavioral", {"behavioral": 4.5, "communication": 7.0})

        assert len(steps) == 5
        assert "Prioritize improving behavioral skills through focused study and practice" in steps
        assert steps[-1] == "Continue practicing behavioral interviews to maintain and improve skills"

    def test_comprehensive_feedback_refreshes_question_feedback(self, generator):
        answered = question("q1", answer="First I measured the problem, then I chose an approach.")
        session = Session(user_id="user-1", session_type=SessionType.TECHNICAL, questions=[answered])

        feedback = generator.generate_comprehensive_feedback(session)

        assert session.questions[0].feedback.score > 0
        assert session.questions[0].feedback.content
        assert set(feedback.category_scores) == {"technical"}
