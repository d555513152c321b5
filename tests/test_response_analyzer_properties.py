"""Property-based tests for the heuristic response analyzer."""

import pytest
from hypothesis import given, settings, strategies as st

from mock_interview.core.models import QuestionCategory, SessionType
from mock_interview.interview.analyzer import (
    ANALYSIS_FAILED_INSIGHT,
    NO_RESPONSE_INSIGHT,
    AnalysisResult,
    ResponseAnalyzer,
    analyze,
    count_whole_words,
    text_stats,
)


@st.composite
def category_strategy(draw):
    """Known categories as enums or strings, plus unknown names."""
    return draw(st.one_of(
        st.sampled_from(list(QuestionCategory)),
        st.sampled_from([c.value for c in QuestionCategory]),
        st.text(min_size=1, max_size=15),
    ))


@st.composite
def answer_strategy(draw):
    """Answers mixing interview vocabulary with arbitrary text."""
    vocabulary = [
        "situation", "task", "action", "result", "um", "like", "definitely",
        "maybe", "however", "first", "then", "problem", "approach", "great",
        "bad", "increased", "40%", "for example", "i think", "you know",
    ]
    words = draw(st.lists(
        st.one_of(st.sampled_from(vocabulary), st.text(min_size=1, max_size=12)),
        min_size=0,
        max_size=120,
    ))
    separator = draw(st.sampled_from([" ", ". ", "! ", "? "]))
    return separator.join(words)


class TestResponseAnalyzerProperties:
    """Bounds and ordering properties of the analyzer."""

    @pytest.fixture
    def analyzer(self):
        return ResponseAnalyzer()

    @given(
        response=answer_strategy(),
        question=st.text(max_size=200),
        category=category_strategy(),
        session_type=st.one_of(st.none(), st.sampled_from(list(SessionType))),
    )
    @settings(max_examples=100, deadline=10000)
    def test_scores_stay_within_bounds(self, response, question, category, session_type):
        """Every sub-score and the overall score stay inside their documented ranges."""
        result = analyze(response, question, category, session_type)

        assert isinstance(result, AnalysisResult)
        for value in (
            result.score,
            result.completeness,
            result.clarity,
            result.relevance,
            result.confidence,
            result.structure_score,
        ):
            assert 0.0 <= value <= 10.0
        assert -5.0 <= result.sentiment_score <= 5.0
        assert isinstance(result.insights, list)

    @given(response=st.one_of(st.none(), st.just(""), st.text(alphabet=" \t\n", max_size=10), st.integers()))
    @settings(max_examples=30, deadline=10000)
    def test_missing_response_scores_zero(self, response):
        result = analyze(response, "What is Python?", "technical", "technical")

        assert result.score == 0
        assert result.completeness == 0
        assert result.insights == [NO_RESPONSE_INSIGHT]

    @given(response=answer_strategy(), category=category_strategy())
    @settings(max_examples=50, deadline=10000)
    def test_analysis_is_deterministic(self, response, category):
        assert analyze(response, "Describe your approach", category) == analyze(
            response, "Describe your approach", category
        )

    def test_filler_words_lower_clarity(self, analyzer):
        """Fillers cost clarity when length and sentence shape are unchanged."""
        with_fillers = "Um I worked on the project. Like I built the service. Um I tested the code carefully."
        without_fillers = "So I worked on the project. Then I built the service. Also I tested the code carefully."
        assert len(with_fillers.split()) == len(without_fillers.split())

        noisy = analyzer.analyze(with_fillers, "Tell me about a project", "communication")
        clean = analyzer.analyze(without_fillers, "Tell me about a project", "communication")

        assert noisy.clarity < clean.clarity
        assert clean.clarity == 6.0
        assert noisy.clarity == 4.5

    def test_filler_penalty_is_capped(self, analyzer):
        stats = text_stats("um um um. um um um.")
        clarity = analyzer.analyze_clarity(stats.avg_words_per_sentence, stats.sentence_count, "um " * 12)
        # base 5, short sentences -2, two sentences +1, fillers capped at -2
        assert clarity == 2.0

    def test_star_language_raises_structure(self, analyzer):
        star = (
            "In that situation my task was to fix the release. The action I took was to "
            "coordinate the team, and the result was a successful launch."
        )
        opinion = "I think teamwork is important."

        star_result = analyzer.analyze(star, "Tell me about a difficult release", "behavioral", "behavioral")
        opinion_result = analyzer.analyze(opinion, "Tell me about a difficult release", "behavioral", "behavioral")

        assert star_result.structure_score > opinion_result.structure_score
        assert star_result.structure_score == 8.0
        assert opinion_result.structure_score == 5.0

    def test_analysis_failure_degrades_to_zero_result(self, analyzer, monkeypatch):
        def explode(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(analyzer, "_analyze_text", explode)
        result = analyzer.analyze("A perfectly normal answer.", "Question?", "technical")

        assert result.score == 0
        assert result.insights == [ANALYSIS_FAILED_INSIGHT]


class TestAnalyzerComponents:
    """Individual scoring rules."""

    @pytest.fixture
    def analyzer(self):
        return ResponseAnalyzer()

    @pytest.mark.parametrize("word_count, expected", [
        (0, 0.0),
        (20, 2.0),
        (40, 4.0),
        (50, 6.0),
        (100, 8.0),
        (150, 10.0),
        (300, 10.0),
        (400, 8.0),
        (1000, 7.0),
    ])
    def test_completeness_bands_for_technical(self, analyzer, word_count, expected):
        assert analyzer.analyze_completeness(word_count, "technical") == pytest.approx(expected)

    def test_unknown_category_uses_communication_band(self, analyzer):
        assert analyzer.analyze_completeness(40, "unknown") == 6.0
        assert analyzer.analyze_completeness(120, "unknown") == 10.0

    def test_text_stats(self):
        stats = text_stats("  First sentence here. Second one!  Third?  ")

        assert stats.word_count == 6
        assert stats.sentence_count == 3
        assert stats.avg_words_per_sentence == 2.0

    def test_text_stats_without_sentences(self):
        stats = text_stats("...")
        assert stats.sentence_count == 0
        assert stats.avg_words_per_sentence == 0.0

    def test_whole_word_counting(self):
        assert count_whole_words("i like it, unlike you", ["like"]) == 1
        assert count_whole_words("you know, you know", ["you know"]) == 2

    def test_relevance_reports_matched_question_words(self, analyzer):
        score, matches = analyzer.analyze_relevance(
            "python is a programming language",
            "What programming language is Python?",
            "technical",
            "technical",
        )

        assert matches == ["language", "programming", "python"]
        assert 0 < score <= 10

    def test_confidence_phrases(self, analyzer):
        confident = analyzer.analyze_confidence("i am confident that we increased revenue by 40% for example")
        hesitant = analyzer.analyze_confidence("i think maybe it worked, i'm not sure")

        assert confident > 5
        assert hesitant < 5

    def test_sentiment_is_signed(self, analyzer):
        assert analyzer.analyze_sentiment("great success, excellent work") > 0
        assert analyzer.analyze_sentiment("a terrible failure and a bad outcome") < 0

    def test_technical_structure_terms(self, analyzer):
        text = "the problem needed a new approach, so the implementation went through testing"
        assert analyzer.technical_structure_score(text) == 8.0

    def test_brief_answer_insight(self, analyzer):
        result = analyzer.analyze("no", "Tell me about a conflict", "behavioral", "behavioral")
        assert any("too brief" in insight for insight in result.insights)

    def test_weak_structure_insight_depends_on_category(self, analyzer):
        weak = AnalysisResult(completeness=6, clarity=6, relevance=6, confidence=6, structure_score=3)

        behavioral = analyzer.generate_insights(weak, "behavioral")
        technical = analyzer.generate_insights(weak, "technical")

        assert any("STAR" in insight for insight in behavioral)
        assert not any("STAR" in insight for insight in technical)
        assert any("logical flow" in insight for insight in technical)
