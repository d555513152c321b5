"""Heuristic response analysis.

Turns a free-text interview answer into a multi-dimensional score using
counts, regular expressions and the keyword tables in
:mod:`mock_interview.interview.vocabulary`. No model inference is involved,
so the same input always produces the same result.
"""

import re
from dataclasses import asdict, dataclass, field
from functools import lru_cache
from typing import Any, Dict, List, Optional, Tuple

from mock_interview.interview import vocabulary as vocab
from mock_interview.utils.logging import get_logger

logger = get_logger(__name__)

NO_RESPONSE_INSIGHT = "No response provided"
ANALYSIS_FAILED_INSIGHT = "Response could not be analyzed"

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_NON_WORD = re.compile(r"[^\w\s]")
_QUANTIFIED = re.compile(vocab.QUANTIFIED_RESULT_PATTERN)


@dataclass
class AnalysisResult:
    """Scores for a single answer."""
    score: float = 0.0
    completeness: float = 0.0
    clarity: float = 0.0
    relevance: float = 0.0
    confidence: float = 0.0
    sentiment_score: float = 0.0
    structure_score: float = 0.0
    keyword_matches: List[str] = field(default_factory=list)
    insights: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class TextStats:
    word_count: int
    sentence_count: int
    avg_words_per_sentence: float


def _clamp(value: float, low: float = 0.0, high: float = 10.0) -> float:
    return max(low, min(high, value))


@lru_cache(maxsize=None)
def _word_pattern(word: str) -> "re.Pattern[str]":
    return re.compile(rf"\b{re.escape(word)}\b")


def count_whole_words(text: str, words: List[str]) -> int:
    """Count whole-word occurrences of every entry in ``words``."""
    return sum(len(_word_pattern(word).findall(text)) for word in words)


def text_stats(text: str) -> TextStats:
    words = text.split()
    sentences = [s for s in _SENTENCE_SPLIT.split(text) if s.strip()]
    avg = len(words) / len(sentences) if sentences else 0.0
    return TextStats(
        word_count=len(words),
        sentence_count=len(sentences),
        avg_words_per_sentence=avg,
    )


class ResponseAnalyzer:
    """Stateless analyzer; every input arrives as a parameter."""

    def __init__(self):
        self.logger = logger.bind(component="response_analyzer")

    def analyze(
        self,
        response: Any,
        question: Optional[str],
        category: Any,
        session_type: Any = None,
    ) -> AnalysisResult:
        """
        Analyze one answer.

        Args:
            response: Answer text; anything that is not a non-blank string
                yields an all-zero result
            question: Question text the answer responds to
            category: Question category (enum or string)
            session_type: Interview session type (enum or string)

        Returns:
            AnalysisResult with every sub-score inside its documented bounds
        """
        if not isinstance(response, str) or not response.strip():
            return AnalysisResult(insights=[NO_RESPONSE_INSIGHT])

        category_name = _enum_value(category)
        session_type_name = _enum_value(session_type)
        question_text = question if isinstance(question, str) else ""

        try:
            return self._analyze_text(response, question_text, category_name, session_type_name)
        except Exception as e:
            self.logger.error(
                "Response analysis failed",
                error=str(e),
                error_type=type(e).__name__,
                category=category_name,
                response_length=len(response),
            )
            return AnalysisResult(insights=[ANALYSIS_FAILED_INSIGHT])

    def _analyze_text(self, response: str, question: str, category: str, session_type: str) -> AnalysisResult:
        lowered = response.lower()
        stats = text_stats(response)

        result = AnalysisResult()
        result.completeness = self.analyze_completeness(stats.word_count, category)
        result.clarity = self.analyze_clarity(stats.avg_words_per_sentence, stats.sentence_count, lowered)
        result.relevance, result.keyword_matches = self.analyze_relevance(lowered, question, category, session_type)
        result.confidence = self.analyze_confidence(lowered)
        result.sentiment_score = self.analyze_sentiment(lowered)
        result.structure_score = self.analyze_structure(lowered, category)
        result.score = self.calculate_overall_score(result)
        result.insights = self.generate_insights(result, category)
        return result

    def analyze_completeness(self, word_count: int, category: str) -> float:
        """Score answer length against the category's expected band."""
        minimum, optimal, maximum = vocab.EXPECTED_LENGTHS.get(
            category, vocab.EXPECTED_LENGTHS[vocab.DEFAULT_LENGTH_CATEGORY]
        )

        if word_count == 0:
            return 0.0
        if word_count < minimum * 0.5:
            return 2.0
        if word_count < minimum:
            return 4.0
        if word_count <= optimal:
            return 6.0 + 4.0 * (word_count - minimum) / (optimal - minimum)
        if word_count <= maximum:
            return 10.0

        # Overly long answers lose points, never below 7
        excess = word_count - maximum
        return max(7.0, 10.0 - excess / 50)

    def analyze_clarity(self, avg_words_per_sentence: float, sentence_count: int, text: str) -> float:
        score = 5.0

        if 12 <= avg_words_per_sentence <= 20:
            score += 2
        elif 8 <= avg_words_per_sentence <= 25:
            score += 1
        elif avg_words_per_sentence < 5 or avg_words_per_sentence > 30:
            score -= 2

        if sentence_count >= 2:
            score += 1
        if sentence_count >= 4:
            score += 1

        if any(word in text for word in vocab.TRANSITION_WORDS):
            score += 1

        filler_count = count_whole_words(text, vocab.FILLER_WORDS)
        score -= min(filler_count * 0.5, 2.0)

        return _clamp(score)

    def analyze_relevance(
        self, text: str, question: str, category: str, session_type: str
    ) -> Tuple[float, List[str]]:
        """
        Score how closely the answer tracks the question.

        Returns:
            Tuple of (relevance score, question words found in the answer)
        """
        question_words = [
            word for word in _NON_WORD.sub(" ", question.lower()).split()
            if len(word) > 3 and word not in vocab.QUESTION_STOP_WORDS
        ]
        matches = [word for word in question_words if word in text]
        keyword_score = min(10.0, len(matches) / max(len(question_words), 1) * 10)

        category_keywords = self.category_keywords(category, session_type)
        category_score = min(5.0, sum(1 for keyword in category_keywords if keyword in text))

        structure_score = 0.0
        if category in vocab.STAR_CATEGORIES:
            structure_score = self.count_star_elements(text) / 4 * 3

        weights = vocab.RELEVANCE_WEIGHTS
        relevance = (
            keyword_score * weights["keyword"]
            + category_score * weights["category"]
            + structure_score * weights["structure"]
        )
        return min(10.0, relevance), sorted(set(matches))

    def analyze_confidence(self, text: str) -> float:
        score = 5.0

        confident = sum(1 for phrase in vocab.CONFIDENT_PHRASES if phrase in text)
        uncertain = sum(1 for phrase in vocab.UNCERTAIN_PHRASES if phrase in text)
        score += confident * 1.5
        score -= uncertain * 2

        if any(indicator in text for indicator in vocab.EXAMPLE_INDICATORS):
            score += 1
        if _QUANTIFIED.search(text):
            score += 1

        return _clamp(score)

    def analyze_sentiment(self, text: str) -> float:
        positive = count_whole_words(text, vocab.POSITIVE_WORDS)
        negative = count_whole_words(text, vocab.NEGATIVE_WORDS)
        return _clamp((positive - negative) * 0.5, -5.0, 5.0)

    def analyze_structure(self, text: str, category: str) -> float:
        score = 5.0

        if any(indicator in text for indicator in vocab.FLOW_INDICATORS):
            score += 2
        if sum(1 for word in vocab.PROBLEM_SOLVING_WORDS if word in text) >= 2:
            score += 1

        if category in vocab.STAR_CATEGORIES:
            score += self.star_structure_score(text) * 0.3
        elif category in vocab.TECHNICAL_STRUCTURE_CATEGORIES:
            score += self.technical_structure_score(text) * 0.3

        return _clamp(score)

    def calculate_overall_score(self, result: AnalysisResult) -> float:
        weights = vocab.SCORE_WEIGHTS
        weighted = (
            result.completeness * weights["completeness"]
            + result.clarity * weights["clarity"]
            + result.relevance * weights["relevance"]
            + result.confidence * weights["confidence"]
            + result.structure_score * weights["structure"]
        )
        return _clamp(weighted + result.sentiment_score * vocab.SENTIMENT_WEIGHT)

    def generate_insights(self, result: AnalysisResult, category: str) -> List[str]:
        insights = []

        if result.completeness < 4:
            insights.append("Response is too brief. Provide more detailed explanations and examples.")
        elif result.completeness > 9:
            insights.append("Excellent response length with comprehensive details.")

        if result.clarity < 5:
            insights.append("Improve clarity by using shorter sentences and clearer structure.")
        elif result.clarity > 8:
            insights.append("Very clear and well-structured response.")

        if result.relevance < 5:
            insights.append("Focus more on directly answering the question asked.")
        elif result.relevance > 8:
            insights.append("Excellent relevance to the question topic.")

        if result.confidence < 5:
            insights.append("Use more confident language and provide specific examples.")
        elif result.confidence > 8:
            insights.append("Shows strong confidence and conviction in responses.")

        if result.structure_score < 5:
            if category == "behavioral":
                insights.append(
                    "Consider using the STAR method (Situation, Task, Action, Result) for behavioral questions."
                )
            else:
                insights.append("Improve response structure with logical flow and clear organization.")

        return insights

    @staticmethod
    def category_keywords(category: str, session_type: Optional[str] = None) -> List[str]:
        return vocab.CATEGORY_KEYWORDS.get(category, vocab.CATEGORY_KEYWORDS[vocab.DEFAULT_KEYWORD_CATEGORY])

    @staticmethod
    def count_star_elements(text: str) -> int:
        return sum(
            1 for synonyms in vocab.STAR_SYNONYMS.values()
            if any(synonym in text for synonym in synonyms)
        )

    def star_structure_score(self, text: str) -> float:
        return min(10.0, self.count_star_elements(text) * 2.5)

    @staticmethod
    def technical_structure_score(text: str) -> float:
        return min(10.0, sum(2.0 for term in vocab.TECHNICAL_STRUCTURE_TERMS if term in text))


def _enum_value(value: Any) -> str:
    if value is None:
        return ""
    return str(getattr(value, "value", value)).lower()


_default_analyzer = ResponseAnalyzer()


def analyze(response: Any, question: Optional[str], category: Any, session_type: Any = None) -> AnalysisResult:
    """Analyze one answer with the shared stateless analyzer."""
    return _default_analyzer.analyze(response, question, category, session_type)
