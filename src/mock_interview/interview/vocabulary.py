"""Keyword, phrase and threshold tables used by the response analyzer.

Everything the analyzer matches against lives here so the scoring rules can
be audited and tuned without touching the algorithm.
"""

from typing import Dict, List, Tuple

# Expected answer length per category: (min, optimal, max) words
EXPECTED_LENGTHS: Dict[str, Tuple[int, int, int]] = {
    "technical": (50, 150, 300),
    "behavioral": (80, 200, 400),
    "situational": (60, 180, 350),
    "problem-solving": (70, 200, 400),
    "communication": (40, 120, 250),
}
DEFAULT_LENGTH_CATEGORY = "communication"

TRANSITION_WORDS: List[str] = [
    "however", "therefore", "furthermore", "additionally",
    "consequently", "meanwhile", "moreover", "nevertheless",
]

FILLER_WORDS: List[str] = ["um", "uh", "like", "you know", "basically", "actually"]

QUESTION_STOP_WORDS = frozenset([
    "what", "when", "where", "which", "would", "could", "should",
    "have", "been", "this", "that", "with", "from",
])

CATEGORY_KEYWORDS: Dict[str, List[str]] = {
    "technical": [
        "algorithm", "data structure", "complexity", "optimization",
        "implementation", "design pattern", "architecture",
    ],
    "behavioral": [
        "team", "leadership", "communication", "conflict",
        "collaboration", "motivation", "challenge",
    ],
    "situational": [
        "situation", "decision", "approach", "outcome",
        "result", "impact", "solution",
    ],
    "problem-solving": [
        "problem", "solution", "analysis", "approach",
        "strategy", "method", "process",
    ],
    "communication": [
        "explain", "describe", "communicate", "present",
        "discuss", "clarify", "understand",
    ],
}
DEFAULT_KEYWORD_CATEGORY = "communication"

STAR_SYNONYMS: Dict[str, List[str]] = {
    "situation": ["situation", "context", "background", "scenario", "circumstance"],
    "task": ["task", "goal", "objective", "responsibility", "assignment", "challenge"],
    "action": ["action", "approach", "method", "strategy", "steps", "process", "did", "implemented"],
    "result": ["result", "outcome", "impact", "achievement", "success", "improvement", "benefit"],
}

# Categories that expect STAR-shaped answers / technical walkthroughs
STAR_CATEGORIES = frozenset(["behavioral", "situational"])
TECHNICAL_STRUCTURE_CATEGORIES = frozenset(["technical", "problem-solving"])

CONFIDENT_PHRASES: List[str] = [
    "i am confident", "i believe", "i know", "i have experience",
    "i successfully", "i achieved", "i led", "i managed",
    "i implemented", "i developed", "i created", "i solved",
]

UNCERTAIN_PHRASES: List[str] = [
    "i think maybe", "i guess", "i suppose", "i might",
    "probably", "perhaps", "i'm not sure", "i don't know",
]

EXAMPLE_INDICATORS: List[str] = ["for example", "for instance", "specifically", "in particular"]

QUANTIFIED_RESULT_PATTERN = (
    r"\b\d+(?:\.\d+)?\s?(?:%|percent\b|million\b|thousand\b|hours\b|days\b|weeks\b|months\b|years\b)"
)

POSITIVE_WORDS: List[str] = [
    "excellent", "great", "good", "successful", "achieved", "accomplished",
    "improved", "enhanced", "optimized", "effective", "efficient", "innovative",
    "creative", "collaborative", "teamwork", "leadership", "growth", "learning",
]

NEGATIVE_WORDS: List[str] = [
    "failed", "difficult", "challenging", "problem", "issue", "struggle",
    "conflict", "disagreement", "mistake", "error", "wrong", "bad",
]

FLOW_INDICATORS: List[str] = ["first", "second", "third", "then", "next", "finally", "in conclusion"]

PROBLEM_SOLVING_WORDS: List[str] = ["problem", "solution", "challenge", "approach", "strategy", "method"]

TECHNICAL_STRUCTURE_TERMS: List[str] = ["problem", "approach", "implementation", "complexity", "testing"]

# Overall score weights; sentiment is applied as a signed adjustment
SCORE_WEIGHTS: Dict[str, float] = {
    "completeness": 0.25,
    "clarity": 0.20,
    "relevance": 0.25,
    "confidence": 0.15,
    "structure": 0.15,
}
SENTIMENT_WEIGHT = 0.1

RELEVANCE_WEIGHTS: Dict[str, float] = {
    "keyword": 0.6,
    "category": 0.3,
    "structure": 0.1,
}
