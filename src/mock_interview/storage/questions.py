"""Built-in question bank."""

import random
from typing import Dict, List, Optional, Tuple

from mock_interview.core.models import Difficulty, Question, QuestionCategory
from mock_interview.storage.base import QuestionProvider
from mock_interview.utils.logging import get_logger

logger = get_logger(__name__)

STAR_TIP = "Use the STAR method: Situation, Task, Action, Result"

# category -> [(difficulty, question, tip)]
QUESTION_BANK: Dict[QuestionCategory, List[Tuple[Difficulty, str, Optional[str]]]] = {
    QuestionCategory.TECHNICAL: [
        (Difficulty.EASY, "What is the difference between a process and a thread?", None),
        (Difficulty.EASY, "Explain what a REST API is and how you would design one.", None),
        (Difficulty.MEDIUM, "How would you choose between a relational and a document database for a new service?", None),
        (Difficulty.MEDIUM, "Explain how caching improves application performance and what can go wrong with it.", None),
        (Difficulty.HARD, "Describe how you would diagnose a memory leak in a long-running production service.", None),
    ],
    QuestionCategory.SYSTEM_DESIGN: [
        (Difficulty.MEDIUM, "How would you design a URL shortener that handles millions of requests per day?", None),
        (Difficulty.HARD, "Design a notification service that delivers messages across email, SMS and push.", None),
    ],
    QuestionCategory.LEADERSHIP: [
        (Difficulty.MEDIUM, "Describe a time you led a team through a difficult deadline.", STAR_TIP),
        (Difficulty.HARD, "How do you build consensus when senior stakeholders disagree on direction?", None),
    ],
    QuestionCategory.BEHAVIORAL: [
        (Difficulty.EASY, "Tell me about a challenging project you worked on and how you overcame obstacles.", STAR_TIP),
        (Difficulty.EASY, "How do you handle working under pressure and tight deadlines?",
         "Provide specific examples and mention stress management techniques"),
        (Difficulty.MEDIUM, "Describe a time when you had to learn a new technology or skill quickly.",
         "Highlight your learning process and how you applied the new knowledge"),
        (Difficulty.MEDIUM, "What motivates you in your work, and how do you stay engaged?",
         "Connect your motivation to the role and company mission"),
        (Difficulty.HARD, "Tell me about a time you disagreed with a teammate and how you resolved the conflict.", STAR_TIP),
    ],
    QuestionCategory.SITUATIONAL: [
        (Difficulty.EASY, "What would you do if you realised you could not meet a committed deadline?", None),
        (Difficulty.MEDIUM, "How would you handle a stakeholder who keeps changing the project requirements?", None),
        (Difficulty.HARD, "A critical release has a serious bug an hour before launch. What do you do?", None),
    ],
    QuestionCategory.PROBLEM_SOLVING: [
        (Difficulty.EASY, "Walk me through how you would approach debugging a failing test.", None),
        (Difficulty.MEDIUM, "How would you approach estimating the number of requests a new feature will generate?", None),
        (Difficulty.HARD, "Describe your approach to breaking down an ambiguous problem with no clear owner.", None),
    ],
    QuestionCategory.COMMUNICATION: [
        (Difficulty.EASY, "Where do you see yourself in your career in the next 2-3 years?",
         "Show ambition while being realistic and relevant to the role"),
        (Difficulty.MEDIUM, "How would you explain a complex technical concept to a non-technical audience?", None),
        (Difficulty.HARD, "Describe how you communicate bad news to a client or senior manager.", None),
    ],
    QuestionCategory.CODING: [
        (Difficulty.EASY, "How would you reverse a linked list, and what is the complexity of your approach?", None),
        (Difficulty.MEDIUM, "How would you implement an LRU cache?", None),
        (Difficulty.HARD, "How would you find the longest palindromic substring in a string efficiently?", None),
    ],
    QuestionCategory.ALGORITHMS: [
        (Difficulty.EASY, "Explain the difference between breadth-first and depth-first search.", None),
        (Difficulty.MEDIUM, "When would you use dynamic programming instead of a greedy algorithm?", None),
        (Difficulty.HARD, "Explain how you would detect a cycle in a directed graph and analyse the complexity.", None),
    ],
}

# Categories mixed together when no category is requested
MIXED_CATEGORIES: List[QuestionCategory] = [
    QuestionCategory.BEHAVIORAL,
    QuestionCategory.TECHNICAL,
    QuestionCategory.SITUATIONAL,
    QuestionCategory.PROBLEM_SOLVING,
    QuestionCategory.COMMUNICATION,
]


class StaticQuestionProvider(QuestionProvider):
    """
    :class:`QuestionProvider` backed by a fixed question bank.

    Questions matching the requested difficulty come first; the remainder is
    filled from other difficulties of the same category.
    """

    def __init__(
        self,
        bank: Optional[Dict[QuestionCategory, List[Tuple[Difficulty, str, Optional[str]]]]] = None,
        shuffle: bool = False,
        seed: Optional[int] = None,
    ):
        self.logger = logger.bind(component="static_question_provider")
        self.bank = bank if bank is not None else QUESTION_BANK
        self.shuffle = shuffle
        self._random = random.Random(seed)

    async def get_questions(
        self,
        category: Optional[QuestionCategory],
        difficulty: Difficulty,
        count: int,
    ) -> List[Question]:
        if category is not None:
            questions = self._for_category(category, difficulty)
        else:
            questions = self._mixed(difficulty)

        selected = questions[:count]
        self.logger.debug(
            "Questions selected",
            category=category.value if category else "mixed",
            difficulty=difficulty.value,
            requested=count,
            returned=len(selected),
        )
        return selected

    def _for_category(self, category: QuestionCategory, difficulty: Difficulty) -> List[Question]:
        entries = self.bank.get(category, [])
        matching = [e for e in entries if e[0] == difficulty]
        others = [e for e in entries if e[0] != difficulty]
        if self.shuffle:
            self._random.shuffle(matching)
            self._random.shuffle(others)

        return [
            Question(
                question_id=f"{category.value}-{entries.index(entry) + 1}",
                question=entry[1],
                category=category,
                difficulty=entry[0],
                tip=entry[2],
            )
            for entry in matching + others
        ]

    def _mixed(self, difficulty: Difficulty) -> List[Question]:
        per_category = [self._for_category(c, difficulty) for c in MIXED_CATEGORIES]
        mixed = []
        # Round-robin so short sessions still cover several categories
        for index in range(max((len(q) for q in per_category), default=0)):
            for questions in per_category:
                if index < len(questions):
                    mixed.append(questions[index])
        return mixed
