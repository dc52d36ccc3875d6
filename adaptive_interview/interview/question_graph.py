"""
Question graph store: lookup of question nodes per (domain, level).
"""
import logging
import random
from typing import List, Optional

from .models import QuestionNode
from ..infrastructure.data.question_sets import QuestionSetCache

logger = logging.getLogger("question_graph")


class QuestionGraphStore:
    """
    Read-only view over a cached question bank.

    Domain lookup is case-insensitive and tolerant: an exact key wins, otherwise
    the first stored domain where either name contains the other. Levels are
    opaque keys compared case-insensitively.
    """

    def __init__(self, cache: QuestionSetCache):
        self.cache = cache

    def load(self, domain: str, level: str) -> List[QuestionNode]:
        """
        Get the ordered question list for a domain and level.

        Returns an empty list when nothing matches. The returned list is a copy,
        callers may reorder it freely.
        """
        bank = self.cache.get_bank()
        domain_lower = (domain or "").strip().lower()
        level_lower = (level or "").strip().lower()

        if domain_lower in bank and level_lower in bank[domain_lower]:
            return list(bank[domain_lower][level_lower])

        domain_key = None
        if domain_lower:
            domain_key = next(
                (key for key in bank if domain_lower in key or key in domain_lower),
                None
            )

        if domain_key is not None and level_lower in bank[domain_key]:
            logger.debug("Domain %r resolved to %r", domain, domain_key)
            return list(bank[domain_key][level_lower])

        logger.warning(f"No questions found for domain: {domain}, level: {level}")
        return []

    def first_question(self, domain: str, level: str) -> Optional[QuestionNode]:
        questions = self.load(domain, level)
        return questions[0] if questions else None

    def find_by_id(self, domain: str, level: str, question_id: int) -> Optional[QuestionNode]:
        return find_question(self.load(domain, level), question_id)

    def next_sequential(self, domain: str, level: str, current_id: int) -> Optional[QuestionNode]:
        """The node right after current_id in list order; None if last or unknown."""
        questions = self.load(domain, level)
        for index, question in enumerate(questions):
            if question.id == current_id:
                return questions[index + 1] if index + 1 < len(questions) else None
        return None

    def select_questions(self, domain: str, level: str, count: int,
                         rng: Optional[random.Random] = None) -> List[QuestionNode]:
        """
        Draw up to count questions in random order.

        Args:
            rng: Random generator to use, pass a seeded one for reproducible draws
        """
        questions = self.load(domain, level)
        if count <= 0 or not questions:
            return []
        rng = rng or random.Random()
        return rng.sample(questions, min(count, len(questions)))

    def domains(self) -> List[str]:
        return list(self.cache.get_bank().keys())

    def levels(self, domain: str) -> List[str]:
        return list(self.cache.get_bank().get((domain or "").lower(), {}).keys())


def find_question(questions: List[QuestionNode], question_id: Optional[int]) -> Optional[QuestionNode]:
    """Look a node up by id in an ordered question list."""
    for question in questions:
        if question.id == question_id:
            return question
    return None
