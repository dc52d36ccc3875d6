"""
Routing decision engine: picks the next question from the candidate's answer.
"""
import re
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .models import QuestionNode, DefaultNextKind
from .question_graph import QuestionGraphStore, find_question
from .signals import detect_low_knowledge

logger = logging.getLogger("decision_engine")


class RoutingReason(str, Enum):
    """Why the resolver picked (or did not pick) the next question."""
    NOT_FOUND = "not_found"
    LOW_KNOWLEDGE = "low_knowledge"
    KEYWORD_ROUTE = "keyword_route"
    DEFAULT_NEXT = "default_next"
    END_INTERVIEW = "end_interview"
    SEQUENTIAL = "sequential"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class RoutingDecision:
    """Result of resolving the next question."""
    next_question: Optional[QuestionNode]
    is_low_knowledge: bool = False
    low_knowledge_reply: Optional[str] = None
    reason: RoutingReason = RoutingReason.EXHAUSTED
    matched_trigger: Optional[str] = None

    @property
    def is_finished(self) -> bool:
        """True when there is no next question."""
        return self.next_question is None


def trigger_matches(trigger: str, answer: str) -> bool:
    """Whole word/phrase or plain substring match, case-insensitive."""
    trigger_lower = trigger.strip().lower()
    if not trigger_lower:
        return False
    answer_lower = answer.lower()
    pattern = r"\b" + re.escape(trigger_lower) + r"\b"
    return re.search(pattern, answer_lower) is not None or trigger_lower in answer_lower


class RoutingResolver:
    """
    Decides the next question in strict priority order: low-knowledge reply,
    keyword routing triggers, the node's default edge, then list order.

    Holds no state of its own; the same inputs always give the same decision.
    Profanity never influences routing.
    """

    def __init__(self, store: QuestionGraphStore):
        self.store = store

    def resolve(self, domain: str, level: str, current_id: int, answer: str) -> RoutingDecision:
        """
        Resolve the question that follows current_id for the given answer.

        Args:
            domain: Interview domain
            level: Difficulty level
            current_id: Id of the question just answered
            answer: Candidate's raw answer text

        Returns:
            RoutingDecision, with next_question None at the end of the interview
        """
        questions = self.store.load(domain, level)
        current = find_question(questions, current_id)
        answer = answer or ""

        if current is None:
            logger.warning(f"Question {current_id} not found for {domain}/{level}")
            return RoutingDecision(None, reason=RoutingReason.NOT_FOUND)

        decision = self._low_knowledge_decision(current, questions, answer)
        if decision is not None:
            return decision

        decision = self._keyword_decision(current, questions, answer)
        if decision is not None:
            return decision

        decision = self._default_decision(current, questions)
        if decision is not None:
            return decision

        return self._sequential_decision(current, questions)

    def _low_knowledge_decision(self, current: QuestionNode, questions: List[QuestionNode],
                                answer: str) -> Optional[RoutingDecision]:
        if not current.low_knowledge_reply:
            return None
        if not detect_low_knowledge(answer, current.low_knowledge_phrases):
            return None

        default = current.default_next
        if default.kind == DefaultNextKind.END:
            logger.info(f"Low-knowledge answer to question {current.id}, ending interview")
            return RoutingDecision(
                None, is_low_knowledge=True, low_knowledge_reply=current.low_knowledge_reply,
                reason=RoutingReason.END_INTERVIEW
            )
        if default.kind == DefaultNextKind.GOTO:
            target = find_question(questions, default.target_id)
            if target is not None:
                logger.info(f"Low-knowledge answer to question {current.id} -> Question {target.id}")
                return RoutingDecision(
                    target, is_low_knowledge=True, low_knowledge_reply=current.low_knowledge_reply,
                    reason=RoutingReason.LOW_KNOWLEDGE
                )
            logger.warning(f"Default target {default.target_id} of question {current.id} does not exist")
        return None

    def _keyword_decision(self, current: QuestionNode, questions: List[QuestionNode],
                          answer: str) -> Optional[RoutingDecision]:
        if not answer.strip():
            return None
        for trigger, target_id in current.routing:
            if not trigger_matches(trigger, answer):
                continue
            # First matching trigger decides, even if its target is missing
            target = find_question(questions, target_id)
            if target is None:
                logger.warning(f"Route '{trigger}' of question {current.id} points to missing question {target_id}")
                return None
            logger.info(f"Keyword-based routing: \"{trigger}\" -> Question {target_id}")
            return RoutingDecision(target, reason=RoutingReason.KEYWORD_ROUTE, matched_trigger=trigger)
        return None

    def _default_decision(self, current: QuestionNode,
                          questions: List[QuestionNode]) -> Optional[RoutingDecision]:
        default = current.default_next
        if default.kind == DefaultNextKind.END:
            logger.info(f"Question {current.id} ends the interview")
            return RoutingDecision(None, reason=RoutingReason.END_INTERVIEW)
        if default.kind == DefaultNextKind.GOTO:
            target = find_question(questions, default.target_id)
            if target is not None:
                logger.info(f"Using default next question: {default.target_id}")
                return RoutingDecision(target, reason=RoutingReason.DEFAULT_NEXT)
            logger.warning(f"Default target {default.target_id} of question {current.id} does not exist")
        return None

    def _sequential_decision(self, current: QuestionNode,
                             questions: List[QuestionNode]) -> RoutingDecision:
        index = questions.index(current)
        if index + 1 < len(questions):
            return RoutingDecision(questions[index + 1], reason=RoutingReason.SEQUENTIAL)
        return RoutingDecision(None, reason=RoutingReason.EXHAUSTED)

