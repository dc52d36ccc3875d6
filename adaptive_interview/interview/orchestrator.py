"""
Interview engine facade wiring the graph store, detectors, evaluator, router
and report aggregator together.
"""
import logging
import time
from dataclasses import dataclass
from typing import Optional, List, Sequence

from .models import AnswerEvaluation, InterviewReport, QuestionNode, SignalResult
from .question_graph import QuestionGraphStore
from .signals import detect_signals
from .evaluator import evaluate_answer
from .decision_engine import RoutingResolver, RoutingDecision, RoutingReason
from .analysis import ReportAggregator
from .prompts import InterviewPrompts
from .events import (
    InterviewEventBus, EventLogger, InterviewMetrics,
    InterviewStartedEvent, AnswerEvaluatedEvent, SignalDetectedEvent,
    QuestionRoutedEvent, InterviewCompletedEvent, ReportGeneratedEvent
)
from ..infrastructure.data import JsonFileQuestionSource, QuestionSetCache
from ..config import Config, QUESTION_COUNT
from ..utils import setup_logging

logger = logging.getLogger("orchestrator")


@dataclass(frozen=True)
class InterviewOpening:
    """What the caller shows when an interview starts."""
    greeting: str
    first_question: Optional[QuestionNode]


@dataclass(frozen=True)
class TurnOutcome:
    """Everything produced by one submitted answer."""
    evaluation: Optional[AnswerEvaluation]
    signals: SignalResult
    decision: RoutingDecision

    @property
    def next_question(self) -> Optional[QuestionNode]:
        return self.decision.next_question

    @property
    def is_finished(self) -> bool:
        return self.decision.is_finished


class InterviewEngine:
    """
    Graph-driven interview engine.

    The engine keeps no per-interview state: the caller holds the current
    question id and the accumulated evaluations, and submits answers for one
    interview strictly in sequence.
    """

    def __init__(self, store: QuestionGraphStore, event_bus: Optional[InterviewEventBus] = None,
                 question_count: int = QUESTION_COUNT):
        self.store = store
        self.resolver = RoutingResolver(store)
        self.aggregator = ReportAggregator()
        self.question_count = question_count

        # Initialize event system
        self.event_bus = event_bus or InterviewEventBus()
        self.event_logger = EventLogger(logging.DEBUG)
        self.metrics = InterviewMetrics()
        self.event_bus.subscribe_all(self.event_logger.handle_event)
        self.event_bus.subscribe_all(self.metrics.handle_event)

    @classmethod
    def from_config(cls, config: Config, event_bus: Optional[InterviewEventBus] = None,
                    configure_logging: bool = False) -> 'InterviewEngine':
        """
        Build an engine over the JSON question bank named in the configuration.

        Args:
            configure_logging: Also send all logs to config.log_file at config.log_level
        """
        if configure_logging:
            setup_logging(config.log_file, config.log_level)
        cache = QuestionSetCache(JsonFileQuestionSource(config.questions_file))
        return cls(QuestionGraphStore(cache), event_bus, question_count=config.question_count)

    def start_interview(self, domain: str, level: str, user_name: Optional[str] = None,
                        conversation_id: str = "") -> InterviewOpening:
        """Greeting plus the first question of the (domain, level) set."""
        first = self.store.first_question(domain, level)
        if first is None:
            logger.warning(f"Interview for {domain}/{level} has no questions")

        self.event_bus.emit(InterviewStartedEvent(
            conversation_id, time.time(), domain, level, first.id if first else None
        ))
        return InterviewOpening(
            greeting=InterviewPrompts.greeting(user_name, domain, level),
            first_question=first,
        )

    def select_questions(self, domain: str, level: str, count: Optional[int] = None) -> List[QuestionNode]:
        """Random draw of questions for callers that run a fixed-length interview."""
        return self.store.select_questions(domain, level, self.question_count if count is None else count)

    def submit_answer(self, domain: str, level: str, question_id: int, answer: str,
                      conversation_id: str = "") -> TurnOutcome:
        """
        Process one answer: detect signals, score it and resolve the next question.

        An unknown question id yields no evaluation and a NOT_FOUND decision.
        """
        question = self.store.find_by_id(domain, level, question_id)
        if question is None:
            logger.warning(f"Answer submitted for unknown question {question_id} in {domain}/{level}")
            return TurnOutcome(
                evaluation=None,
                signals=SignalResult(),
                decision=RoutingDecision(None, reason=RoutingReason.NOT_FOUND),
            )

        signals = detect_signals(answer, question)
        evaluation = evaluate_answer(question, answer, signals)
        decision = self.resolver.resolve(domain, level, question_id, answer)

        now = time.time()
        if signals.has_profanity or signals.is_low_knowledge or signals.is_off_topic:
            self.event_bus.emit(SignalDetectedEvent(
                conversation_id, now, question_id,
                signals.has_profanity, signals.is_low_knowledge, signals.is_off_topic
            ))
        self.event_bus.emit(AnswerEvaluatedEvent(
            conversation_id, now, question_id, evaluation.score, list(evaluation.keywords_matched)
        ))
        self.event_bus.emit(QuestionRoutedEvent(
            conversation_id, now, question_id,
            decision.next_question.id if decision.next_question else None,
            decision.reason.value, decision.matched_trigger
        ))
        if decision.is_finished:
            self.event_bus.emit(InterviewCompletedEvent(
                conversation_id, now, question_id, decision.reason.value
            ))

        return TurnOutcome(evaluation=evaluation, signals=signals, decision=decision)

    def build_report(self, evaluations: Sequence[AnswerEvaluation], role: Optional[str] = None,
                     conversation_id: str = "") -> InterviewReport:
        """Aggregate the evaluations of a finished interview."""
        report = self.aggregator.aggregate(evaluations, role)
        self.event_bus.emit(ReportGeneratedEvent(
            conversation_id, time.time(), report.questions_answered,
            report.average_score, report.overall_rating
        ))
        return report
