"""Interview engine components.

This module contains the business logic of graph-driven interviews: the
question graph store, answer signal detection and scoring, next-question
routing and report aggregation.
"""

# Engine facade
from .orchestrator import InterviewEngine, InterviewOpening, TurnOutcome

# Data models
from .models import (
    QuestionNode, DefaultNext, DefaultNextKind, SignalResult,
    EvaluationResult, AnswerEvaluation, AnswerAnalysis, InterviewReport
)

# Question-set schemas
from .schemas import QuestionDefinition, parse_question, parse_question_set

# Components
from .question_graph import QuestionGraphStore
from .signals import detect_profanity, detect_low_knowledge, detect_off_topic, detect_signals
from .evaluator import evaluate, evaluate_answer
from .decision_engine import RoutingResolver, RoutingDecision, RoutingReason
from .analysis import ReportAggregator, aggregate
from .prompts import InterviewPrompts

# Event system
from .events import (
    InterviewEventBus, EventLogger, InterviewMetrics,
    EventType, InterviewEvent, InterviewStartedEvent,
    AnswerEvaluatedEvent, SignalDetectedEvent, QuestionRoutedEvent,
    InterviewCompletedEvent, ReportGeneratedEvent
)

__all__ = [
    # Engine
    "InterviewEngine", "InterviewOpening", "TurnOutcome",

    # Data models
    "QuestionNode", "DefaultNext", "DefaultNextKind", "SignalResult",
    "EvaluationResult", "AnswerEvaluation", "AnswerAnalysis", "InterviewReport",

    # Schemas
    "QuestionDefinition", "parse_question", "parse_question_set",

    # Components
    "QuestionGraphStore",
    "detect_profanity", "detect_low_knowledge", "detect_off_topic", "detect_signals",
    "evaluate", "evaluate_answer",
    "RoutingResolver", "RoutingDecision", "RoutingReason",
    "ReportAggregator", "aggregate",
    "InterviewPrompts",

    # Events
    "InterviewEventBus", "EventLogger", "InterviewMetrics",
    "EventType", "InterviewEvent", "InterviewStartedEvent",
    "AnswerEvaluatedEvent", "SignalDetectedEvent", "QuestionRoutedEvent",
    "InterviewCompletedEvent", "ReportGeneratedEvent",
]
