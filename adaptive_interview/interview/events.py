"""
Event-driven notifications for the interview engine.
"""
import logging
from abc import ABC
from typing import Dict, Any, List, Callable, Optional
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger("events")


class EventType(str, Enum):
    """Types of interview events."""
    INTERVIEW_STARTED = "interview_started"
    ANSWER_EVALUATED = "answer_evaluated"
    SIGNAL_DETECTED = "signal_detected"
    QUESTION_ROUTED = "question_routed"
    INTERVIEW_COMPLETED = "interview_completed"
    REPORT_GENERATED = "report_generated"


@dataclass
class InterviewEvent(ABC):
    """Base class for all interview events."""
    event_type: EventType
    conversation_id: str
    timestamp: float
    data: Dict[str, Any]


@dataclass
class InterviewStartedEvent(InterviewEvent):
    """Event fired when the first question is handed out."""
    def __init__(self, conversation_id: str, timestamp: float, domain: str, level: str,
                 first_question_id: Optional[int]):
        super().__init__(
            event_type=EventType.INTERVIEW_STARTED,
            conversation_id=conversation_id,
            timestamp=timestamp,
            data={
                "domain": domain,
                "level": level,
                "first_question_id": first_question_id
            }
        )


@dataclass
class AnswerEvaluatedEvent(InterviewEvent):
    """Event fired when an answer has been scored."""
    def __init__(self, conversation_id: str, timestamp: float, question_id: int,
                 score: int, keywords_matched: List[str]):
        super().__init__(
            event_type=EventType.ANSWER_EVALUATED,
            conversation_id=conversation_id,
            timestamp=timestamp,
            data={
                "question_id": question_id,
                "score": score,
                "keywords_matched": keywords_matched
            }
        )


@dataclass
class SignalDetectedEvent(InterviewEvent):
    """Event fired when profanity, low knowledge or off-topic drift is detected."""
    def __init__(self, conversation_id: str, timestamp: float, question_id: int,
                 has_profanity: bool, is_low_knowledge: bool, is_off_topic: bool):
        super().__init__(
            event_type=EventType.SIGNAL_DETECTED,
            conversation_id=conversation_id,
            timestamp=timestamp,
            data={
                "question_id": question_id,
                "has_profanity": has_profanity,
                "is_low_knowledge": is_low_knowledge,
                "is_off_topic": is_off_topic
            }
        )


@dataclass
class QuestionRoutedEvent(InterviewEvent):
    """Event fired when the next question has been resolved."""
    def __init__(self, conversation_id: str, timestamp: float, from_question_id: int,
                 to_question_id: Optional[int], reason: str, matched_trigger: Optional[str]):
        super().__init__(
            event_type=EventType.QUESTION_ROUTED,
            conversation_id=conversation_id,
            timestamp=timestamp,
            data={
                "from_question_id": from_question_id,
                "to_question_id": to_question_id,
                "reason": reason,
                "matched_trigger": matched_trigger
            }
        )


@dataclass
class InterviewCompletedEvent(InterviewEvent):
    """Event fired when routing reaches the end of the interview."""
    def __init__(self, conversation_id: str, timestamp: float, last_question_id: int, reason: str):
        super().__init__(
            event_type=EventType.INTERVIEW_COMPLETED,
            conversation_id=conversation_id,
            timestamp=timestamp,
            data={
                "last_question_id": last_question_id,
                "reason": reason
            }
        )


@dataclass
class ReportGeneratedEvent(InterviewEvent):
    """Event fired when a report has been aggregated."""
    def __init__(self, conversation_id: str, timestamp: float, questions_answered: int,
                 average_score: int, overall_rating: str):
        super().__init__(
            event_type=EventType.REPORT_GENERATED,
            conversation_id=conversation_id,
            timestamp=timestamp,
            data={
                "questions_answered": questions_answered,
                "average_score": average_score,
                "overall_rating": overall_rating
            }
        )


EventHandler = Callable[[InterviewEvent], None]


class InterviewEventBus:
    """
    In-process publish/subscribe hub for engine notifications.

    Handlers run synchronously in subscription order, type-specific handlers
    before global ones. A handler that raises is logged and skipped.
    """

    def __init__(self):
        self._handlers: Dict[EventType, List[EventHandler]] = {}
        self._global_handlers: List[EventHandler] = []

    def subscribe(self, event_type: EventType, handler: EventHandler) -> None:
        """
        Register a handler for one event type.

        Args:
            event_type: Type of event to listen for
            handler: Called with the event each time one of that type is emitted
        """
        self._handlers.setdefault(event_type, []).append(handler)
        logger.debug(f"Subscribed {_handler_name(handler)} to {event_type.value}")

    def subscribe_all(self, handler: EventHandler) -> None:
        """Register a handler for every event type."""
        self._global_handlers.append(handler)
        logger.debug(f"Subscribed {_handler_name(handler)} to all events")

    def unsubscribe(self, event_type: EventType, handler: EventHandler) -> None:
        """Remove a type-specific handler; unknown handlers are ignored with a warning."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)
            logger.debug(f"Unsubscribed {_handler_name(handler)} from {event_type.value}")
        else:
            logger.warning(f"{_handler_name(handler)} is not subscribed to {event_type.value}")

    def unsubscribe_all(self, handler: EventHandler) -> None:
        """Remove a global handler."""
        if handler in self._global_handlers:
            self._global_handlers.remove(handler)

    def handler_count(self, event_type: Optional[EventType] = None) -> int:
        """Number of handlers that would receive an event of the given type."""
        if event_type is None:
            return len(self._global_handlers)
        return len(self._handlers.get(event_type, [])) + len(self._global_handlers)

    def emit(self, event: InterviewEvent) -> None:
        """Deliver an event to its type-specific handlers, then to global ones."""
        logger.debug(f"Emitting {event.event_type.value} for conversation {event.conversation_id!r}")
        # Snapshot so handlers may (un)subscribe while an event is delivered
        handlers = list(self._handlers.get(event.event_type, [])) + list(self._global_handlers)
        for handler in handlers:
            self._dispatch(handler, event)

    def clear_handlers(self) -> None:
        """Drop every subscription."""
        self._handlers.clear()
        self._global_handlers.clear()
        logger.debug("Cleared all event handlers")

    @staticmethod
    def _dispatch(handler: EventHandler, event: InterviewEvent) -> None:
        try:
            handler(event)
        except Exception as e:
            logger.error(f"Error in {_handler_name(handler)} handling {event.event_type.value}: {e}")


def _handler_name(handler: EventHandler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


class EventLogger:
    """Logs all events for debugging and analysis."""

    def __init__(self, log_level: int = logging.INFO):
        self.logger = logging.getLogger("event_logger")
        self.log_level = log_level

    def handle_event(self, event: InterviewEvent) -> None:
        """Log event details."""
        self.logger.log(
            self.log_level,
            f"Event: {event.event_type.value} | Conversation: {event.conversation_id} | Data: {event.data}"
        )


class InterviewMetrics:
    """Collects counters from interview events."""

    def __init__(self):
        self.reset()

    def handle_event(self, event: InterviewEvent) -> None:
        """Update metrics based on event."""
        if event.event_type == EventType.INTERVIEW_STARTED:
            self.interviews_started += 1
        elif event.event_type == EventType.ANSWER_EVALUATED:
            self.answers_evaluated += 1
        elif event.event_type == EventType.SIGNAL_DETECTED:
            self.profanity_detections += int(event.data.get("has_profanity", False))
            self.low_knowledge_detections += int(event.data.get("is_low_knowledge", False))
            self.off_topic_detections += int(event.data.get("is_off_topic", False))
        elif event.event_type == EventType.QUESTION_ROUTED:
            if event.data.get("reason") == "keyword_route":
                self.keyword_routes += 1
        elif event.event_type == EventType.INTERVIEW_COMPLETED:
            self.interviews_completed += 1
        elif event.event_type == EventType.REPORT_GENERATED:
            self.reports_generated += 1

    def get_metrics(self) -> Dict[str, int]:
        """Get current metrics snapshot."""
        return {
            "interviews_started": self.interviews_started,
            "answers_evaluated": self.answers_evaluated,
            "profanity_detections": self.profanity_detections,
            "low_knowledge_detections": self.low_knowledge_detections,
            "off_topic_detections": self.off_topic_detections,
            "keyword_routes": self.keyword_routes,
            "interviews_completed": self.interviews_completed,
            "reports_generated": self.reports_generated
        }

    def reset(self) -> None:
        """Reset all metrics to zero."""
        self.interviews_started = 0
        self.answers_evaluated = 0
        self.profanity_detections = 0
        self.low_knowledge_detections = 0
        self.off_topic_detections = 0
        self.keyword_routes = 0
        self.interviews_completed = 0
        self.reports_generated = 0
