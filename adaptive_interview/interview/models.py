"""
Data models for the interview engine.
"""
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional, Dict, Any, Tuple, Union, Mapping


# A tuple of reference answers, a single reference summary, or nothing
ExpectedContent = Union[Tuple[str, ...], str, None]


class DefaultNextKind(str, Enum):
    """How a question continues when no routing trigger matches."""
    UNSET = "unset"
    END = "end"
    GOTO = "goto"


@dataclass(frozen=True)
class DefaultNext:
    """Default out-edge of a question node."""
    kind: DefaultNextKind = DefaultNextKind.UNSET
    target_id: Optional[int] = None

    @classmethod
    def unset(cls) -> 'DefaultNext':
        return cls(DefaultNextKind.UNSET)

    @classmethod
    def end(cls) -> 'DefaultNext':
        return cls(DefaultNextKind.END)

    @classmethod
    def goto(cls, target_id: int) -> 'DefaultNext':
        return cls(DefaultNextKind.GOTO, target_id)

    @property
    def is_unset(self) -> bool:
        return self.kind == DefaultNextKind.UNSET

    @property
    def is_end(self) -> bool:
        return self.kind == DefaultNextKind.END


@dataclass(frozen=True)
class QuestionNode:
    """One interview question within a domain/level question set."""
    id: int
    prompt: str
    keywords: Tuple[str, ...] = ()
    expected_content: ExpectedContent = None
    routing: Tuple[Tuple[str, int], ...] = ()
    default_next: DefaultNext = field(default_factory=DefaultNext.unset)
    low_knowledge_phrases: Tuple[str, ...] = ()
    low_knowledge_reply: Optional[str] = None
    follow_up: Optional[str] = None


@dataclass(frozen=True)
class SignalResult:
    """Signals detected in a single answer. Never persisted by the engine."""
    has_profanity: bool = False
    is_low_knowledge: bool = False
    is_off_topic: bool = False


@dataclass(frozen=True)
class EvaluationResult:
    """Raw output of the answer evaluator."""
    score: int
    keywords_matched: Tuple[str, ...]
    feedback: str


def _as_int(value: Any, default: int = 0) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default


def _as_str_tuple(value: Any) -> Tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(str(item) for item in value if item is not None)


@dataclass(frozen=True)
class AnswerEvaluation:
    """One scored answer. Created once per submission, immutable thereafter."""
    question_id: int
    question_text: str
    answer_text: str
    score: int
    keywords_matched: Tuple[str, ...] = ()
    is_off_topic: bool = False
    is_low_knowledge: bool = False
    has_profanity: bool = False
    feedback: str = ""
    expected_keywords: Tuple[str, ...] = ()

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> 'AnswerEvaluation':
        """
        Rebuild an evaluation from loosely-typed stored data.

        Accepts both snake_case and camelCase keys. Missing or malformed values
        fall back to empty defaults instead of raising.
        """
        def pick(*keys, default=None):
            for key in keys:
                if key in record and record[key] is not None:
                    return record[key]
            return default

        return cls(
            question_id=_as_int(pick("question_id", "questionId")),
            question_text=str(pick("question_text", "questionText", "question", default="")),
            answer_text=str(pick("answer_text", "answerText", "answer", default="")),
            score=_as_int(pick("score")),
            keywords_matched=_as_str_tuple(pick("keywords_matched", "keywordsMatched")),
            is_off_topic=bool(pick("is_off_topic", "isOffTopic", default=False)),
            is_low_knowledge=bool(pick("is_low_knowledge", "isLowKnowledge", default=False)),
            has_profanity=bool(pick("has_profanity", "hasProfanity", default=False)),
            feedback=str(pick("feedback", default="")),
            expected_keywords=_as_str_tuple(pick("expected_keywords", "expectedKeywords")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class AnswerAnalysis:
    """An evaluation plus its per-answer keyword accuracy, for the detailed report."""
    evaluation: AnswerEvaluation
    accuracy: int


@dataclass(frozen=True)
class InterviewReport:
    """Aggregate derived from a sequence of evaluations. Recomputed on every request."""
    total_questions: int = 0
    questions_answered: int = 0
    average_score: int = 0
    off_topic_count: int = 0
    low_knowledge_count: int = 0
    profanity_count: int = 0
    keyword_accuracy: int = 0
    overall_rating: str = "Poor"
    recommendations: Tuple[str, ...] = ()
    topics_to_cover: Tuple[str, ...] = ()
    detailed_analysis: Tuple[AnswerAnalysis, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
