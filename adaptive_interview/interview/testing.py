"""
Testing infrastructure for the interview engine: in-memory question sources,
sample question banks and evaluation builders.
"""
import copy
from typing import Dict, Any, List, Optional, Sequence

from .models import AnswerEvaluation, InterviewReport
from .question_graph import QuestionGraphStore
from ..config import RATING_EXCELLENT, RATING_GOOD, RATING_FAIR, RATING_POOR
from ..infrastructure.data import QuestionSetCache


class InMemoryQuestionSource:
    """Question source backed by a dict, with a version counter as fingerprint."""

    def __init__(self, raw_bank: Dict[str, Any]):
        self.raw_bank = raw_bank
        self.version = 0
        self.load_count = 0

    def load(self) -> Dict[str, Any]:
        self.load_count += 1
        return copy.deepcopy(self.raw_bank)

    def fingerprint(self) -> int:
        return self.version

    def replace(self, raw_bank: Dict[str, Any]) -> None:
        """Swap the bank contents, as an edited file would."""
        self.raw_bank = raw_bank
        self.version += 1


def create_test_question_bank() -> Dict[str, Any]:
    """A small bank exercising every kind of out-edge."""
    return {
        "backend": {
            "beginner": [
                {
                    "id": 1,
                    "question": "What is an API and how does it work?",
                    "keywords": ["API", "interface", "request", "response"],
                    "expectedAnswers": [
                        "An API is an interface that lets programs communicate through requests and responses",
                    ],
                    "routeKeywords": {"API": 3},
                    "defaultNextQuestionId": 2,
                },
                {
                    "id": 2,
                    "question": "Explain the difference between SQL and NoSQL databases.",
                    "keywords": ["relational", "schema", "document", "scalability"],
                    "expectedAnswer": "SQL databases are relational with a fixed schema while NoSQL stores documents",
                },
                {
                    "id": 3,
                    "question": "What are HTTP status codes used for?",
                    "keywords": ["status", "client", "server", "error"],
                    "expectedAnswers": [
                        "Status codes tell the client whether the server handled the request",
                        "Codes in the 400 range are client errors and 500 range are server errors",
                    ],
                },
            ],
            "intermediate": [
                {
                    "id": 1,
                    "question": "How would you design caching for a read-heavy service?",
                    "keywords": ["cache", "invalidation", "redis", "ttl"],
                    "expectedAnswers": ["Put a cache such as redis in front of the database with a ttl"],
                    "routeKeywords": {"redis": 4, "cache": 3},
                    "defaultNextQuestionId": 2,
                    "lowKnowledgePhrases": ["I don't know"],
                    "systemReplyOnLowKnowledge": "No problem, let's move on to something else.",
                },
                {
                    "id": 2,
                    "question": "Describe how database indexing improves query performance.",
                    "keywords": ["index", "b-tree", "lookup"],
                    "defaultNextQuestionId": None,
                },
                {
                    "id": 3,
                    "question": "What cache eviction policies do you know?",
                    "keywords": ["lru", "lfu", "fifo"],
                },
                {
                    "id": 4,
                    "question": "How does Redis persist data to disk?",
                    "keywords": ["rdb", "aof", "snapshot"],
                    "expectedAnswer": "Redis writes snapshots with rdb and appends commands to the aof log",
                },
                {
                    "id": 5,
                    "question": "What is eventual consistency?",
                    "keywords": ["replica", "consistency", "convergence"],
                    "lowKnowledgePhrases": ["no idea"],
                    "systemReplyOnLowKnowledge": "That's fine, this one is advanced.",
                    "defaultNextQuestionId": None,
                },
            ],
        },
        "frontend": {
            "beginner": [
                {
                    "id": 1,
                    "question": "What is the virtual DOM?",
                    "keywords": ["dom", "diff", "render"],
                },
            ],
        },
    }


def create_test_store(raw_bank: Optional[Dict[str, Any]] = None) -> QuestionGraphStore:
    """Graph store over an in-memory bank (the sample bank by default)."""
    source = InMemoryQuestionSource(raw_bank if raw_bank is not None else create_test_question_bank())
    return QuestionGraphStore(QuestionSetCache(source))


def make_evaluation(question_id: int = 1, score: int = 50,
                    question_text: str = "What is an API and how does it work?",
                    keywords_matched: Sequence[str] = (), expected_keywords: Sequence[str] = (),
                    is_off_topic: bool = False, is_low_knowledge: bool = False,
                    has_profanity: bool = False, answer_text: str = "answer",
                    feedback: str = "") -> AnswerEvaluation:
    """Build an evaluation record with sensible defaults."""
    return AnswerEvaluation(
        question_id=question_id,
        question_text=question_text,
        answer_text=answer_text,
        score=score,
        keywords_matched=tuple(keywords_matched),
        is_off_topic=is_off_topic,
        is_low_knowledge=is_low_knowledge,
        has_profanity=has_profanity,
        feedback=feedback,
        expected_keywords=tuple(expected_keywords),
    )


class ReportValidator:
    """Helper for checking report invariants."""

    @staticmethod
    def validate_report(report: InterviewReport) -> List[str]:
        """
        Validate an interview report and return the issues found.

        Returns:
            List of validation error messages (empty if valid)
        """
        issues = []

        if report.questions_answered != report.total_questions:
            issues.append("questions_answered differs from total_questions")

        if not (0 <= report.average_score <= 100):
            issues.append(f"Average score out of range: {report.average_score}")

        if not (0 <= report.keyword_accuracy <= 100):
            issues.append(f"Keyword accuracy out of range: {report.keyword_accuracy}")

        if report.overall_rating not in (RATING_EXCELLENT, RATING_GOOD, RATING_FAIR, RATING_POOR):
            issues.append(f"Unknown rating: {report.overall_rating}")

        for name in ("off_topic_count", "low_knowledge_count", "profanity_count"):
            value = getattr(report, name)
            if not (0 <= value <= report.total_questions):
                issues.append(f"{name} out of range: {value}")

        if len(set(report.topics_to_cover)) != len(report.topics_to_cover):
            issues.append("Duplicate topics to cover")

        if len(report.detailed_analysis) != report.total_questions:
            issues.append("Detailed analysis does not cover every answer")

        return issues

    @staticmethod
    def assert_valid_report(report: InterviewReport) -> None:
        """Assert that the report is valid, raising AssertionError if not."""
        issues = ReportValidator.validate_report(report)
        if issues:
            raise AssertionError(f"Invalid interview report: {'; '.join(issues)}")
