"""
Interview report aggregation.
Turns the evaluations of one interview into summary statistics, a rating,
recommendations and topics to revisit.
"""
import math
import re
import logging
from typing import List, Optional, Sequence, Tuple

from .models import AnswerAnalysis, AnswerEvaluation, InterviewReport
from .prompts import InterviewPrompts
from ..config import (
    RATING_THRESHOLDS, RATING_POOR, LOW_SCORE_THRESHOLD, HIGH_SCORE_THRESHOLD,
    LOW_KEYWORD_ACCURACY, TOPIC_FALLBACK_THRESHOLD, TOPIC_WORD_MIN_LENGTH,
    TOPIC_STOP_WORDS, GENERIC_TOPIC
)
from ..utils import round_half_up

logger = logging.getLogger("interview_analysis")

_PUNCTUATION = re.compile(r"^[^\w]+|[^\w]+$")


def _safe_score(evaluation: AnswerEvaluation) -> float:
    try:
        score = float(evaluation.score)
    except (TypeError, ValueError):
        return 0.0
    return score if math.isfinite(score) else 0.0


def answer_keyword_accuracy(evaluation: AnswerEvaluation) -> int:
    """Percent of the question's keywords matched by one answer."""
    matched = len(evaluation.keywords_matched or ())
    expected = len(evaluation.expected_keywords or ())
    if expected > 0:
        return round_half_up(100 * min(matched, expected) / expected)
    return 100 if matched > 0 else 0


def rate_interview(average_score: int, keyword_accuracy: int, off_topic_count: int) -> str:
    """First matching row of the rating table wins."""
    for min_score, min_accuracy, max_off_topic, rating in RATING_THRESHOLDS:
        if average_score < min_score or keyword_accuracy < min_accuracy:
            continue
        if max_off_topic is not None and off_topic_count > max_off_topic:
            continue
        return rating
    return RATING_POOR


def extract_topic(question_text: str) -> Optional[str]:
    """First important word of a question (5+ letters, not a stop word), capitalized."""
    for raw_word in (question_text or "").lower().split():
        word = _PUNCTUATION.sub("", raw_word)
        if len(word) >= TOPIC_WORD_MIN_LENGTH and word not in TOPIC_STOP_WORDS:
            return word.capitalize()
    return None


class ReportAggregator:
    """Computes an InterviewReport from a sequence of evaluations."""

    def aggregate(self, evaluations: Sequence[AnswerEvaluation],
                  role: Optional[str] = None) -> InterviewReport:
        """
        Build the report for one interview.

        The input is never mutated and the same input always gives an equal
        report. Empty input gives an all-zero "Poor" report.

        Args:
            evaluations: Evaluations in the order the questions were answered
            role: Declared role or domain, used as the fallback topic
        """
        evaluations = tuple(evaluation for evaluation in (evaluations or ()) if evaluation is not None)
        total = len(evaluations)

        average_score = round_half_up(sum(_safe_score(e) for e in evaluations) / total) if total else 0
        off_topic_count = sum(1 for e in evaluations if e.is_off_topic)
        low_knowledge_count = sum(1 for e in evaluations if e.is_low_knowledge)
        profanity_count = sum(1 for e in evaluations if e.has_profanity)

        on_target = sum(
            1 for e in evaluations
            if e.keywords_matched and not e.is_off_topic and not e.is_low_knowledge
        )
        keyword_accuracy = round_half_up(100 * on_target / total) if total else 0

        overall_rating = rate_interview(average_score, keyword_accuracy, off_topic_count)

        recommendations = self._recommendations(
            average_score, keyword_accuracy, off_topic_count, low_knowledge_count, profanity_count
        )
        topics = self._topics_to_cover(evaluations, average_score, role)

        report = InterviewReport(
            total_questions=total,
            questions_answered=total,
            average_score=average_score,
            off_topic_count=off_topic_count,
            low_knowledge_count=low_knowledge_count,
            profanity_count=profanity_count,
            keyword_accuracy=keyword_accuracy,
            overall_rating=overall_rating,
            recommendations=recommendations,
            topics_to_cover=topics,
            detailed_analysis=tuple(
                AnswerAnalysis(evaluation=e, accuracy=answer_keyword_accuracy(e)) for e in evaluations
            ),
        )
        logger.info(
            f"Report: {total} answers, average {average_score}, "
            f"keyword accuracy {keyword_accuracy}%, rating {overall_rating}"
        )
        return report

    def _recommendations(self, average_score: int, keyword_accuracy: int, off_topic_count: int,
                         low_knowledge_count: int, profanity_count: int) -> Tuple[str, ...]:
        recommendations: List[str] = []

        if off_topic_count > 0:
            recommendations.append(InterviewPrompts.off_topic_recommendation(off_topic_count))
        if low_knowledge_count > 0:
            recommendations.append(InterviewPrompts.low_knowledge_recommendation(low_knowledge_count))
        if profanity_count > 0:
            recommendations.append(InterviewPrompts.profanity_recommendation(profanity_count))
        if keyword_accuracy < LOW_KEYWORD_ACCURACY:
            recommendations.append(InterviewPrompts.keyword_accuracy_recommendation(keyword_accuracy))

        if average_score < LOW_SCORE_THRESHOLD:
            recommendations.append(InterviewPrompts.low_score_recommendation(average_score))
        elif average_score >= HIGH_SCORE_THRESHOLD:
            recommendations.append(InterviewPrompts.high_score_recommendation(average_score))

        return tuple(recommendations)

    def _topics_to_cover(self, evaluations: Sequence[AnswerEvaluation], average_score: int,
                         role: Optional[str]) -> Tuple[str, ...]:
        topics: List[str] = []
        for evaluation in evaluations:
            if _safe_score(evaluation) >= LOW_SCORE_THRESHOLD or evaluation.is_off_topic:
                continue
            topic = extract_topic(evaluation.question_text)
            if topic and topic not in topics:
                topics.append(topic)

        if not topics and average_score < TOPIC_FALLBACK_THRESHOLD:
            topics.append(role.strip() if role and role.strip() else GENERIC_TOPIC)

        return tuple(topics)


def aggregate(evaluations: Sequence[AnswerEvaluation], role: Optional[str] = None) -> InterviewReport:
    """Module-level shortcut for ReportAggregator().aggregate."""
    return ReportAggregator().aggregate(evaluations, role)
