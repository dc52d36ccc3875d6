"""
Answer evaluator: keyword and reference-overlap scoring of a free-text answer.
"""
import logging
from typing import List, Sequence

from .models import AnswerEvaluation, EvaluationResult, ExpectedContent, QuestionNode, SignalResult
from .prompts import InterviewPrompts, NO_ANSWER_FEEDBACK
from ..config import (
    KEYWORD_WEIGHT, CONTENT_WEIGHT, CONTENT_MATCH_THRESHOLD,
    REFERENCE_WORD_MIN_LENGTH, MIN_SCORE, MAX_SCORE
)
from ..utils import round_half_up, clamp

logger = logging.getLogger("answer_evaluator")


def _reference_match_ratio(reference: str, answer_lower: str) -> float:
    """Share of the reference's longer words (4+ letters) that occur in the answer."""
    words = [word for word in reference.lower().split() if len(word) >= REFERENCE_WORD_MIN_LENGTH]
    if not words:
        return 0.0
    matched = sum(1 for word in words if word in answer_lower)
    return matched / len(words)


def keyword_component(answer_lower: str, keywords: Sequence[str]):
    """Return (points, matched keywords) for the keyword part of the score."""
    keywords = [keyword for keyword in keywords if keyword]
    if not keywords:
        return 0.0, []
    matched: List[str] = [keyword for keyword in keywords if keyword.lower() in answer_lower]
    return len(matched) * KEYWORD_WEIGHT / len(keywords), matched


def content_component(answer_lower: str, expected_content: ExpectedContent) -> float:
    """Points for overlap with the reference answers or the reference summary."""
    if isinstance(expected_content, str):
        ratio = _reference_match_ratio(expected_content, answer_lower)
        return CONTENT_WEIGHT * ratio if ratio > CONTENT_MATCH_THRESHOLD else 0.0

    references = [reference for reference in (expected_content or ()) if reference]
    points = 0.0
    for reference in references:
        ratio = _reference_match_ratio(reference, answer_lower)
        if ratio > CONTENT_MATCH_THRESHOLD:
            points += (CONTENT_WEIGHT / len(references)) * ratio
    return points


def evaluate(answer: str, expected_content: ExpectedContent, keywords: Sequence[str]) -> EvaluationResult:
    """
    Score an answer from 0 to 100.

    Keywords are worth 40 points split evenly; overlap with the expected content
    is worth 60. A question without expected content is scored on keywords alone.
    """
    if not answer or not answer.strip():
        return EvaluationResult(score=0, keywords_matched=(), feedback=NO_ANSWER_FEEDBACK)

    answer_lower = answer.lower()
    keyword_points, matched = keyword_component(answer_lower, keywords or ())
    content_points = content_component(answer_lower, expected_content)

    score = round_half_up(clamp(keyword_points + content_points, MIN_SCORE, MAX_SCORE))
    feedback = InterviewPrompts.answer_feedback(score, matched)
    return EvaluationResult(score=score, keywords_matched=tuple(matched), feedback=feedback)


def evaluate_answer(question: QuestionNode, answer: str, signals: SignalResult) -> AnswerEvaluation:
    """Build the immutable evaluation record for an answer to a question."""
    result = evaluate(answer, question.expected_content, question.keywords)
    logger.info(
        "Question %d scored %d (keywords matched: %d/%d)",
        question.id, result.score, len(result.keywords_matched), len(question.keywords)
    )
    return AnswerEvaluation(
        question_id=question.id,
        question_text=question.prompt,
        answer_text=answer or "",
        score=result.score,
        keywords_matched=result.keywords_matched,
        is_off_topic=signals.is_off_topic,
        is_low_knowledge=signals.is_low_knowledge,
        has_profanity=signals.has_profanity,
        feedback=result.feedback,
        expected_keywords=question.keywords,
    )
