"""
Signal detectors run over a candidate's raw answer.

All detectors are pure and case-insensitive. They are substring and word-boundary
heuristics, not language understanding, and will misfire on unusual phrasing.
"""
import re
import logging
from typing import Iterable, List, Sequence

from .models import QuestionNode, SignalResult
from ..config import (
    PROFANITY_WORDS, ABUSIVE_PHRASES, DEFAULT_LOW_KNOWLEDGE_PHRASES,
    META_CONVERSATION_PHRASES, SIGNIFICANT_WORD_MIN_LENGTH, OFF_TOPIC_MIN_REAL_WORDS
)

logger = logging.getLogger("signals")

_APOSTROPHES = str.maketrans({"’": "'", "‘": "'", "`": "'"})
_NON_WORD = re.compile(r"[^\w\s']+")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Lower-case, unify apostrophes, drop punctuation and collapse whitespace."""
    text = (text or "").translate(_APOSTROPHES).lower()
    text = _NON_WORD.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()


def contains_phrase(text: str, phrase: str) -> bool:
    """True if phrase occurs in text as a whole word or phrase (case-insensitive)."""
    phrase = phrase.strip()
    if not phrase:
        return False
    pattern = r"(?<!\w)" + re.escape(phrase) + r"(?!\w)"
    return re.search(pattern, text, re.IGNORECASE) is not None


def _real_words(text: str) -> List[str]:
    return [word for word in normalize_text(text).split() if len(word) >= SIGNIFICANT_WORD_MIN_LENGTH]


def detect_profanity(answer: str) -> bool:
    """True if a profane word or abusive phrase appears as a whole word/phrase."""
    if not answer or not answer.strip():
        return False
    text = normalize_text(answer)
    return any(contains_phrase(text, entry) for entry in PROFANITY_WORDS + ABUSIVE_PHRASES)


def _words_in_order(words: Sequence[str], answer_words: Sequence[str]) -> bool:
    position = 0
    for word in words:
        try:
            position = answer_words.index(word, position) + 1
        except ValueError:
            return False
    return True


def detect_low_knowledge(answer: str, phrases: Iterable[str]) -> bool:
    """
    True if the answer admits not knowing the topic.

    A phrase matches when the normalized answer equals it, when a single-word
    phrase appears as a whole word, or when a multi-word phrase appears as a
    substring or has all of its significant words (3+ letters) in order.
    """
    phrases = [phrase for phrase in (phrases or ()) if phrase and phrase.strip()]
    if not phrases or not answer or not answer.strip():
        return False

    answer_norm = normalize_text(answer)
    answer_words = answer_norm.split()

    for phrase in phrases:
        phrase_norm = normalize_text(phrase)
        if not phrase_norm:
            continue
        if answer_norm == phrase_norm:
            return True

        phrase_words = phrase_norm.split()
        if len(phrase_words) == 1:
            if contains_phrase(answer_norm, phrase_norm):
                return True
            continue

        if phrase_norm in answer_norm:
            return True
        significant = [word for word in phrase_words if len(word) >= SIGNIFICANT_WORD_MIN_LENGTH]
        if significant and _words_in_order(significant, answer_words):
            return True

    return False


def detect_off_topic(answer: str, keywords: Iterable[str]) -> bool:
    """
    True only for confident deflection: a long-ish answer (6+ real words) that
    hits none of the question keywords and asks the interviewer something.
    """
    keywords = [keyword for keyword in (keywords or ()) if keyword and keyword.strip()]
    if not keywords or not answer or not answer.strip():
        return False

    if len(_real_words(answer)) < OFF_TOPIC_MIN_REAL_WORDS:
        return False

    answer_lower = answer.lower()
    if any(keyword.lower() in answer_lower for keyword in keywords):
        return False

    text = normalize_text(answer)
    return any(contains_phrase(text, phrase) for phrase in META_CONVERSATION_PHRASES)


def detect_signals(answer: str, question: QuestionNode) -> SignalResult:
    """Run every detector for an answer to the given question."""
    phrases = question.low_knowledge_phrases or DEFAULT_LOW_KNOWLEDGE_PHRASES
    result = SignalResult(
        has_profanity=detect_profanity(answer),
        is_low_knowledge=detect_low_knowledge(answer, phrases),
        is_off_topic=detect_off_topic(answer, question.keywords),
    )
    if result.has_profanity or result.is_low_knowledge or result.is_off_topic:
        logger.info(f"Signals for question {question.id}: {result}")
    return result
