"""
Interview Engine Configuration
==============================

This file contains ALL configuration for the adaptive interview engine.
- User settings at the top (things integrators might want to change)
- Heuristic constants at the bottom (scoring weights, vocabularies, thresholds)
"""
import os
from dataclasses import dataclass


# =============================================================================
# USER SETTINGS - Edit these to customize the engine
# =============================================================================

# Question bank (JSON: {domain: {level: [question, ...]}})
QUESTIONS_FILE = os.path.join(os.path.dirname(__file__), "data", "interview-questions.json")

# Number of questions drawn when a caller asks for a random selection
QUESTION_COUNT = 5

# Logging
LOG_FILE = "./_interviews/engine.log"
LOG_LEVEL = "INFO"


# =============================================================================
# INTERNAL CONSTANTS - Don't change these unless you know what you're doing
# =============================================================================

# Answer scoring
KEYWORD_WEIGHT = 40.0
CONTENT_WEIGHT = 60.0
CONTENT_MATCH_THRESHOLD = 0.3
REFERENCE_WORD_MIN_LENGTH = 4
MAX_SCORE = 100
MIN_SCORE = 0

# Feedback tiers (score lower bounds)
FEEDBACK_EXCELLENT = 80
FEEDBACK_GOOD = 60
FEEDBACK_FAIR = 40
FEEDBACK_KEYWORD_EXAMPLES = 3

# Signal detection
SIGNIFICANT_WORD_MIN_LENGTH = 3
OFF_TOPIC_MIN_REAL_WORDS = 6

PROFANITY_WORDS = (
    "fuck", "shit", "damn", "hell", "bitch", "ass", "bastard", "crap",
    "stupid", "idiot", "dumb", "moron", "retard", "piss",
)

ABUSIVE_PHRASES = (
    "i am angry", "you are bad", "you are stupid", "you are dumb",
    "you are wrong", "this is bad", "this is stupid", "this is dumb",
    "i hate", "i am frustrated", "this is terrible",
)

# Used when a question does not carry its own phrase list
DEFAULT_LOW_KNOWLEDGE_PHRASES = (
    "i don't know", "i don't know that", "i have no idea",
    "i'm not sure", "i'm not familiar", "i haven't learned",
    "i don't understand", "i can't answer",
)

# Phrases that turn the question back on the interviewer
META_CONVERSATION_PHRASES = (
    "can you tell me", "could you tell me", "can you explain", "could you explain",
    "what do you think", "what about you", "how about you", "tell me about yourself",
    "let's talk about", "can we talk about", "i want to talk about",
    "change the subject", "what is your name", "what's your name", "who are you",
    "how are you", "are you a robot", "are you human", "do you like",
    "why are you asking", "why do you ask",
)

# Report aggregation
RATING_EXCELLENT = "Excellent"
RATING_GOOD = "Good"
RATING_FAIR = "Fair"
RATING_POOR = "Poor"

# (min average score, min keyword accuracy, max off-topic count or None, rating)
RATING_THRESHOLDS = (
    (80, 80, 0, RATING_EXCELLENT),
    (60, 60, 1, RATING_GOOD),
    (40, 40, None, RATING_FAIR),
)

LOW_SCORE_THRESHOLD = 60
HIGH_SCORE_THRESHOLD = 80
LOW_KEYWORD_ACCURACY = 50
TOPIC_FALLBACK_THRESHOLD = 70
TOPIC_WORD_MIN_LENGTH = 5
GENERIC_TOPIC = "General technical concepts"

TOPIC_STOP_WORDS = frozenset({
    "what", "is", "are", "the", "and", "for", "with", "about", "how", "why",
})


# =============================================================================
# MAIN CONFIG OBJECT
# =============================================================================

@dataclass
class Config:
    """Main configuration object."""
    questions_file: str = QUESTIONS_FILE
    question_count: int = QUESTION_COUNT
    log_file: str = LOG_FILE
    log_level: str = LOG_LEVEL


def get_config() -> Config:
    """Load configuration, letting environment variables override the defaults."""
    questions_file = os.getenv("INTERVIEW_QUESTIONS_FILE") or QUESTIONS_FILE
    log_file = os.getenv("INTERVIEW_LOG_FILE") or LOG_FILE
    log_level = (os.getenv("INTERVIEW_LOG_LEVEL") or LOG_LEVEL).upper()

    raw_count = os.getenv("INTERVIEW_QUESTION_COUNT")
    question_count = QUESTION_COUNT
    if raw_count:
        try:
            question_count = int(raw_count)
        except ValueError:
            raise ValueError(f"INTERVIEW_QUESTION_COUNT must be an integer, got {raw_count!r}")
        if question_count <= 0:
            raise ValueError("INTERVIEW_QUESTION_COUNT must be positive")

    return Config(
        questions_file=questions_file,
        question_count=question_count,
        log_file=log_file,
        log_level=log_level,
    )
