"""Infrastructure components for the adaptive interview engine.

This module contains the low-level pieces that touch external resources,
currently only the question bank source and its cache.
"""

from .data import JsonFileQuestionSource, QuestionSetCache

__all__ = ["JsonFileQuestionSource", "QuestionSetCache"]
