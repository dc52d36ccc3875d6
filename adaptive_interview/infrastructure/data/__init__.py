"""
Data management infrastructure for question banks.
"""

from .question_sets import JsonFileQuestionSource, QuestionSetCache, QuestionBank, build_question_bank

__all__ = [
    'JsonFileQuestionSource',
    'QuestionSetCache',
    'QuestionBank',
    'build_question_bank',
]
