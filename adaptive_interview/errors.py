"""
Exception types raised by the interview engine.

Only an unreadable question bank propagates to callers; malformed question
definitions are caught by the set parser and skipped.
"""


class InterviewEngineError(Exception):
    """Base class for interview engine errors."""
    pass


class QuestionSetSourceError(InterviewEngineError):
    """Raised when the question bank cannot be read or decoded."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load question bank from {path}: {reason}")


class QuestionDefinitionError(InterviewEngineError):
    """Raised when a single question definition is unusable."""
    pass
