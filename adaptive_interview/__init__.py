"""
Adaptive interview question engine.

A per-domain, per-level graph of interview questions where the next question
is picked from keywords in the candidate's answer, with answer scoring, signal
detection and an end-of-interview performance report.
"""

__version__ = "1.0.0"

# Main entry points
from .interview.orchestrator import InterviewEngine
from .interview.models import AnswerEvaluation, InterviewReport, QuestionNode
from .errors import InterviewEngineError, QuestionSetSourceError

__all__ = [
    "InterviewEngine", "AnswerEvaluation", "InterviewReport", "QuestionNode",
    "InterviewEngineError", "QuestionSetSourceError",
]
