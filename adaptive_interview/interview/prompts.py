"""
Interview message templates.

This module contains all candidate-facing text produced by the engine (greeting,
answer feedback, report recommendations), keeping it separate from the scoring
and routing logic for easier maintenance and editing.
"""

from typing import Optional, Sequence

from ..config import (
    FEEDBACK_EXCELLENT, FEEDBACK_GOOD, FEEDBACK_FAIR, FEEDBACK_KEYWORD_EXAMPLES
)


NO_ANSWER_FEEDBACK = "No answer provided."


class InterviewPrompts:
    """Collection of all interview-related messages."""

    @staticmethod
    def greeting(user_name: Optional[str] = None,
                 domain: Optional[str] = None,
                 level: Optional[str] = None) -> str:
        """Opening message for a practice session."""
        name = f" {user_name}" if user_name else ""
        domain_text = f" for the {domain} position" if domain else ""
        level_text = f" at {level} level" if level else ""
        return (
            f"Hello{name}! Welcome to your technical interview practice session"
            f"{domain_text}{level_text}. I'll be asking you some questions today. Let's begin!"
        )

    @staticmethod
    def answer_feedback(score: int, keywords_matched: Sequence[str]) -> str:
        """Feedback tier for a score, with a few of the matched keywords as examples."""
        if score >= FEEDBACK_EXCELLENT:
            feedback = "Excellent answer! You covered the key points well."
        elif score >= FEEDBACK_GOOD:
            feedback = "Good answer! You mentioned some relevant points."
        elif score >= FEEDBACK_FAIR:
            feedback = "Your answer is on the right track, but could be more detailed."
        else:
            feedback = "Consider reviewing this topic. Your answer missed some key concepts."

        if keywords_matched:
            examples = ", ".join(list(keywords_matched)[:FEEDBACK_KEYWORD_EXAMPLES])
            feedback += f" You mentioned: {examples}."
        return feedback

    @staticmethod
    def off_topic_recommendation(count: int) -> str:
        return (
            f"You went off-topic {count} time(s). Focus on answering the specific question "
            f"asked and include relevant keywords."
        )

    @staticmethod
    def low_knowledge_recommendation(count: int) -> str:
        return (
            f"You indicated low knowledge on {count} question(s). "
            f"Consider reviewing the fundamentals of this domain."
        )

    @staticmethod
    def profanity_recommendation(count: int) -> str:
        return (
            f"Please maintain a professional tone during interviews. "
            f"Inappropriate language was detected {count} time(s)."
        )

    @staticmethod
    def keyword_accuracy_recommendation(accuracy: int) -> str:
        return (
            f"Your answers lacked relevant keywords (keyword accuracy {accuracy}%). "
            f"Try to include technical terms and concepts related to the questions."
        )

    @staticmethod
    def low_score_recommendation(average_score: int) -> str:
        return (
            f"Your average score was {average_score}%. "
            f"Focus on providing more detailed and accurate answers."
        )

    @staticmethod
    def high_score_recommendation(average_score: int) -> str:
        return f"Great job! You scored {average_score}% on average. Keep up the good work!"
