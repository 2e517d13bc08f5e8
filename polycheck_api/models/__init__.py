"""Domain models package"""

from .domain import AnswerFeedback, AnswerSubmission, AnswerType, check_answer_length

__all__ = [
    "AnswerFeedback",
    "AnswerSubmission",
    "AnswerType",
    "check_answer_length",
]
