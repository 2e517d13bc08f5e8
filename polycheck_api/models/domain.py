"""
Domain models for the grading service.

Submissions coming in and feedback going out.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from ..core.config import settings


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AnswerType(str, Enum):
    """Answer types with a registered evaluator"""
    POLYNOMIAL = "polynomial"
    FACTORED = "factored"


def check_answer_length(value: str) -> str:
    """Reject answers longer than the configured maximum"""
    if len(value) > settings.MAX_ANSWER_LENGTH:
        raise ValueError(
            f"Answer too long (max {settings.MAX_ANSWER_LENGTH} characters)"
        )
    return value


class AnswerSubmission(BaseModel):
    """A typed answer to grade against a correct answer"""
    answer_type: str = Field(..., description="Evaluator to use, e.g. 'polynomial' or 'factored'")
    correct_answer: str = Field(..., description="Correct answer in answer notation")
    student_answer: str = Field(..., description="Answer as typed by the student")
    submitted_at: datetime = Field(default_factory=_utcnow)

    @field_validator("correct_answer", "student_answer")
    @classmethod
    def validate_length(cls, v: str) -> str:
        return check_answer_length(v)


class AnswerFeedback(BaseModel):
    """Feedback for a single answer"""
    answer_type: str
    score: float = Field(..., ge=0.0, le=1.0)
    correct: bool
    student_answer: str
    correct_answer: str
    message: str
    messages: List[str] = Field(default_factory=list)
    preview: Optional[str] = None
    error_message: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    graded_at: datetime = Field(default_factory=_utcnow)
