"""
Answer result data structure.

This module provides the AnswerResult class which encapsulates the result
of grading one typed answer, including:
- Correctness score (0.0 to 1.0)
- Student/correct answers and a LaTeX preview of what was understood
- Feedback messages
- Parse errors ("could not parse answer")
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, StrictBool, field_validator


class AnswerResult(BaseModel):
    """
    Result of answer evaluation.

    Attributes:
        score: Correctness score (0.0 = wrong, 1.0 = correct)
        correct: Boolean indicating if answer is considered correct
        student_answer: Student's answer as typed
        correct_answer: The correct answer (for display)
        answer_message: Primary feedback message shown to student
        messages: Additional feedback messages
        type: Answer type of the evaluator that produced this result
        preview: LaTeX rendering of the parsed student answer
        error_message: Error message if answer couldn't be evaluated
        error_flag: Boolean indicating evaluation error
        metadata: Additional data for debugging (signatures, flags)
    """

    model_config = ConfigDict(validate_assignment=True)

    score: float = 0.0
    correct: StrictBool = False

    student_answer: str = ""
    correct_answer: str = ""

    answer_message: str = ""
    messages: list[str] = []

    type: str = "unknown"
    preview: str = ""

    error_message: str = ""
    error_flag: bool = False

    metadata: dict[str, Any] = {}

    def model_post_init(self, __context: Any) -> None:
        """Sync the correct flag with the score."""
        if self.score >= 1.0:
            self.correct = True
        elif self.score <= 0.0:
            self.correct = False

    @field_validator("score", mode="before")
    @classmethod
    def validate_score(cls, v: Any) -> float:
        """Validate score is in valid range."""
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("score must be numeric")
        if v < 0.0 or v > 1.0:
            raise ValueError("score must be between 0.0 and 1.0")
        return float(v)

    @field_validator("messages", mode="before")
    @classmethod
    def validate_messages(cls, v: Any) -> list[str]:
        if v is None:
            return []
        if not isinstance(v, list):
            raise ValueError("messages must be a list")
        return v

    def add_message(self, message: str) -> None:
        """Add a feedback message (blank and duplicate messages are ignored)."""
        if message and message.strip() and message not in self.messages:
            self.messages = [*self.messages, message]

    def set_error(self, error: str) -> None:
        """Mark answer as having an error."""
        self.error_flag = True
        self.error_message = error
        self.answer_message = error
        self.score = 0.0
        self.correct = False

    def is_correct(self, threshold: float = 1.0) -> bool:
        """
        Check if answer is correct based on score threshold.

        Args:
            threshold: Minimum score to be considered correct (default 1.0)

        Returns:
            True if score >= threshold
        """
        return self.score >= threshold

    def is_blank(self) -> bool:
        """Check if student answer is blank."""
        return not self.student_answer.strip()

    @classmethod
    def answer_correct(
        cls,
        student_ans: str,
        correct_ans: str,
        answer_type: str = "unknown",
        message: str = "",
    ) -> AnswerResult:
        """Create a correct answer result (convenience factory)."""
        return cls(
            score=1.0,
            correct=True,
            student_answer=student_ans,
            correct_answer=correct_ans,
            type=answer_type,
            answer_message=message or "Correct!",
        )

    @classmethod
    def answer_incorrect(
        cls,
        student_ans: str,
        correct_ans: str,
        answer_type: str = "unknown",
        message: str = "",
    ) -> AnswerResult:
        """Create an incorrect answer result (convenience factory)."""
        return cls(
            score=0.0,
            correct=False,
            student_answer=student_ans,
            correct_answer=correct_ans,
            type=answer_type,
            answer_message=message or "Incorrect.",
        )

    @classmethod
    def answer_error(
        cls,
        student_ans: str,
        correct_ans: str,
        error: str,
        answer_type: str = "unknown",
    ) -> AnswerResult:
        """Create an error answer result (convenience factory)."""
        result = cls(
            student_answer=student_ans,
            correct_answer=correct_ans,
            type=answer_type,
        )
        result.set_error(error)
        return result
