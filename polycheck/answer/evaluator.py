"""
Base answer evaluator framework.

Provides abstract base class for answer evaluators and a registry
for type-based dispatch.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from .answer_hash import AnswerResult


class AnswerEvaluator(BaseModel, ABC):
    """
    Abstract base class for answer evaluators.

    Each evaluator checks typed answers of one kind (expanded polynomial,
    factored polynomial) against a correct answer given as a string in the
    same notation the student types.

    Subclasses must implement:
    - evaluate(): Core evaluation logic
    - answer_type: Class variable for type identification
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    answer_type: ClassVar[str] = "unknown"

    correct_answer: str = Field(description="The correct answer, in answer notation")

    @abstractmethod
    def evaluate(self, student_answer: str) -> AnswerResult:
        """
        Evaluate student's answer against correct answer.

        Args:
            student_answer: Student's answer (as typed)

        Returns:
            AnswerResult with score, messages, etc.
        """

    def blank_result(self, student_answer: str) -> AnswerResult:
        """Result for an empty submission."""
        return AnswerResult.answer_incorrect(
            student_answer,
            self.get_correct_answer_display(),
            answer_type=self.answer_type,
            message="No answer was entered",
        )

    def get_correct_answer_display(self) -> str:
        """
        Get display string for correct answer.

        Returns:
            String representation of correct answer
        """
        return self.correct_answer


class EvaluatorRegistry(BaseModel):
    """
    Registry for answer evaluators.

    Provides type-based dispatch to appropriate evaluator.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    _evaluators: dict[str, type[AnswerEvaluator]] = PrivateAttr(default_factory=dict)

    def register(
        self, answer_type: str, evaluator_class: type[AnswerEvaluator]
    ) -> None:
        """
        Register an evaluator for a specific answer type.

        Args:
            answer_type: Type identifier (e.g., "polynomial", "factored")
            evaluator_class: Evaluator class to use for this type

        Raises:
            TypeError: If evaluator_class is not an AnswerEvaluator subclass
        """
        if not (isinstance(evaluator_class, type) and issubclass(evaluator_class, AnswerEvaluator)):
            raise TypeError(f"evaluator_class must be a subclass of AnswerEvaluator, got {evaluator_class}")
        self._evaluators[answer_type] = evaluator_class

    def get_evaluator(self, answer_type: str) -> type[AnswerEvaluator] | None:
        """
        Get evaluator class for an answer type.

        Returns:
            Evaluator class, or None if not found
        """
        return self._evaluators.get(answer_type)

    def create_evaluator(
        self,
        answer_type: str,
        correct_answer: str,
        **options: Any,
    ) -> AnswerEvaluator:
        """
        Create evaluator instance for an answer type.

        Args:
            answer_type: Type identifier
            correct_answer: Correct answer
            **options: Evaluator-specific options

        Returns:
            Evaluator instance

        Raises:
            ValueError: If answer type not registered
        """
        evaluator_class = self.get_evaluator(answer_type)
        if evaluator_class is None:
            raise ValueError(f"No evaluator registered for type: {answer_type}")

        return evaluator_class(correct_answer=correct_answer, **options)

    def get_registered_types(self) -> list[str]:
        """Get list of all registered answer types."""
        return list(self._evaluators.keys())


# Global registry instance
_global_registry = EvaluatorRegistry()


def register_evaluator(
    answer_type: str, evaluator_class: type[AnswerEvaluator]
) -> None:
    """Register an evaluator in the global registry."""
    _global_registry.register(answer_type, evaluator_class)


def get_evaluator(answer_type: str) -> type[AnswerEvaluator] | None:
    """Get evaluator from global registry."""
    return _global_registry.get_evaluator(answer_type)


def create_evaluator(
    answer_type: str, correct_answer: str, **options: Any
) -> AnswerEvaluator:
    """
    Create evaluator instance from global registry.

    Raises:
        ValueError: If answer type not registered
    """
    return _global_registry.create_evaluator(answer_type, correct_answer, **options)


def get_registered_types() -> list[str]:
    """Answer types known to the global registry."""
    return _global_registry.get_registered_types()
