"""
Grading service for answer evaluation.

Wraps the polycheck parsers and evaluators, translating their failures into
service errors.
"""

import traceback

from polycheck.answer import AnswerResult, create_evaluator, get_registered_types
from polycheck.math import (
    FactoredPolynomial,
    SimplifiedPolynomial,
    are_factored_polynomials_equal,
)
from polycheck.parser import FactorParseError, parse_factored_latex, parse_latex_polynomial

from ..core.config import settings
from ..core.errors import AnswerParseError, GradingError, UnsupportedAnswerTypeError
from ..core.logging import get_logger
from ..models.domain import AnswerFeedback, AnswerSubmission, AnswerType

logger = get_logger(__name__)


class GradingService:
    """
    Service for parsing and grading typed polynomial answers.

    Stateless; every call works only on its arguments.
    """

    def __init__(
        self,
        require_simplified: bool | None = None,
        expansion_hint: bool | None = None,
    ):
        if require_simplified is None:
            require_simplified = settings.REQUIRE_SIMPLIFIED
        if expansion_hint is None:
            expansion_hint = settings.FACTORED_EXPANSION_HINT
        self.require_simplified = require_simplified
        self.expansion_hint = expansion_hint

    def parse_polynomial(self, latex: str) -> SimplifiedPolynomial:
        """Parse an expanded polynomial (never fails)"""
        return parse_latex_polynomial(latex)

    def parse_factored(self, latex: str) -> FactoredPolynomial:
        """
        Parse a factored polynomial.

        Raises:
            AnswerParseError: If grouping delimiters are unbalanced
        """
        try:
            return parse_factored_latex(latex)
        except FactorParseError as e:
            raise AnswerParseError(latex, e.message, e.position) from e

    def compare_factored(self, first: str, second: str) -> bool:
        """Check two factored expressions for the same factors and powers"""
        return are_factored_polynomials_equal(
            self.parse_factored(first), self.parse_factored(second)
        )

    def grade(self, submission: AnswerSubmission) -> AnswerFeedback:
        """
        Grade one submission.

        Raises:
            UnsupportedAnswerTypeError: If no evaluator handles the answer type
            AnswerParseError: If the correct answer cannot be parsed
            GradingError: If the evaluator fails unexpectedly
        """
        logger.info(
            "Grading answer",
            extra_data={
                "answer_type": submission.answer_type,
                "answer_length": len(submission.student_answer),
            }
        )

        supported = get_registered_types()
        if submission.answer_type not in supported:
            raise UnsupportedAnswerTypeError(submission.answer_type, supported)

        options = {}
        if submission.answer_type == AnswerType.POLYNOMIAL.value:
            options["require_simplified"] = self.require_simplified
        elif submission.answer_type == AnswerType.FACTORED.value:
            options["check_expansion"] = self.expansion_hint
            options["max_expansion_degree"] = settings.MAX_EXPANSION_DEGREE

        evaluator = create_evaluator(
            submission.answer_type, submission.correct_answer, **options
        )

        try:
            result = evaluator.evaluate(submission.student_answer)
        except FactorParseError as e:
            raise AnswerParseError(submission.correct_answer, e.message, e.position) from e
        except Exception as e:
            logger.error(
                "Failed to grade answer",
                extra_data={
                    "answer_type": submission.answer_type,
                    "error": str(e),
                    "traceback": traceback.format_exc()
                }
            )
            raise GradingError(submission.answer_type, str(e)) from e

        logger.info(
            "Grading completed",
            extra_data={
                "answer_type": submission.answer_type,
                "score": result.score,
                "error_flag": result.error_flag,
            }
        )

        return self.to_feedback(result)

    @staticmethod
    def to_feedback(result: AnswerResult) -> AnswerFeedback:
        """Convert an evaluator result to the domain model"""
        return AnswerFeedback(
            answer_type=result.type,
            score=result.score,
            correct=result.correct,
            student_answer=result.student_answer,
            correct_answer=result.correct_answer,
            message=result.answer_message,
            messages=result.messages,
            preview=result.preview or None,
            error_message=result.error_message or None,
            metadata=result.metadata,
        )


def get_grading_service() -> GradingService:
    """Create grading service instance"""
    return GradingService()
