"""
Expanded polynomial answer evaluator.

Grades answers such as ``3x^2 - 2x + 1`` against a correct polynomial. Term
order does not matter, but with ``require_simplified`` an answer that still
has like terms to combine (``x^2 + 2x^2``) earns no credit.
"""

from __future__ import annotations

import logging

from polycheck.math import SimplifiedPolynomial, simplified_polynomials_are_equal
from polycheck.parser import parse_latex_polynomial

from ..answer_hash import AnswerResult
from ..evaluator import AnswerEvaluator

logger = logging.getLogger(__name__)

UNSIMPLIFIED_MESSAGE = "Combine like terms in your answer"


class PolynomialEvaluator(AnswerEvaluator):
    """
    Evaluator for polynomials in expanded form.

    Supports:
    - Any term order and sign spelling (``x+-1`` == ``x-1``)
    - Coefficients compared to six decimals
    - Optional requirement that like terms are combined
    """

    answer_type = "polynomial"

    require_simplified: bool = True

    def correct_polynomial(self) -> SimplifiedPolynomial:
        return parse_latex_polynomial(self.correct_answer)

    def get_correct_answer_display(self) -> str:
        return self.correct_polynomial().to_latex()

    def evaluate(self, student_answer: str) -> AnswerResult:
        if not student_answer.strip():
            return self.blank_result(student_answer)

        correct = self.correct_polynomial()
        student = parse_latex_polynomial(student_answer)
        equal = simplified_polynomials_are_equal(student, correct)

        logger.debug(
            "Polynomial answer %r: equal=%s simplified=%s",
            student_answer,
            equal,
            student.is_simplified,
        )

        if equal and (student.is_simplified or not self.require_simplified):
            result = AnswerResult.answer_correct(
                student_answer, correct.to_latex(), answer_type=self.answer_type
            )
        elif equal:
            result = AnswerResult.answer_incorrect(
                student_answer,
                correct.to_latex(),
                answer_type=self.answer_type,
                message=UNSIMPLIFIED_MESSAGE,
            )
        else:
            result = AnswerResult.answer_incorrect(
                student_answer, correct.to_latex(), answer_type=self.answer_type
            )
            if student.variable != correct.variable and student.degree:
                result.add_message(f"Your answer should use the variable {correct.variable}")

        result.preview = student.to_latex()
        result.metadata = {
            "variable": student.variable,
            "is_simplified": student.is_simplified,
        }
        return result
