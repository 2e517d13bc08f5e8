"""
Factored polynomial answer evaluator.

Grades answers such as ``(x+1)^2(x-3)``. Factors may appear in any order and
repeated factors may be written out or collected into a power, but the factors
themselves must match: ``x^2-1`` is not accepted for ``(x+1)(x-1)``.

When the structure differs but the product of the student's factors still
expands to the correct polynomial, the result says so, which tells students
their algebra is right and only the factoring is off.
"""

from __future__ import annotations

import logging
import math

import sympy as sp
from pydantic import Field

from polycheck.math import (
    FactoredPolynomial,
    Polynomial,
    are_factored_polynomials_equal,
    factor_map,
    format_number,
)
from polycheck.parser import FactorParseError, parse_factored_latex

from ..answer_hash import AnswerResult
from ..evaluator import AnswerEvaluator

logger = logging.getLogger(__name__)

NOT_FACTORED_MESSAGE = "Your answer is equivalent but not factored the same way"

# Largest expanded degree the expansion check will multiply out
DEFAULT_MAX_EXPANSION_DEGREE = 200


def polynomial_to_sympy(polynomial: Polynomial) -> sp.Expr:
    """Convert a parsed polynomial to a SymPy expression with rational coefficients."""
    var = sp.Symbol(polynomial.variable)
    return sp.Add(
        *[
            sp.Rational(format_number(term.coefficient)) * var**term.exponent
            for term in polynomial.terms
        ]
    )


def factored_to_sympy(factored: FactoredPolynomial) -> sp.Expr:
    """Multiply out the factors of a FactoredPolynomial as a SymPy product."""
    return sp.Mul(
        *[polynomial_to_sympy(factor.base) ** factor.power for factor in factored.factors]
    )


def expansion_degree(factored: FactoredPolynomial) -> int:
    """
    Degree of the fully expanded product, ``sum(|power| * degree)`` over factors.

    Negative exponents count by magnitude, since they cost as much to expand.
    """
    return sum(
        abs(factor.power) * max((abs(term.exponent) for term in factor.base.terms), default=0)
        for factor in factored.factors
    )


def has_finite_coefficients(factored: FactoredPolynomial) -> bool:
    """False when a coefficient overflowed to ``inf`` or combined into ``nan``."""
    return all(
        math.isfinite(term.coefficient)
        for factor in factored.factors
        for term in factor.base.terms
    )


def expands_equal(
    first: FactoredPolynomial,
    second: FactoredPolynomial,
    max_degree: int | None = DEFAULT_MAX_EXPANSION_DEGREE,
) -> bool:
    """
    Check whether two factored forms multiply out to the same polynomial.

    Returns False without expanding when either side has a non-finite
    coefficient or would expand past ``max_degree`` (None for no limit).
    """
    if not (has_finite_coefficients(first) and has_finite_coefficients(second)):
        return False

    degree = max(expansion_degree(first), expansion_degree(second))
    if max_degree is not None and degree > max_degree:
        logger.debug("Skipping expansion check above degree %d", max_degree)
        return False

    difference = sp.expand(factored_to_sympy(first) - factored_to_sympy(second))
    return difference == 0


class FactoredPolynomialEvaluator(AnswerEvaluator):
    """
    Evaluator for polynomials in factored form.

    Supports:
    - Reordered factors: ``(x-1)(x+1)`` == ``(x+1)(x-1)``
    - Collected powers: ``(x+1)(x+1)`` == ``(x+1)^2``
    - Parenthesized or bracketed groups, ``\\left``/``\\right`` markup
    - A hint when the answer is equivalent but factored differently

    Raises FactorParseError from evaluate() when the correct answer itself
    has unbalanced delimiters; student parse errors become error results.
    """

    answer_type = "factored"

    check_expansion: bool = True
    max_expansion_degree: int = Field(default=DEFAULT_MAX_EXPANSION_DEGREE, ge=0)

    def correct_factored(self) -> FactoredPolynomial:
        return parse_factored_latex(self.correct_answer)

    def get_correct_answer_display(self) -> str:
        return self.correct_factored().to_latex()

    def evaluate(self, student_answer: str) -> AnswerResult:
        correct = self.correct_factored()
        if not student_answer.strip():
            return self.blank_result(student_answer)

        try:
            student = parse_factored_latex(student_answer)
        except FactorParseError as e:
            logger.debug("Could not parse factored answer %r: %s", student_answer, e)
            return AnswerResult.answer_error(
                student_answer,
                correct.to_latex(),
                f"Could not parse answer: {e.message}",
                answer_type=self.answer_type,
            )

        if are_factored_polynomials_equal(student, correct):
            result = AnswerResult.answer_correct(
                student_answer, correct.to_latex(), answer_type=self.answer_type
            )
        else:
            result = AnswerResult.answer_incorrect(
                student_answer, correct.to_latex(), answer_type=self.answer_type
            )
            if self.check_expansion and expands_equal(
                student, correct, max_degree=self.max_expansion_degree
            ):
                result.answer_message = NOT_FACTORED_MESSAGE

        result.preview = student.to_latex()
        result.metadata = {"factors": factor_map(student)}
        return result
