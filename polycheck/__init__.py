"""Polycheck - grading of typed polynomial answers.

Subpackages:
- polycheck.parser: Normalization, term parsing and factor splitting
- polycheck.math: Polynomial value types, signatures and equality checks
- polycheck.answer: Answer evaluators producing scores and feedback
"""

from .math import (
    FactoredPolynomial,
    Polynomial,
    PolynomialFactor,
    SimplifiedPolynomial,
    Term,
    are_factored_polynomials_equal,
    simplified_polynomials_are_equal,
)
from .parser import FactorParseError, parse_factored_latex, parse_latex_polynomial

__version__ = "0.1.0"

# camelCase names used by the game front end
parseLatexPolynomial = parse_latex_polynomial
simplifiedPolynomialsAreEqual = simplified_polynomials_are_equal
parseFactoredLatex = parse_factored_latex
areFactoredPolynomialsEqual = are_factored_polynomials_equal

__all__ = [
    "Term",
    "Polynomial",
    "SimplifiedPolynomial",
    "PolynomialFactor",
    "FactoredPolynomial",
    "FactorParseError",
    "parse_latex_polynomial",
    "simplified_polynomials_are_equal",
    "parse_factored_latex",
    "are_factored_polynomials_equal",
    "parseLatexPolynomial",
    "simplifiedPolynomialsAreEqual",
    "parseFactoredLatex",
    "areFactoredPolynomialsEqual",
]
