"""
Polycheck parser package.

Turns typed, LaTeX-like answers into polynomial values:
normalization, term scanning, and splitting of factored products.
"""

from .factors import FactorParseError, FactorSplitter, parse_factored_latex
from .normalizer import (
    NormalizedExpression,
    clean_markup,
    collapse_signs,
    detect_variable,
    normalize_expression,
)
from .terms import TermMatch, TermScanner, combine_terms, parse_latex_polynomial

__all__ = [
    "FactorParseError",
    "FactorSplitter",
    "parse_factored_latex",
    "NormalizedExpression",
    "clean_markup",
    "collapse_signs",
    "detect_variable",
    "normalize_expression",
    "TermMatch",
    "TermScanner",
    "combine_terms",
    "parse_latex_polynomial",
]
