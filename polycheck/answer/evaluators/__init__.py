"""
Type-specific answer evaluators.
"""

from .factored import FactoredPolynomialEvaluator
from .polynomial import PolynomialEvaluator

__all__ = [
    "PolynomialEvaluator",
    "FactoredPolynomialEvaluator",
]
