"""
Polynomial value types and structural comparison.
"""

from .polynomial import (
    COEFFICIENT_PRECISION,
    FactoredPolynomial,
    Polynomial,
    PolynomialFactor,
    SimplifiedPolynomial,
    Term,
    format_number,
    round_coefficient,
)
from .signature import (
    ZERO_SIGNATURE,
    ZERO_TOLERANCE,
    are_factored_polynomials_equal,
    factor_map,
    identity_signature,
    polynomial_signature,
    simplified_polynomials_are_equal,
)

__all__ = [
    "COEFFICIENT_PRECISION",
    "Term",
    "Polynomial",
    "SimplifiedPolynomial",
    "PolynomialFactor",
    "FactoredPolynomial",
    "format_number",
    "round_coefficient",
    "ZERO_SIGNATURE",
    "ZERO_TOLERANCE",
    "polynomial_signature",
    "identity_signature",
    "factor_map",
    "are_factored_polynomials_equal",
    "simplified_polynomials_are_equal",
]
