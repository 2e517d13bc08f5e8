"""
Canonical signatures and equivalence checks for parsed polynomials.

A signature is a deterministic string for a base polynomial that does not
depend on term order or on floating-point noise past six decimals. Factored
answers are compared as multisets of (signature, power), which accepts
reordered factors and ``(x+1)(x+1)`` vs ``(x+1)^2`` but rejects an expanded
answer such as ``x^2-1`` for ``(x+1)(x-1)``.
"""

from __future__ import annotations

from .polynomial import (
    FactoredPolynomial,
    Polynomial,
    SimplifiedPolynomial,
    format_number,
    round_coefficient,
)

# Coefficients at or below this magnitude are treated as zero
ZERO_TOLERANCE = 1e-9

ZERO_SIGNATURE = "0"


def _term_signature(coefficient: float, variable: str, exponent: int) -> str:
    return f"{format_number(coefficient)},{variable},{exponent}"


def polynomial_signature(polynomial: Polynomial) -> str:
    """
    Build the canonical signature of a base polynomial.

    Args:
        polynomial: Any Polynomial (terms in any order)

    Returns:
        ``"c,v,e;c,v,e;..."`` with terms sorted by exponent descending,
        or ``"0"`` when every coefficient is (nearly) zero

    Examples:
        >>> polynomial_signature(parse_latex_polynomial("1 + x"))
        '1,x,1;1,x,0'
    """
    active = [term for term in polynomial.terms if abs(term.coefficient) > ZERO_TOLERANCE]
    if not active:
        return ZERO_SIGNATURE

    active.sort(key=lambda term: term.exponent, reverse=True)
    return ";".join(
        _term_signature(term.coefficient, polynomial.variable, term.exponent)
        for term in active
    )


def identity_signature(variable: str) -> str:
    """Signature of the constant polynomial 1 in ``variable``."""
    return _term_signature(1.0, variable, 0)


def factor_map(factored: FactoredPolynomial) -> dict[str, int]:
    """
    Map each distinct base signature to its total power.

    Constant-1 factors are skipped. Powers of factors sharing a signature
    are summed, so ``(x+1)(x+1)`` and ``(x+1)^2`` give the same map.
    """
    powers: dict[str, int] = {}
    for factor in factored.factors:
        signature = polynomial_signature(factor.base)
        if signature == identity_signature(factor.base.variable):
            continue
        powers[signature] = powers.get(signature, 0) + factor.power
    return powers


def are_factored_polynomials_equal(
    first: FactoredPolynomial, second: FactoredPolynomial
) -> bool:
    """
    Check that two factored forms have the same factors with the same powers.

    This compares factoring structure, not the expanded polynomials.
    """
    return factor_map(first) == factor_map(second)


def simplified_polynomials_are_equal(
    first: SimplifiedPolynomial, second: SimplifiedPolynomial
) -> bool:
    """
    Strict structural equality of two parsed polynomials.

    Both inputs are already sorted by the parser, so terms are compared
    pairwise; coefficients are compared after rounding to six decimals.
    """
    if first.variable != second.variable:
        return False

    if len(first.terms) != len(second.terms):
        return False

    for term1, term2 in zip(first.terms, second.terms):
        if term1.exponent != term2.exponent:
            return False
        if round_coefficient(term1.coefficient) != round_coefficient(term2.coefficient):
            return False

    return True
