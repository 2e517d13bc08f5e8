"""
Polynomial value types.

Immutable pydantic models produced by the parsers in :mod:`polycheck.parser`:

- Term: a single coefficient * variable^exponent monomial
- Polynomial: a variable plus a sequence of terms
- SimplifiedPolynomial: a Polynomial with combined, sorted terms and a flag
  recording whether the input already had like terms combined
- PolynomialFactor / FactoredPolynomial: a product of parenthesized bases
  raised to integer powers

Every value is built fresh per parse call and never mutated.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# Fractional digits kept when coefficients are compared or displayed
COEFFICIENT_PRECISION = 6


def round_coefficient(value: float) -> float:
    """Round a coefficient to the comparison precision (``-0.0`` becomes ``0.0``)."""
    return round(value, COEFFICIENT_PRECISION) + 0.0


def format_number(value: float) -> str:
    """
    Format a coefficient for display.

    Integral values lose their decimal point, other values keep at most
    six fractional digits with trailing zeros removed.

    Examples:
        >>> format_number(3.0)
        '3'
        >>> format_number(-0.5)
        '-0.5'
    """
    rounded = round_coefficient(value)
    if rounded.is_integer():
        return str(int(rounded))
    return f"{rounded:.{COEFFICIENT_PRECISION}f}".rstrip("0").rstrip(".")


class Term(BaseModel):
    """
    A single monomial.

    Attributes:
        coefficient: Any finite real coefficient
        exponent: Integer power of the variable (0 for constants)
    """

    model_config = ConfigDict(frozen=True)

    coefficient: float
    exponent: int

    def to_latex(self, variable: str) -> str:
        """Render as LaTeX, e.g. ``-3x^{2}``, ``x``, ``5``."""
        if self.exponent == 0:
            return format_number(self.coefficient)

        if round_coefficient(self.coefficient) == 1:
            coeff = ""
        elif round_coefficient(self.coefficient) == -1:
            coeff = "-"
        else:
            coeff = format_number(self.coefficient)

        if self.exponent == 1:
            return f"{coeff}{variable}"
        return f"{coeff}{variable}^{{{self.exponent}}}"


class Polynomial(BaseModel):
    """A single-variable polynomial as a sequence of terms."""

    model_config = ConfigDict(frozen=True)

    variable: str = Field(default="x", min_length=1, max_length=1)
    terms: tuple[Term, ...] = ()

    @property
    def degree(self) -> int | None:
        """Largest exponent, or None for the zero polynomial."""
        if not self.terms:
            return None
        return max(term.exponent for term in self.terms)

    def is_zero(self) -> bool:
        return not self.terms

    def to_latex(self) -> str:
        """
        Render the terms in order, e.g. ``x^{2}-3x+2``.

        Parsing the output again gives back the same terms.
        """
        if not self.terms:
            return "0"

        rendered = ""
        for term in self.terms:
            piece = term.to_latex(self.variable)
            if rendered and not piece.startswith("-"):
                rendered += "+"
            rendered += piece
        return rendered

    def __str__(self) -> str:
        return self.to_latex()


class SimplifiedPolynomial(Polynomial):
    """
    Polynomial with like terms combined.

    Terms are sorted by exponent descending with at most one term per
    exponent and no zero coefficients. ``is_simplified`` is False when the
    original input contained two or more terms with the same exponent.
    """

    is_simplified: bool = True


class PolynomialFactor(BaseModel):
    """A parenthesized base polynomial raised to an integer power."""

    model_config = ConfigDict(frozen=True)

    base: Polynomial
    power: int = 1

    def to_latex(self) -> str:
        rendered = f"({self.base.to_latex()})"
        if self.power != 1:
            rendered += f"^{{{self.power}}}"
        return rendered


class FactoredPolynomial(BaseModel):
    """
    A product of polynomial factors.

    Factor order follows the input but carries no meaning for equivalence,
    see :func:`polycheck.math.signature.are_factored_polynomials_equal`.
    """

    model_config = ConfigDict(frozen=True)

    factors: tuple[PolynomialFactor, ...] = ()

    def to_latex(self) -> str:
        return "".join(factor.to_latex() for factor in self.factors)

    def __str__(self) -> str:
        return self.to_latex()
