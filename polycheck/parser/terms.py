"""
Term parser for single-variable polynomial answers.

Scans a normalized expression left to right and matches, at each position,
the longest prefix of

    term        := sign? coefficient? variable? exponent?
    sign        := '+' | '-'
    coefficient := digits ('.' digits)?
    exponent    := '^' ('{' '-'? digits '}'? | '-'? digits)

Every piece is optional. A position where nothing matches is skipped one
character at a time, so stray symbols contribute nothing and the cursor
always moves forward. Matched terms are folded into one coefficient per
exponent.
"""

from __future__ import annotations

import logging
import string
from dataclasses import dataclass

from ..math.polynomial import SimplifiedPolynomial, Term
from .normalizer import normalize_expression

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TermMatch:
    """
    One term recognized by the scanner.

    Attributes:
        start: Index of the first matched character
        end: Index one past the last matched character
        sign: '+', '-' or '' when no sign was written
        coefficient: Coefficient digits as written, '' when absent
        has_variable: Whether the variable symbol was matched
        exponent: Exponent digits (with optional '-'), '' when absent
    """

    start: int
    end: int
    sign: str = ""
    coefficient: str = ""
    has_variable: bool = False
    exponent: str = ""

    @property
    def is_empty(self) -> bool:
        return self.end == self.start

    def to_term(self) -> Term:
        """Interpret the matched pieces as a Term."""
        value = float(self.coefficient) if self.coefficient else 1.0
        if self.sign == "-":
            value = -value

        if not self.has_variable:
            # Constants ignore anything that looked like an exponent
            return Term(coefficient=value, exponent=0)

        power = int(self.exponent) if self.exponent else 1
        return Term(coefficient=value, exponent=power)


class TermScanner:
    """
    Cursor-based scanner over a normalized expression.

    Each call to :meth:`match_at` reads the longest term starting at the given
    index without consuming anything; :meth:`scan` drives the cursor and
    yields non-empty matches.
    """

    def __init__(self, text: str, variable: str):
        self.text = text
        self.variable = variable

    def _read_digits(self, pos: int) -> int:
        """Return the index after a (possibly empty) run of digits."""
        while pos < len(self.text) and self.text[pos] in string.digits:
            pos += 1
        return pos

    def _read_coefficient(self, pos: int) -> int:
        end = self._read_digits(pos)
        if end == pos:
            return pos

        # Decimal part only counts with digits on both sides of the point
        if end < len(self.text) and self.text[end] == ".":
            frac_end = self._read_digits(end + 1)
            if frac_end > end + 1:
                return frac_end
        return end

    def _read_exponent(self, pos: int) -> tuple[int, str]:
        """
        Read ``^n``, ``^-n``, ``^{n}`` or ``^{-n}`` starting at ``pos``.

        Returns:
            (end index, exponent digits); ``(pos, "")`` when no exponent is there
        """
        text = self.text
        if pos >= len(text) or text[pos] != "^":
            return pos, ""

        cursor = pos + 1
        braced = cursor < len(text) and text[cursor] == "{"
        if braced:
            cursor += 1

        digits_start = cursor
        if cursor < len(text) and text[cursor] == "-":
            cursor += 1
        digits_end = self._read_digits(cursor)
        if digits_end == cursor:
            return pos, ""

        exponent = text[digits_start:digits_end]
        cursor = digits_end
        if braced and cursor < len(text) and text[cursor] == "}":
            cursor += 1
        return cursor, exponent

    def match_at(self, pos: int) -> TermMatch:
        """Match the longest term starting at ``pos`` (possibly empty)."""
        text = self.text
        cursor = pos

        sign = ""
        if cursor < len(text) and text[cursor] in "+-":
            sign = text[cursor]
            cursor += 1

        coeff_end = self._read_coefficient(cursor)
        coefficient = text[cursor:coeff_end]
        cursor = coeff_end

        has_variable = cursor < len(text) and text[cursor] == self.variable
        if has_variable:
            cursor += 1

        cursor, exponent = self._read_exponent(cursor)

        return TermMatch(
            start=pos,
            end=cursor,
            sign=sign,
            coefficient=coefficient,
            has_variable=has_variable,
            exponent=exponent,
        )

    def scan(self):
        """Yield every non-empty TermMatch from left to right."""
        pos = 0
        while pos < len(self.text):
            match = self.match_at(pos)
            if match.is_empty:
                pos += 1
                continue
            yield match
            pos = match.end


def combine_terms(matches) -> tuple[tuple[Term, ...], bool]:
    """
    Fold matched terms into one coefficient per exponent.

    Args:
        matches: Iterable of TermMatch

    Returns:
        (terms sorted by exponent descending without zero coefficients,
         True when no exponent appeared twice)
    """
    buckets: dict[int, float] = {}
    is_simplified = True

    for match in matches:
        term = match.to_term()
        if term.exponent in buckets:
            is_simplified = False
        buckets[term.exponent] = buckets.get(term.exponent, 0.0) + term.coefficient

    terms = tuple(
        Term(coefficient=coefficient, exponent=exponent)
        for exponent, coefficient in sorted(buckets.items(), key=lambda item: -item[0])
        if coefficient != 0
    )
    return terms, is_simplified


def parse_latex_polynomial(text: str) -> SimplifiedPolynomial:
    """
    Parse a LaTeX-like polynomial into a SimplifiedPolynomial.

    Never raises: unrecognized characters are skipped, so partially typed or
    messy answers still produce a best-effort result.

    Args:
        text: Raw student input, e.g. ``"x^{12} + -2x + 3.5"``

    Returns:
        SimplifiedPolynomial with combined, sorted terms

    Examples:
        >>> parse_latex_polynomial("3x^2 + 2x^2").terms
        (Term(coefficient=5.0, exponent=2),)
    """
    normalized = normalize_expression(text)
    scanner = TermScanner(normalized.text, normalized.variable)
    terms, is_simplified = combine_terms(scanner.scan())

    logger.debug(
        "Parsed polynomial %r -> %d term(s), simplified=%s",
        normalized.text,
        len(terms),
        is_simplified,
    )

    return SimplifiedPolynomial(
        variable=normalized.variable,
        terms=terms,
        is_simplified=is_simplified,
    )
