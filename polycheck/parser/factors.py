"""
Factor splitter for products of polynomial groups.

Splits input such as ``\\left(x^2 - 1\\right)^2 (x + 3)`` or ``2x[x-4]^{3}``
into a list of (base polynomial, power) factors. Group contents are handed
whole to :func:`polycheck.parser.terms.parse_latex_polynomial`; loose text
between groups becomes its own power-1 factor.

Only unbalanced delimiters are an error. Anything else the splitter does not
understand is passed through to the term parser, which ignores it.
"""

from __future__ import annotations

import logging
import string

from ..math.polynomial import FactoredPolynomial, PolynomialFactor
from .normalizer import clean_markup, collapse_signs
from .terms import parse_latex_polynomial

logger = logging.getLogger(__name__)

GROUP_DELIMITERS = {"(": ")", "[": "]"}
CLOSING_DELIMITERS = frozenset(GROUP_DELIMITERS.values())

# Loose buffers made only of these are implicit multiplication, not factors
MULTIPLICATION_CHARS = frozenset("*.")


class FactorParseError(ValueError):
    """Raised when grouping delimiters in a factored expression do not balance."""

    def __init__(self, message: str, position: int, text: str = ""):
        self.message = message
        self.position = position
        self.text = text
        super().__init__(f"{message} at position {position}")


class FactorSplitter:
    """
    Single left-to-right scan over a cleaned factored expression.

    Usage:
        splitter = FactorSplitter("(x+1)^2(x-3)")
        factored = splitter.split()
    """

    def __init__(self, text: str):
        self.text = text
        self.factors: list[PolynomialFactor] = []
        self.buffer: list[str] = []

    def split(self) -> FactoredPolynomial:
        """
        Split the expression into factors.

        Raises:
            FactorParseError: On an unclosed group, a stray closing delimiter,
                or a braced power without its closing brace
        """
        text = self.text
        self.factors = []
        self.buffer = []
        pos = 0

        while pos < len(text):
            char = text[pos]

            if char in GROUP_DELIMITERS:
                self._flush_buffer()
                close = self._find_closing(pos)
                content = text[pos + 1:close]
                power, pos = self._read_power(close + 1)
                self.factors.append(
                    PolynomialFactor(base=parse_latex_polynomial(content), power=power)
                )
            elif char in CLOSING_DELIMITERS:
                raise FactorParseError(
                    f"Unmatched closing delimiter '{char}'", pos, text
                )
            else:
                self.buffer.append(char)
                pos += 1

        self._flush_buffer()
        return FactoredPolynomial(factors=tuple(self.factors))

    def _flush_buffer(self) -> None:
        """Emit pending loose text as a power-1 factor."""
        pending = "".join(self.buffer)
        self.buffer = []

        if not pending or all(char in MULTIPLICATION_CHARS for char in pending):
            return
        self.factors.append(PolynomialFactor(base=parse_latex_polynomial(pending), power=1))

    def _find_closing(self, open_pos: int) -> int:
        """Return the index of the delimiter closing the group opened at ``open_pos``."""
        text = self.text
        opener = text[open_pos]
        closer = GROUP_DELIMITERS[opener]
        depth = 0

        for pos in range(open_pos, len(text)):
            if text[pos] == opener:
                depth += 1
            elif text[pos] == closer:
                depth -= 1
                if depth == 0:
                    return pos

        logger.debug("Unclosed group in %r at %d", text, open_pos)
        raise FactorParseError(f"Unclosed delimiter '{opener}'", open_pos, text)

    def _read_power(self, pos: int) -> tuple[int, int]:
        """
        Read an optional ``^{n}`` / ``^n`` after a group.

        Returns:
            (power, index after the consumed exponent syntax)
        """
        text = self.text
        if pos >= len(text) or text[pos] != "^":
            return 1, pos
        pos += 1

        if pos < len(text) and text[pos] == "{":
            brace_end = text.find("}", pos)
            if brace_end == -1:
                raise FactorParseError("Unclosed '{' in exponent", pos, text)
            return _parse_int(text[pos + 1:brace_end], default=1), brace_end + 1

        end = pos
        while end < len(text) and text[end] in string.digits:
            end += 1
        if end == pos:
            # A bare '^' with no digits is dropped
            return 1, pos
        return int(text[pos:end]), end


def _parse_int(value: str, default: int) -> int:
    """Leading integer of ``value`` (``"2x"`` gives 2), or ``default`` if it has none."""
    sign = -1 if value.startswith("-") else 1
    start = 1 if sign == -1 else 0
    end = start
    while end < len(value) and value[end] in string.digits:
        end += 1
    if end == start:
        return default
    return sign * int(value[start:end])


def parse_factored_latex(text: str) -> FactoredPolynomial:
    """
    Parse a product of polynomial factors.

    Args:
        text: Raw input, e.g. ``"\\left(x^2 - 1\\right)^2 (x + 3)"``

    Returns:
        FactoredPolynomial with one entry per group or loose term run

    Raises:
        FactorParseError: If grouping delimiters are unbalanced

    Examples:
        >>> [f.power for f in parse_factored_latex("(x+1)^2(x-3)").factors]
        [2, 1]
    """
    cleaned = collapse_signs(clean_markup(text))
    return FactorSplitter(cleaned).split()
