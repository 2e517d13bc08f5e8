"""
Input normalization for typed polynomial answers.

Student answers arrive as loosely formatted LaTeX (``\\left( x^{2} + -3x \\right)``).
Before any structural parsing the text is reduced to a compact form:

1. All whitespace is removed.
2. Formatting-only markup (delimiter sizing such as ``\\left``/``\\right``) is
   dropped, and multiplication markup (``\\cdot``, ``\\times``) becomes ``*``.
3. Runs of sign characters are collapsed to a single sign.
4. The variable symbol is detected (first letter, ``x`` if none).

Steps 1-2 live in :func:`clean_markup`, step 3 in :func:`collapse_signs`, and
:func:`normalize_expression` runs all four.
"""

from __future__ import annotations

import string
from dataclasses import dataclass

DEFAULT_VARIABLE = "x"

SIGN_CHARS = "+-"

# Longer commands first so "\Bigl" is not eaten as "\Big" + "l"
SIZING_MARKUP = (
    "\\left",
    "\\right",
    "\\Bigl",
    "\\Bigr",
    "\\bigl",
    "\\bigr",
    "\\Big",
    "\\big",
)

MULTIPLICATION_MARKUP = {
    "\\cdot": "*",
    "\\times": "*",
}


@dataclass(frozen=True)
class NormalizedExpression:
    """
    A cleaned expression ready for term scanning.

    Attributes:
        text: The compact expression (no whitespace, markup or sign runs)
        variable: The single-character variable symbol
    """

    text: str
    variable: str


def clean_markup(text: str) -> str:
    """Remove whitespace and formatting-only LaTeX markup."""
    cleaned = "".join(text.split())

    for command, replacement in MULTIPLICATION_MARKUP.items():
        cleaned = cleaned.replace(command, replacement)

    for command in SIZING_MARKUP:
        cleaned = cleaned.replace(command, "")

    return cleaned


def collapse_signs(text: str) -> str:
    """
    Collapse every run of ``+``/``-`` characters to a single sign.

    A run becomes ``-`` when it holds an odd number of minus signs and ``+``
    otherwise, which is where repeatedly applying ``--``→``+``, ``++``→``+``,
    ``+-``→``-`` and ``-+``→``-`` ends up for runs of any length.

    Examples:
        >>> collapse_signs("x+-1")
        'x-1'
        >>> collapse_signs("x+--1")
        'x+1'
    """
    result: list[str] = []
    pos = 0
    length = len(text)

    while pos < length:
        char = text[pos]
        if char not in SIGN_CHARS:
            result.append(char)
            pos += 1
            continue

        negative = False
        while pos < length and text[pos] in SIGN_CHARS:
            if text[pos] == "-":
                negative = not negative
            pos += 1
        result.append("-" if negative else "+")

    return "".join(result)


def detect_variable(text: str) -> str:
    """Return the first ASCII letter in ``text``, or ``x`` for pure constants."""
    for char in text:
        if char in string.ascii_letters:
            return char
    return DEFAULT_VARIABLE


def normalize_expression(text: str) -> NormalizedExpression:
    """
    Run the full normalization pipeline on a raw answer string.

    Args:
        text: Raw student input

    Returns:
        NormalizedExpression with the compact text and detected variable
    """
    compact = collapse_signs(clean_markup(text))
    return NormalizedExpression(text=compact, variable=detect_variable(compact))
