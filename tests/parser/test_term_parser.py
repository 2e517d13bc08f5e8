"""Tests for the term scanner and parse_latex_polynomial."""

import pytest

from polycheck.math import SimplifiedPolynomial
from polycheck.parser import TermScanner, parse_latex_polynomial


class TestParseLatexPolynomial:
    """Parsing, combination and sorting of terms."""

    def test_like_terms_combined_and_flagged(self, term_pairs):
        poly = parse_latex_polynomial("3x^2 + 2x^2")
        assert term_pairs(poly) == [(5, 2)]
        assert poly.is_simplified is False

    def test_difference_of_squares(self, term_pairs):
        poly = parse_latex_polynomial("x^2 - 1")
        assert term_pairs(poly) == [(1, 2), (-1, 0)]
        assert poly.is_simplified is True
        assert poly.variable == "x"

    def test_full_cancellation_drops_terms(self):
        poly = parse_latex_polynomial("2x - 2x")
        assert poly.terms == ()
        assert poly.is_simplified is False

    def test_empty_input(self):
        poly = parse_latex_polynomial("")
        assert isinstance(poly, SimplifiedPolynomial)
        assert poly.terms == ()
        assert poly.variable == "x"
        assert poly.is_simplified is True

    def test_braced_exponent_and_decimal(self, term_pairs):
        poly = parse_latex_polynomial("x^{12} + -2x + 3.5")
        assert term_pairs(poly) == [(1, 12), (-2, 1), (3.5, 0)]

    def test_sorted_by_exponent_descending(self, term_pairs):
        poly = parse_latex_polynomial("1 + x + x^3")
        assert [e for _, e in term_pairs(poly)] == [3, 1, 0]

    def test_implicit_coefficients(self, term_pairs):
        assert term_pairs(parse_latex_polynomial("-x")) == [(-1, 1)]
        assert term_pairs(parse_latex_polynomial("x")) == [(1, 1)]

    def test_negative_exponents(self, term_pairs):
        poly = parse_latex_polynomial("x^{-3} + x^-2")
        assert term_pairs(poly) == [(1, -2), (1, -3)]

    def test_pure_constant(self, term_pairs):
        poly = parse_latex_polynomial("5")
        assert term_pairs(poly) == [(5, 0)]
        assert poly.variable == "x"

    def test_constants_combine(self, term_pairs):
        poly = parse_latex_polynomial("1 + 2 + x")
        assert term_pairs(poly) == [(1, 1), (3, 0)]
        assert poly.is_simplified is False

    def test_exponent_after_bare_number_is_ignored(self, term_pairs):
        assert term_pairs(parse_latex_polynomial("2^3")) == [(2, 0)]

    def test_other_variable(self, term_pairs):
        poly = parse_latex_polynomial("3y^2 + y")
        assert poly.variable == "y"
        assert term_pairs(poly) == [(3, 2), (1, 1)]

    def test_sign_runs_collapsed(self, term_pairs):
        assert term_pairs(parse_latex_polynomial("x+--1")) == [(1, 1), (1, 0)]
        assert term_pairs(parse_latex_polynomial("x+-+1")) == [(1, 1), (-1, 0)]

    def test_left_right_markup(self, term_pairs):
        poly = parse_latex_polynomial("\\left(x^2 - 4\\right)")
        assert term_pairs(poly) == [(1, 2), (-4, 0)]

    def test_stray_symbols_ignored(self, term_pairs):
        assert term_pairs(parse_latex_polynomial("2x + 3 $")) == [(2, 1), (3, 0)]

    def test_zero_coefficient_term_dropped(self, term_pairs):
        poly = parse_latex_polynomial("x^2 + 0x - 1")
        assert term_pairs(poly) == [(1, 2), (-1, 0)]
        assert poly.is_simplified is True

    def test_unclosed_exponent_brace(self, term_pairs):
        assert term_pairs(parse_latex_polynomial("x^{2")) == [(1, 2)]

    def test_trailing_caret(self, term_pairs):
        assert term_pairs(parse_latex_polynomial("x^")) == [(1, 1)]

    def test_decimal_point_without_fraction_digits(self, term_pairs):
        assert term_pairs(parse_latex_polynomial("3.")) == [(3, 0)]

    @pytest.mark.parametrize("garbage", ["**^{", "^", "}{", "\\frac", "?!"])
    def test_never_raises(self, garbage):
        parse_latex_polynomial(garbage)


class TestTermScanner:
    """Cursor-level behavior of the scanner."""

    def test_match_full_term(self):
        match = TermScanner("3x^{2}", "x").match_at(0)
        assert (match.start, match.end) == (0, 6)
        assert match.sign == ""
        assert match.coefficient == "3"
        assert match.has_variable is True
        assert match.exponent == "2"

    def test_match_signed_decimal(self):
        match = TermScanner("-2.5x", "x").match_at(0)
        assert match.sign == "-"
        assert match.coefficient == "2.5"
        assert match.to_term().coefficient == -2.5
        assert match.to_term().exponent == 1

    def test_empty_match_on_stray_char(self):
        match = TermScanner("*x", "x").match_at(0)
        assert match.is_empty

    def test_scan_skips_stray_chars(self):
        matches = list(TermScanner("2*x", "x").scan())
        assert [m.to_term().exponent for m in matches] == [0, 1]

    def test_scan_always_advances(self):
        scanner = TermScanner("**^{}^", "x")
        assert list(scanner.scan()) == []

    def test_matches_do_not_overlap(self):
        matches = list(TermScanner("3x^2-2x+1", "x").scan())
        assert [(m.start, m.end) for m in matches] == [(0, 4), (4, 7), (7, 9)]
