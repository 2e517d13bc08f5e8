"""
Shared pytest fixtures for the polycheck test suite.

This module provides:
- Shortcuts for building polynomial values without going through the parser
- Helpers for asserting term lists and Pydantic validation failures
"""

import pytest
from typing import Any, Type

from pydantic import BaseModel, ValidationError

from polycheck.math import Polynomial, SimplifiedPolynomial, Term


@pytest.fixture
def make_polynomial():
    """Factory for Polynomial values from (coefficient, exponent) pairs."""
    def _factory(*pairs: tuple[float, int], variable: str = "x", simplified: bool | None = None):
        terms = tuple(Term(coefficient=c, exponent=e) for c, e in pairs)
        if simplified is None:
            return Polynomial(variable=variable, terms=terms)
        return SimplifiedPolynomial(variable=variable, terms=terms, is_simplified=simplified)
    return _factory


@pytest.fixture
def term_pairs():
    """Reduce a polynomial to a list of (coefficient, exponent) pairs."""
    def _pairs(polynomial: Polynomial) -> list[tuple[float, int]]:
        return [(term.coefficient, term.exponent) for term in polynomial.terms]
    return _pairs


@pytest.fixture
def assert_validation_error():
    """Helper to assert that a ValidationError is raised with expected details."""
    def _assert_validation(
        model_class: Type[BaseModel],
        data: dict[str, Any],
        expected_field: str | None = None,
    ) -> ValidationError:
        """
        Assert that creating a model raises ValidationError.

        Args:
            model_class: The Pydantic model class
            data: Invalid data to pass to model
            expected_field: Expected field name in error (optional)

        Returns:
            The ValidationError that was raised
        """
        with pytest.raises(ValidationError) as exc_info:
            model_class(**data)

        error = exc_info.value
        if expected_field:
            field_errors = [e for e in error.errors() if e['loc'][0] == expected_field]
            assert len(field_errors) > 0, f"Expected error for field '{expected_field}' not found"

        return error

    return _assert_validation
