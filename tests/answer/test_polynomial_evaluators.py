"""
Tests for the polynomial answer evaluators and the evaluator registry.
"""

import pytest

from polycheck.answer import (
    AnswerEvaluator,
    EvaluatorRegistry,
    FactoredPolynomialEvaluator,
    PolynomialEvaluator,
    create_evaluator,
    get_evaluator,
    get_registered_types,
)
from polycheck.answer.evaluators.factored import (
    NOT_FACTORED_MESSAGE,
    expands_equal,
    expansion_degree,
)
from polycheck.answer.evaluators.polynomial import UNSIMPLIFIED_MESSAGE
from polycheck.parser import FactorParseError, parse_factored_latex


class TestPolynomialEvaluator:

    def test_reordered_answer_is_correct(self):
        result = PolynomialEvaluator(correct_answer="x^2-1").evaluate("-1 + x^2")
        assert result.correct is True
        assert result.score == 1.0
        assert result.preview == "x^{2}-1"
        assert result.type == "polynomial"

    def test_zero_term_still_simplified(self):
        result = PolynomialEvaluator(correct_answer="x^2-1").evaluate("x^2 + 0x - 1")
        assert result.correct is True

    def test_unsimplified_answer_gets_no_credit(self):
        result = PolynomialEvaluator(correct_answer="x^2-1").evaluate("2x^2 - x^2 - 1")
        assert result.score == 0.0
        assert result.answer_message == UNSIMPLIFIED_MESSAGE
        assert result.metadata["is_simplified"] is False

    def test_unsimplified_accepted_when_not_required(self):
        evaluator = PolynomialEvaluator(correct_answer="x^2-1", require_simplified=False)
        assert evaluator.evaluate("2x^2 - x^2 - 1").correct is True

    def test_wrong_answer(self):
        result = PolynomialEvaluator(correct_answer="x^2-1").evaluate("x^2+1")
        assert result.correct is False
        assert result.answer_message == "Incorrect."

    def test_blank_answer(self):
        result = PolynomialEvaluator(correct_answer="x^2-1").evaluate("   ")
        assert result.score == 0.0
        assert result.answer_message == "No answer was entered"

    def test_wrong_variable_hint(self):
        result = PolynomialEvaluator(correct_answer="x^2-1").evaluate("y^2-1")
        assert result.correct is False
        assert "Your answer should use the variable x" in result.messages

    def test_correct_answer_display(self):
        evaluator = PolynomialEvaluator(correct_answer="-1 + x^2")
        assert evaluator.get_correct_answer_display() == "x^{2}-1"


class TestFactoredPolynomialEvaluator:

    def test_reordered_factors(self):
        result = FactoredPolynomialEvaluator(correct_answer="(x+1)(x-1)").evaluate("(x-1)(x+1)")
        assert result.correct is True
        assert result.preview == "(x-1)(x+1)"

    def test_power_form_of_repeated_factor(self):
        result = FactoredPolynomialEvaluator(correct_answer="(x+1)(x+1)").evaluate("(x+1)^2")
        assert result.correct is True
        assert result.metadata["factors"] == {"1,x,1;1,x,0": 2}

    def test_expanded_answer_is_equivalent_but_wrong(self):
        result = FactoredPolynomialEvaluator(correct_answer="(x+1)(x-1)").evaluate("x^2-1")
        assert result.correct is False
        assert result.answer_message == NOT_FACTORED_MESSAGE

    def test_partially_factored_answer(self):
        result = FactoredPolynomialEvaluator(correct_answer="2(x+1)").evaluate("(2x+2)")
        assert result.correct is False
        assert result.answer_message == NOT_FACTORED_MESSAGE

    def test_wrong_factors(self):
        result = FactoredPolynomialEvaluator(correct_answer="(x+1)(x-1)").evaluate("(x+1)(x+2)")
        assert result.correct is False
        assert result.answer_message == "Incorrect."

    def test_expansion_check_can_be_disabled(self):
        evaluator = FactoredPolynomialEvaluator(correct_answer="(x+1)(x-1)", check_expansion=False)
        assert evaluator.evaluate("x^2-1").answer_message == "Incorrect."

    def test_unbalanced_student_answer_is_an_error_result(self):
        result = FactoredPolynomialEvaluator(correct_answer="(x+1)").evaluate("(x+1))")
        assert result.error_flag is True
        assert result.score == 0.0
        assert result.error_message.startswith("Could not parse answer")

    def test_unbalanced_correct_answer_raises(self):
        evaluator = FactoredPolynomialEvaluator(correct_answer="(x+1")
        with pytest.raises(FactorParseError):
            evaluator.evaluate("(x+1)")

    def test_blank_answer(self):
        result = FactoredPolynomialEvaluator(correct_answer="(x+1)").evaluate("")
        assert result.answer_message == "No answer was entered"

    def test_large_power_gets_plain_incorrect(self):
        evaluator = FactoredPolynomialEvaluator(correct_answer="(x+1)^{2000}")
        result = evaluator.evaluate("(x+2)^{2000}")
        assert result.answer_message == "Incorrect."

    def test_equivalent_above_degree_limit_gets_no_hint(self):
        evaluator = FactoredPolynomialEvaluator(
            correct_answer="(x+1)(x-1)", max_expansion_degree=1
        )
        assert evaluator.evaluate("x^2-1").answer_message == "Incorrect."

    def test_overflowing_coefficient_is_graded_incorrect(self):
        result = FactoredPolynomialEvaluator(correct_answer="(x+1)").evaluate(
            "(" + "1" * 400 + "x+1)"
        )
        assert result.correct is False
        assert result.error_flag is False
        assert result.answer_message == "Incorrect."


class TestExpandsEqual:

    def test_product_matches_expansion(self):
        assert expands_equal(parse_factored_latex("(x+1)(x-1)"), parse_factored_latex("x^2-1"))

    def test_different_products(self):
        assert not expands_equal(parse_factored_latex("(x+1)^2"), parse_factored_latex("x^2+1"))

    def test_expansion_degree(self):
        assert expansion_degree(parse_factored_latex("(x+1)^2(x^3-1)")) == 5
        assert expansion_degree(parse_factored_latex("(x^{-2}+1)^3")) == 6
        assert expansion_degree(parse_factored_latex("4")) == 0

    def test_degree_limit_skips_expansion(self):
        first = parse_factored_latex("(x+1)(x-1)")
        second = parse_factored_latex("x^2-1")
        assert expands_equal(first, second, max_degree=2)
        assert not expands_equal(first, second, max_degree=1)

    def test_overflowed_coefficient_is_not_expanded(self):
        huge = parse_factored_latex("(" + "1" * 400 + "x+1)")
        assert not expands_equal(huge, parse_factored_latex("(x+1)"))

    def test_nan_coefficient_is_not_expanded(self):
        nan = parse_factored_latex("(" + "1" * 400 + "x-" + "1" * 400 + "x)")
        assert not expands_equal(nan, nan)

    def test_decimal_coefficients(self):
        assert expands_equal(parse_factored_latex("0.5(2x+4)"), parse_factored_latex("(x+2)"))


class TestEvaluatorRegistry:

    def test_global_registry_types(self):
        assert {"polynomial", "factored"} <= set(get_registered_types())
        assert get_evaluator("factored") is FactoredPolynomialEvaluator

    def test_create_evaluator_with_options(self):
        evaluator = create_evaluator("polynomial", "x+1", require_simplified=False)
        assert isinstance(evaluator, PolynomialEvaluator)
        assert evaluator.require_simplified is False

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            create_evaluator("numeric", "1")

    def test_register_rejects_non_evaluators(self):
        registry = EvaluatorRegistry()
        with pytest.raises(TypeError):
            registry.register("bad", int)

    def test_registries_are_independent(self):
        first = EvaluatorRegistry()
        second = EvaluatorRegistry()
        first.register("polynomial", PolynomialEvaluator)
        assert second.get_registered_types() == []

    def test_base_class_is_abstract(self):
        with pytest.raises(TypeError):
            AnswerEvaluator(correct_answer="x")

    def test_evaluator_fields_are_declared_options(self):
        assert set(FactoredPolynomialEvaluator.model_fields) == {
            "correct_answer",
            "check_expansion",
            "max_expansion_degree",
        }
        assert set(PolynomialEvaluator.model_fields) == {"correct_answer", "require_simplified"}
