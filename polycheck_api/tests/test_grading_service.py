"""
Grading service tests.
"""

import pytest

from polycheck_api.core.errors import (
    AnswerParseError,
    GradingError,
    UnsupportedAnswerTypeError,
)
from polycheck_api.models import AnswerSubmission
from polycheck_api.services import GradingService


def submission(answer_type: str, correct: str, student: str) -> AnswerSubmission:
    return AnswerSubmission(
        answer_type=answer_type, correct_answer=correct, student_answer=student
    )


class TestParsing:

    def test_parse_polynomial(self, service):
        polynomial = service.parse_polynomial("x^2 - 3x + 2")
        assert polynomial.to_latex() == "x^{2}-3x+2"

    def test_parse_factored(self, service):
        factored = service.parse_factored("[x-2](x+2)")
        assert len(factored.factors) == 2

    def test_parse_factored_error(self, service):
        with pytest.raises(AnswerParseError) as exc_info:
            service.parse_factored("((x+1)")
        assert exc_info.value.status_code == 422
        assert exc_info.value.details["position"] == 0

    def test_compare_factored(self, service):
        assert service.compare_factored("(x+1)^2(x-3)", "(x-3)(x+1)(x+1)")
        assert not service.compare_factored("(x+1)^2", "(x+1)^3")


class TestGrade:

    def test_polynomial_correct(self, service):
        feedback = service.grade(submission("polynomial", "x^2-1", "-1+x^2"))
        assert feedback.correct is True
        assert feedback.answer_type == "polynomial"
        assert feedback.preview == "x^{2}-1"
        assert feedback.error_message is None

    def test_polynomial_unsimplified(self, service):
        feedback = service.grade(submission("polynomial", "3x", "x+2x"))
        assert feedback.score == 0.0
        assert feedback.message == "Combine like terms in your answer"

    def test_require_simplified_off(self):
        service = GradingService(require_simplified=False)
        feedback = service.grade(submission("polynomial", "3x", "x+2x"))
        assert feedback.correct is True

    def test_factored_equivalent_hint(self, service):
        feedback = service.grade(submission("factored", "(x+1)(x-1)", "x^2-1"))
        assert feedback.correct is False
        assert feedback.message == "Your answer is equivalent but not factored the same way"
        assert feedback.metadata["factors"] == {"1,x,2;-1,x,0": 1}

    def test_unknown_type(self, service):
        with pytest.raises(UnsupportedAnswerTypeError) as exc_info:
            service.grade(submission("numeric", "1", "1"))
        assert exc_info.value.status_code == 400

    def test_malformed_correct_answer(self, service):
        with pytest.raises(AnswerParseError):
            service.grade(submission("factored", "(x+1]", "(x+1)"))

    def test_unexpected_failure_becomes_grading_error(self, service, monkeypatch):
        from polycheck.answer import PolynomialEvaluator

        def broken(self, student_answer):
            raise RuntimeError("boom")

        monkeypatch.setattr(PolynomialEvaluator, "evaluate", broken)
        with pytest.raises(GradingError) as exc_info:
            service.grade(submission("polynomial", "x", "x"))
        assert exc_info.value.status_code == 500
        assert exc_info.value.details["error"] == "boom"

    def test_expansion_hint_disabled(self):
        service = GradingService(expansion_hint=False)
        feedback = service.grade(submission("factored", "(x+1)(x-1)", "x^2-1"))
        assert feedback.message == "Incorrect."

    def test_overflowing_coefficient_is_graded_not_failed(self, service):
        feedback = service.grade(submission("factored", "(x+1)", "(" + "1" * 400 + "x+1)"))
        assert feedback.correct is False
        assert feedback.message == "Incorrect."

    def test_large_power_skips_expansion(self, service):
        feedback = service.grade(submission("factored", "(x+1)^{2000}", "(x+2)^{2000}"))
        assert feedback.message == "Incorrect."
