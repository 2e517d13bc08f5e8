"""
Answer evaluation for typed polynomial answers.

Provides:
- AnswerResult: score, feedback and parse errors for one answer
- AnswerEvaluator / EvaluatorRegistry: pluggable, type-dispatched checkers
- PolynomialEvaluator ("polynomial") and FactoredPolynomialEvaluator ("factored")
"""

from .answer_hash import AnswerResult
from .evaluator import (
    AnswerEvaluator,
    EvaluatorRegistry,
    create_evaluator,
    get_evaluator,
    get_registered_types,
    register_evaluator,
)
from .evaluators import FactoredPolynomialEvaluator, PolynomialEvaluator

register_evaluator(PolynomialEvaluator.answer_type, PolynomialEvaluator)
register_evaluator(FactoredPolynomialEvaluator.answer_type, FactoredPolynomialEvaluator)

__all__ = [
    "AnswerResult",
    "AnswerEvaluator",
    "EvaluatorRegistry",
    "create_evaluator",
    "get_evaluator",
    "get_registered_types",
    "register_evaluator",
    "PolynomialEvaluator",
    "FactoredPolynomialEvaluator",
]
