"""Condition evaluation."""

from formlogic.conditions.evaluator import (
    RuleEvaluator,
    is_empty,
    is_not_empty,
    strict_equals,
)

__all__ = [
    "RuleEvaluator",
    "is_empty",
    "is_not_empty",
    "strict_equals",
]
