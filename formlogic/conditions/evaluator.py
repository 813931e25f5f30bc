"""Rule evaluator for conditional logic.

Decides whether a single condition is met by the current answer of the
question it references. Comparisons are strictly typed: a type mismatch
means "not met", never an error. Booleans are not numbers, and a string
is never treated as a sequence of characters.
"""

import logging
from collections.abc import Callable
from typing import Any

from formlogic.diagnostics import DiagnosticsCollector
from formlogic.registry.models import Condition, ConditionOperator

logger = logging.getLogger(__name__)


def is_number(value: Any) -> bool:
    """Whether a value is an int or float (bool excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_sequence(value: Any) -> bool:
    """Whether a value is a list or tuple."""
    return isinstance(value, (list, tuple))


def strict_equals(left: Any, right: Any) -> bool:
    """Equality that refuses to compare values of different kinds.

    Numbers compare across int/float; sequences compare element-wise with
    the same rule.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if is_number(left) and is_number(right):
        return left == right
    if is_sequence(left) and is_sequence(right):
        return len(left) == len(right) and all(
            strict_equals(a, b) for a, b in zip(left, right)
        )
    if left is None or right is None:
        return left is None and right is None
    if type(left) is not type(right):
        return False
    return left == right


def strict_contains(sequence: list | tuple, item: Any) -> bool:
    """Membership test using strict_equals."""
    return any(strict_equals(element, item) for element in sequence)


def is_empty(value: Any) -> bool:
    """None, a blank string, or an empty sequence."""
    if value is None:
        return True
    if is_sequence(value):
        return len(value) == 0
    if isinstance(value, str):
        return value.strip() == ""
    return False


def is_not_empty(value: Any) -> bool:
    """Inverse of is_empty, spelled out per kind.

    Any value that is not None, a string or a sequence (numbers, booleans,
    structured answers) counts as present.
    """
    if value is None:
        return False
    if is_sequence(value):
        return len(value) > 0
    if isinstance(value, str):
        return value.strip() != ""
    return True


class RuleEvaluator:
    """Evaluates conditions against referenced answer values.

    Unknown operators are reported through the logger and the diagnostics
    collector and evaluate to not met. The evaluator never raises.
    """

    def __init__(self, collector: DiagnosticsCollector | None = None) -> None:
        """Initialize the evaluator.

        Args:
            collector: Optional collector that receives UNKNOWN_OPERATOR warnings.
        """
        self.collector = collector
        self._handlers: dict[ConditionOperator, Callable[[Any, Any], bool]] = {
            ConditionOperator.EQUALS: self._equals,
            ConditionOperator.NOT_EQUALS: self._not_equals,
            ConditionOperator.CONTAINS: self._contains,
            ConditionOperator.NOT_CONTAINS: self._not_contains,
            ConditionOperator.GREATER_THAN: self._greater_than,
            ConditionOperator.LESS_THAN: self._less_than,
            ConditionOperator.GREATER_THAN_OR_EQUAL: self._greater_than_or_equal,
            ConditionOperator.LESS_THAN_OR_EQUAL: self._less_than_or_equal,
            ConditionOperator.IN: self._in,
            ConditionOperator.NOT_IN: self._not_in,
            ConditionOperator.IS_EMPTY: lambda value, _operand: is_empty(value),
            ConditionOperator.IS_NOT_EMPTY: lambda value, _operand: is_not_empty(value),
        }

    def evaluate(
        self,
        condition: Condition,
        value: Any,
        question_id: str | None = None,
        condition_index: int | None = None,
    ) -> bool:
        """Return whether the condition is met by the referenced value.

        Args:
            condition: The condition to evaluate.
            value: Current answer of condition.question_id, or None when absent.
            question_id: Question declaring the condition, for diagnostics.
            condition_index: Position of the condition, for diagnostics.

        Returns:
            True if the condition is met.
        """
        try:
            operator = ConditionOperator(condition.operator)
        except ValueError:
            self._report_unknown_operator(condition, question_id, condition_index)
            return False
        return self._handlers[operator](value, condition.value)

    def _report_unknown_operator(
        self,
        condition: Condition,
        question_id: str | None,
        condition_index: int | None,
    ) -> None:
        logger.warning(
            "Unknown condition operator %r on question %s (condition %s)",
            condition.operator,
            question_id,
            condition_index,
        )
        if self.collector is not None:
            self.collector.add_warning(
                stage="evaluation",
                code="UNKNOWN_OPERATOR",
                message=f"Unknown condition operator: {condition.operator}",
                question_id=question_id,
                condition_index=condition_index,
                details={"operator": str(condition.operator)},
            )

    @staticmethod
    def _equals(value: Any, operand: Any) -> bool:
        return strict_equals(value, operand)

    @staticmethod
    def _not_equals(value: Any, operand: Any) -> bool:
        return not strict_equals(value, operand)

    @staticmethod
    def _contains(value: Any, operand: Any) -> bool:
        if isinstance(value, str) and isinstance(operand, str):
            return operand in value
        if is_sequence(value):
            return strict_contains(value, operand)
        return False

    @staticmethod
    def _not_contains(value: Any, operand: Any) -> bool:
        if isinstance(value, str) and isinstance(operand, str):
            return operand not in value
        if is_sequence(value):
            return not strict_contains(value, operand)
        return True

    @staticmethod
    def _greater_than(value: Any, operand: Any) -> bool:
        return is_number(value) and is_number(operand) and value > operand

    @staticmethod
    def _less_than(value: Any, operand: Any) -> bool:
        return is_number(value) and is_number(operand) and value < operand

    @staticmethod
    def _greater_than_or_equal(value: Any, operand: Any) -> bool:
        return is_number(value) and is_number(operand) and value >= operand

    @staticmethod
    def _less_than_or_equal(value: Any, operand: Any) -> bool:
        return is_number(value) and is_number(operand) and value <= operand

    @staticmethod
    def _in(value: Any, operand: Any) -> bool:
        if not is_sequence(operand):
            return False
        return strict_contains(operand, value)

    @staticmethod
    def _not_in(value: Any, operand: Any) -> bool:
        # A malformed operand fails closed for not-in as well.
        if not is_sequence(operand):
            return False
        return not strict_contains(operand, value)
