"""Conditional visibility and requirement engine."""

from formlogic.logic.engine import ConditionalLogicEngine, QuestionState

__all__ = ["ConditionalLogicEngine", "QuestionState"]
