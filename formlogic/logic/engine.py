"""Conditional logic engine.

Resolves, for every question, whether it is visible, required and
disabled given the current responses. Resolved state is cached per
question and invalidated only along dependency edges when a response
changes, so answering one question never forces the whole form to be
recomputed.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from formlogic.conditions import RuleEvaluator
from formlogic.dependencies import DependencyGraph
from formlogic.diagnostics import DiagnosticsCollector, EngineDiagnostic
from formlogic.registry.models import (
    Condition,
    ConditionAction,
    Question,
    Response,
)

logger = logging.getLogger(__name__)


class QuestionState(BaseModel):
    """Derived state of one question."""

    model_config = ConfigDict(frozen=True)

    visible: bool = True
    required: bool = False
    disabled: bool = False

    @classmethod
    def default(cls) -> "QuestionState":
        """Neutral state used for unknown questions."""
        return cls(visible=True, required=False, disabled=False)


class ConditionalLogicEngine:
    """Evaluates question conditions against a snapshot of responses.

    Questions and responses are copied on construction; the caller's
    objects are never mutated and later changes to them are not seen.
    Use update_response() to record a new answer.

    The engine is synchronous and single-writer: interleave reads with
    serial update_response() calls.
    """

    def __init__(
        self,
        questions: Iterable[Question | dict[str, Any]],
        responses: Mapping[str, Response | dict[str, Any]] | None = None,
        evaluator: RuleEvaluator | None = None,
        collector: DiagnosticsCollector | None = None,
    ) -> None:
        """Index questions and responses.

        Args:
            questions: Question definitions in declaration order. Definitions that
                fail validation are skipped and recorded as INVALID_QUESTION.
            responses: Mapping of question id to its current response.
            evaluator: Optional rule evaluator. Defaults to one reporting
                into this engine's collector.
            collector: Optional diagnostics collector.
        """
        self.collector = collector if collector is not None else DiagnosticsCollector()
        self.evaluator = evaluator if evaluator is not None else RuleEvaluator(self.collector)

        self._questions: dict[str, Question] = {}
        for index, raw in enumerate(questions):
            try:
                question = _as_question(raw)
            except ValidationError as e:
                self._reject_question(index, raw, e)
                continue
            if question.id in self._questions:
                logger.warning("Duplicate question id %s; later definition wins", question.id)
                self.collector.add_warning(
                    stage="loading",
                    code="DUPLICATE_QUESTION_ID",
                    message=f"Question {question.id} is defined more than once",
                    question_id=question.id,
                )
            self._questions[question.id] = question

        self._responses: dict[str, Response] = {}
        for question_id, raw in (responses or {}).items():
            self._responses[question_id] = _as_response(raw)

        self._visibility_cache: dict[str, bool] = {}
        self._required_cache: dict[str, bool] = {}
        self._disabled_cache: dict[str, bool] = {}

        self.graph = DependencyGraph(self._questions.values())

        self.collector.question_count = len(self._questions)
        self.collector.response_count = len(self._responses)
        self._check_references()
        self._check_cycles()

    def _reject_question(self, index: int, raw: Any, error: ValidationError) -> None:
        question_id = raw.get("id") if isinstance(raw, Mapping) else None
        first = error.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        logger.warning("Question %d (%s) skipped: %s: %s", index, question_id, location, first["msg"])
        self.collector.add_error(
            stage="loading",
            code="INVALID_QUESTION",
            message=f"Question {index} failed validation at {location}: {first['msg']}",
            question_id=question_id if isinstance(question_id, str) else None,
            details={"index": index, "error_count": error.error_count()},
        )

    def _check_references(self) -> None:
        for question in self._questions.values():
            for index, condition in enumerate(question.conditions):
                if condition.question_id in self._questions:
                    continue
                logger.warning(
                    "Question %s condition %d references unknown question %s",
                    question.id,
                    index,
                    condition.question_id,
                )
                self.collector.add_warning(
                    stage="loading",
                    code="UNKNOWN_QUESTION_REFERENCE",
                    message=(
                        f"Condition references unknown question {condition.question_id}; "
                        "it is evaluated against an absent value"
                    ),
                    question_id=question.id,
                    condition_index=index,
                    details={"referenced_question_id": condition.question_id},
                )

    def _check_cycles(self) -> None:
        for question_id in self.graph.cyclic_questions():
            logger.warning("Question %s is part of a dependency cycle", question_id)
            self.collector.add_warning(
                stage="dependencies",
                code="DEPENDENCY_CYCLE",
                message=f"Question {question_id} depends on itself through its conditions",
                question_id=question_id,
            )

    @property
    def question_ids(self) -> list[str]:
        """Known question ids in declaration order."""
        return list(self._questions)

    def get_question(self, question_id: str) -> Question | None:
        return self._questions.get(question_id)

    def get_response(self, question_id: str) -> Response | None:
        """Return a copy of the stored response for a question."""
        response = self._responses.get(question_id)
        return response.model_copy(deep=True) if response is not None else None

    def _evaluate_conditions(self, question: Question) -> Iterator[tuple[int, Condition, bool]]:
        """Yield (index, condition, met) for each condition in declaration order."""
        for index, condition in enumerate(question.conditions):
            response = self._responses.get(condition.question_id)
            value = response.value if response is not None else None
            met = self.evaluator.evaluate(
                condition,
                value,
                question_id=question.id,
                condition_index=index,
            )
            yield index, condition, met

    def get_question_state(self, question_id: str) -> QuestionState:
        """Resolve visible/required/disabled for one question.

        Conditions are applied as a left-to-right fold and each action
        overwrites its field, so the last condition touching a field
        decides it:

        - show: visible when met, hidden otherwise
        - hide: hidden when met, visible otherwise
        - require: required when met, else the question's own flag
        - disable: disabled when met, enabled otherwise
        - enable: enabled when met, disabled otherwise

        Args:
            question_id: The question to resolve.

        Returns:
            The QuestionState. Unknown ids get the neutral default.
        """
        question = self._questions.get(question_id)
        if question is None:
            logger.debug("State requested for unknown question %s", question_id)
            return QuestionState.default()

        if question_id in self._visibility_cache:
            return QuestionState(
                visible=self._visibility_cache[question_id],
                required=self._required_cache[question_id],
                disabled=self._disabled_cache[question_id],
            )

        visible = True
        required = question.required
        disabled = False

        for index, condition, met in self._evaluate_conditions(question):
            try:
                action = ConditionAction(condition.action)
            except ValueError:
                logger.warning(
                    "Unknown condition action %r on question %s (condition %d)",
                    condition.action,
                    question_id,
                    index,
                )
                self.collector.add_warning(
                    stage="resolution",
                    code="UNKNOWN_ACTION",
                    message=f"Unknown condition action: {condition.action}",
                    question_id=question_id,
                    condition_index=index,
                    details={"action": str(condition.action)},
                )
                continue

            if action == ConditionAction.SHOW:
                visible = met
            elif action == ConditionAction.HIDE:
                visible = not met
            elif action == ConditionAction.REQUIRE:
                required = question.required or met
            elif action == ConditionAction.DISABLE:
                disabled = met
            elif action == ConditionAction.ENABLE:
                disabled = not met

        self._visibility_cache[question_id] = visible
        self._required_cache[question_id] = required
        self._disabled_cache[question_id] = disabled

        return QuestionState(visible=visible, required=required, disabled=disabled)

    def get_states(self) -> dict[str, QuestionState]:
        """Resolved state of every question, in declaration order."""
        return {question_id: self.get_question_state(question_id) for question_id in self._questions}

    def get_visible_questions(self) -> set[str]:
        """Ids of every question whose resolved state is visible."""
        return {
            question_id
            for question_id in self._questions
            if self.get_question_state(question_id).visible
        }

    def get_required_questions(self) -> set[str]:
        """Ids of every visible question that is required."""
        required: set[str] = set()
        for question_id in self._questions:
            state = self.get_question_state(question_id)
            if state.visible and state.required:
                required.add(question_id)
        return required

    def get_dependent_questions(self, question_id: str) -> set[str]:
        """Questions whose state may change when question_id's answer changes."""
        return self.graph.get_dependents(question_id)

    def clear_cache(self, question_id: str) -> set[str]:
        """Drop cached state for a question and its dependents.

        Returns:
            The ids that were invalidated.
        """
        invalidated = {question_id} | self.get_dependent_questions(question_id)
        for qid in invalidated:
            self._visibility_cache.pop(qid, None)
            self._required_cache.pop(qid, None)
            self._disabled_cache.pop(qid, None)
        logger.debug("Invalidated %d cached states after change to %s", len(invalidated), question_id)
        return invalidated

    def update_response(self, question_id: str, response: Response | dict[str, Any]) -> None:
        """Store a new response and invalidate the affected cached states."""
        self._responses[question_id] = _as_response(response)
        self.collector.response_count = len(self._responses)
        self.clear_cache(question_id)

    def get_evaluation_path(self, question_id: str) -> list[str]:
        """Describe how each condition on a question evaluated.

        One line per condition, in declaration order, e.g.
        ``"Age greater-than 18 → require (MET)"``. For debugging only.
        """
        question = self._questions.get(question_id)
        if question is None:
            return []

        path: list[str] = []
        for _index, condition, met in self._evaluate_conditions(question):
            referenced = self._questions.get(condition.question_id)
            label = referenced.text if referenced is not None and referenced.text else condition.question_id
            parts = [label, _format_token(condition.operator)]
            if condition.value is not None:
                parts.append(_format_operand(condition.value))
            status = "MET" if met else "NOT MET"
            path.append(f"{' '.join(parts)} → {_format_token(condition.action)} ({status})")
        return path

    @property
    def diagnostics(self) -> EngineDiagnostic:
        """Finalized diagnostics report for this engine."""
        return self.collector.finalize()


def _as_question(raw: Question | dict[str, Any]) -> Question:
    if isinstance(raw, Question):
        return raw.model_copy(deep=True)
    return Question.model_validate(raw).model_copy(deep=True)


def _as_response(raw: Response | dict[str, Any]) -> Response:
    if isinstance(raw, Response):
        return raw.model_copy(deep=True)
    return Response.model_validate(raw).model_copy(deep=True)


def _format_token(token: Any) -> str:
    return token.value if hasattr(token, "value") else str(token)


def _format_operand(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_format_operand(item) for item in value)
    return str(value)
